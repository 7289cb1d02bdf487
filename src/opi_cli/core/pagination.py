"""Paginated list retrieval.

The loop threads the server's opaque page token through consecutive
calls until the server returns an empty token.  The token is never
built or inspected locally.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TypeVar

from opi_cli.core.deadline import Deadline
from opi_cli.core.models import Page
from opi_cli.exceptions import PaginationLimitError

LOG = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[..., Page[T]]
"""``fetch(page_size, page_token, *, timeout=...) -> Page``"""


def iter_pages(
    fetch: PageFetcher[T],
    deadline: Deadline,
    *,
    page_size: int = 0,
    page_token: str = "",
    max_pages: int = 0,
) -> Iterator[Page[T]]:
    """Yield pages from *fetch* until the server returns an empty token.

    Pages are fetched lazily: a page is requested only after the caller
    has consumed the previous one, so anything already rendered stays
    visible if a later page fails.  Errors from *fetch* propagate
    unchanged; there is no retry.

    Parameters
    ----------
    fetch:
        Adapter list method.
    deadline:
        Shared by all pages; each call gets ``deadline.remaining()``.
    page_size:
        Requested page size; ``0`` lets the server choose.
    page_token:
        Token to start from; ``""`` starts at the beginning.
    max_pages:
        Upper bound on page calls; ``0`` means unbounded.

    Raises
    ------
    PaginationLimitError
        If the server still reports more pages after *max_pages* calls.
    """
    token = page_token
    fetched = 0
    while True:
        if max_pages and fetched >= max_pages:
            raise PaginationLimitError(
                f"listing still incomplete after {max_pages} page(s)",
                hint="Raise --max-pages or set it to 0 for no limit.",
            )
        LOG.debug("fetching page %d (size=%d, token=%r)", fetched + 1, page_size, token)
        page = fetch(page_size, token, timeout=deadline.remaining())
        fetched += 1
        yield page
        if not page.has_more:
            return
        token = page.next_page_token


def iter_items(
    fetch: PageFetcher[T],
    deadline: Deadline,
    *,
    page_size: int = 0,
    page_token: str = "",
    max_pages: int = 0,
) -> Iterator[T]:
    """Flatten :func:`iter_pages` into items, in server order."""
    for page in iter_pages(
        fetch,
        deadline,
        page_size=page_size,
        page_token=page_token,
        max_pages=max_pages,
    ):
        yield from page.items
