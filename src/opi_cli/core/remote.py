"""Safe boundary around adapter calls.

Services wrap every adapter call in :func:`operation_errors` so that the
error reaching the CLI names the failed operation and is always an
:class:`~opi_cli.exceptions.OpiCliError`.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from opi_cli.exceptions import OpiCliError, RequestFailedError, with_operation


@contextmanager
def operation_errors(operation: str) -> Iterator[None]:
    """Re-raise anything escaping the block as an operation-tagged error.

    * :class:`OpiCliError` keeps its class and hint; only the message is
      prefixed with *operation*.
    * Any other exception becomes :class:`RequestFailedError`.
    """
    try:
        yield
    except OpiCliError as exc:
        raise with_operation(operation, exc) from exc
    except Exception as exc:
        raise RequestFailedError(
            f"{operation}: unexpected client error: {exc}",
        ) from exc
