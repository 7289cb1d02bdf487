"""Command-wide deadline shared by every remote call a command makes."""

from __future__ import annotations

import time
from collections.abc import Callable

from opi_cli.exceptions import RequestFailedError


class Deadline:
    """A fixed point in time after which no further calls may start.

    One instance is created when a command starts.  Each remote call asks
    :meth:`remaining` for its gRPC timeout, so a paginated listing shares
    a single budget across all of its pages.

    Parameters
    ----------
    seconds:
        Budget measured from construction.
    clock:
        Monotonic clock; injectable for tests.
    """

    def __init__(
        self,
        seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self.seconds: float = seconds
        self._expires_at: float = clock() + seconds

    def remaining(self) -> float:
        """Return seconds left for the next call.

        Raises
        ------
        RequestFailedError
            When the deadline has already passed.
        """
        left = self._expires_at - self._clock()
        if left <= 0:
            raise RequestFailedError(
                f"deadline of {self.seconds:g}s exceeded",
                hint="Raise --timeout or check that the server is responsive.",
            )
        return left

    @property
    def expired(self) -> bool:
        return self._clock() >= self._expires_at
