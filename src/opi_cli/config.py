"""opi-cli configuration defaults.

Every default can be overridden by the matching environment variable;
flags given on the command line always win over both.

Example::

    export OPI_CLI_ADDR=dpu.example.net:50151
    export OPI_CLI_TIMEOUT=30
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from opi_cli.exceptions import InvalidArgumentError

DEFAULT_ADDR: str = "localhost:50151"
"""Address of the OPI gRPC server used when neither flag nor env is set."""

DEFAULT_TIMEOUT: float = 10.0
"""Seconds allowed for a whole command, shared by every call it makes."""

ADDR_ENV: str = "OPI_CLI_ADDR"
TIMEOUT_ENV: str = "OPI_CLI_TIMEOUT"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved process-wide defaults for the command tree."""

    addr: str = DEFAULT_ADDR
    timeout: float = DEFAULT_TIMEOUT


def parse_timeout(raw: str) -> float:
    """Parse a positive number of seconds.

    Raises
    ------
    InvalidArgumentError
        If *raw* is not a finite, strictly positive number.
    """
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidArgumentError(f"invalid timeout {raw!r}: not a number") from exc
    if not math.isfinite(value):
        raise InvalidArgumentError(f"invalid timeout {raw!r}: must be finite")
    if value <= 0:
        raise InvalidArgumentError(f"invalid timeout {raw!r}: must be positive")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *environ* (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ

    addr = env.get(ADDR_ENV, "").strip() or DEFAULT_ADDR

    raw_timeout = env.get(TIMEOUT_ENV, "").strip()
    timeout = parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT

    return Settings(addr=addr, timeout=timeout)
