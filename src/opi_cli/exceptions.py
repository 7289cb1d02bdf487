"""Custom exception hierarchy for opi-cli.

All exceptions that cross layer boundaries must inherit from
:class:`OpiCliError`.  Raw third-party exceptions (e.g. ``grpc.RpcError``)
must NEVER propagate beyond the infrastructure layer; they are caught
there and re-raised as a typed subclass defined here.

Hierarchy
---------
OpiCliError
├── ConnectionFailedError
├── RequestFailedError
│   └── ResourceNotFoundError
├── InvalidArgumentError
├── PaginationLimitError
└── EnvironmentError
"""

from __future__ import annotations


class OpiCliError(Exception):
    """Base exception for all opi-cli errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a single
    diagnostic line without leaking a stack trace.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Transport -------------------------------------------------------------

class ConnectionFailedError(OpiCliError):
    """Raised when a client connection to the server cannot be set up."""


class RequestFailedError(OpiCliError):
    """Raised when a remote call returns an error or its deadline expires."""


class ResourceNotFoundError(RequestFailedError):
    """Raised when the server reports the named resource does not exist."""


# --- Local validation ------------------------------------------------------

class InvalidArgumentError(OpiCliError):
    """Raised when a flag value fails local validation."""


class PaginationLimitError(OpiCliError):
    """Raised when a listing needs more pages than the configured cap."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(OpiCliError):
    """Raised when a required runtime dependency is not available."""


def with_operation(operation: str, exc: OpiCliError) -> OpiCliError:
    """Return a copy of *exc* whose message is prefixed by *operation*.

    The exception class and hint are preserved so callers can still
    match on the specific subclass.
    """
    prefix = f"{operation}: "
    message = str(exc)
    if message.startswith(prefix):
        return exc
    return type(exc)(prefix + message, hint=exc.hint)
