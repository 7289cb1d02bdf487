"""gRPC plumbing shared by the OPI adapters.

This module is the **only** place in the codebase that imports ``grpc``.
Generated OPI stubs are imported lazily through :func:`import_stubs` so
that ``--help``, ``--version`` and ``doctor`` keep working when they are
not installed.
"""

from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Any

from opi_cli.exceptions import (
    ConnectionFailedError,
    EnvironmentError,
    OpiCliError,
    RequestFailedError,
    ResourceNotFoundError,
)

LOG = logging.getLogger(__name__)

_STUBS_HINT = "Install the generated OPI stubs with: pip install 'opi-cli[opi]'"


def import_grpc() -> ModuleType:
    """Return the ``grpc`` module or raise ``EnvironmentError``."""
    try:
        import grpc
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "grpcio is not installed. Install with: pip install grpcio",
        ) from exc
    return grpc


def import_stubs(*module_names: str) -> tuple[ModuleType, ...]:
    """Import generated OPI protobuf modules by dotted name."""
    modules: list[ModuleType] = []
    for name in module_names:
        try:
            modules.append(importlib.import_module(name))
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                f"OPI API stubs are not installed (missing {name}).",
                hint=_STUBS_HINT,
            ) from exc
    return tuple(modules)


def open_channel(address: str) -> Any:
    """Open an insecure channel to *address*.

    Channel creation is lazy in gRPC: an unreachable server surfaces on
    the first call, not here.

    Raises
    ------
    ConnectionFailedError
        If *address* is empty or gRPC rejects it.
    """
    grpc = import_grpc()
    if not address.strip():
        raise ConnectionFailedError(
            "could not create gRPC client: empty server address",
            hint="Pass --addr host:port.",
        )
    try:
        channel = grpc.insecure_channel(address)
    except Exception as exc:
        raise ConnectionFailedError(
            f"could not create gRPC client: {exc}",
        ) from exc
    LOG.debug("opened gRPC channel to %s", address)
    return channel


def probe_server(address: str, timeout: float) -> bool:
    """Return ``True`` when a channel to *address* becomes ready in time."""
    grpc = import_grpc()
    channel = open_channel(address)
    try:
        grpc.channel_ready_future(channel).result(timeout=timeout)
    except grpc.FutureTimeoutError:
        return False
    finally:
        channel.close()
    return True


def map_rpc_error(exc: Exception) -> OpiCliError:
    """Translate a ``grpc.RpcError`` into a typed domain exception.

    The returned exception is raised by the caller with ``from exc``.
    """
    grpc = import_grpc()
    code = exc.code() if hasattr(exc, "code") else None
    details = exc.details() if hasattr(exc, "details") else None
    message = details or str(exc) or type(exc).__name__
    if code is not None:
        message = f"{code.name}: {message}"

    if code == grpc.StatusCode.NOT_FOUND:
        return ResourceNotFoundError(
            message,
            hint="Pass --allowMissing to ignore missing resources.",
        )
    if code == grpc.StatusCode.DEADLINE_EXCEEDED:
        return RequestFailedError(
            message,
            hint="Raise --timeout or check that the server is responsive.",
        )
    if code == grpc.StatusCode.UNAVAILABLE:
        return RequestFailedError(
            message,
            hint="Check that the OPI server is running and --addr is correct.",
        )
    return RequestFailedError(message)


def enum_name(message: Any, field: str) -> str:
    """Return the symbolic name of enum *field* on a protobuf *message*."""
    value = getattr(message, field)
    descriptor = getattr(message, "DESCRIPTOR", None)
    if descriptor is None:
        return str(value)
    enum_type = descriptor.fields_by_name[field].enum_type
    enum_value = enum_type.values_by_number.get(value)
    return enum_value.name if enum_value is not None else str(value)


class GrpcAdapter:
    """Base for adapters that own one channel and one service stub.

    Adapters are context managers; the channel is closed on exit.
    """

    def __init__(self, address: str) -> None:
        self.address: str = address
        self._grpc: ModuleType = import_grpc()
        self._channel: Any = open_channel(address)

    def _invoke(self, method: Any, request: Any, timeout: float | None) -> Any:
        """Call one unary stub *method*, mapping gRPC failures."""
        LOG.debug("calling %s on %s (timeout=%s)", type(request).__name__, self.address, timeout)
        try:
            return method(request, timeout=timeout)
        except self._grpc.RpcError as exc:
            raise map_rpc_error(exc) from exc

    def close(self) -> None:
        self._channel.close()

    def __enter__(self) -> GrpcAdapter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
