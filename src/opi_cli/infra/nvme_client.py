"""gRPC implementation of :class:`~opi_cli.core.protocols.NvmeControllerClient`.

Talks to the OPI storage ``NvmeRemoteControllerService``.
"""

from __future__ import annotations

from types import ModuleType
from typing import Any

from opi_cli.core.models import NvmeController, Page
from opi_cli.infra.grpc_channel import GrpcAdapter, enum_name, import_stubs
from opi_cli.utils.names import nvme_controller_name

NVME_PB2 = "opi_api.storage.v1.backend_nvme_tcp_pb2"
NVME_PB2_GRPC = "opi_api.storage.v1.backend_nvme_tcp_pb2_grpc"

# NvmeMultipath enum values on the wire
_MULTIPATH_TO_WIRE: dict[str, int] = {
    "disable": 1,
    "failover": 2,
    "multipath": 3,
}
_WIRE_PREFIX = "NVME_MULTIPATH_"


def load_nvme_stubs() -> tuple[ModuleType, ModuleType]:
    """Return ``(pb2, pb2_grpc)`` for the storage backend service."""
    pb2, pb2_grpc = import_stubs(NVME_PB2, NVME_PB2_GRPC)
    return pb2, pb2_grpc


def controller_from_proto(message: Any) -> NvmeController:
    """Convert a wire ``NvmeRemoteController`` into the domain model."""
    wire_mode = enum_name(message, "multipath")
    if wire_mode.startswith(_WIRE_PREFIX):
        mode = wire_mode[len(_WIRE_PREFIX):].lower()
    else:
        mode = {v: k for k, v in _MULTIPATH_TO_WIRE.items()}.get(
            message.multipath, "unspecified"
        )
    return NvmeController(
        name=message.name,
        multipath=mode,
        hdgst=bool(message.hdgst),
        ddgst=bool(message.ddgst),
    )


class GrpcNvmeControllerClient(GrpcAdapter):
    """Concrete :class:`NvmeControllerClient` backed by the OPI storage stub."""

    def __init__(self, address: str) -> None:
        self._pb2, pb2_grpc = load_nvme_stubs()
        super().__init__(address)
        self._stub: Any = pb2_grpc.NvmeRemoteControllerServiceStub(self._channel)

    def create_controller(
        self,
        controller_id: str,
        multipath: str,
        hdgst: bool,
        ddgst: bool,
        *,
        timeout: float | None = None,
    ) -> NvmeController:
        request = self._pb2.CreateNvmeRemoteControllerRequest(
            nvme_remote_controller_id=controller_id,
            nvme_remote_controller=self._pb2.NvmeRemoteController(
                multipath=_MULTIPATH_TO_WIRE[multipath],
                hdgst=hdgst,
                ddgst=ddgst,
            ),
        )
        response = self._invoke(self._stub.CreateNvmeRemoteController, request, timeout)
        return controller_from_proto(response)

    def delete_controller(
        self,
        name: str,
        allow_missing: bool,
        *,
        timeout: float | None = None,
    ) -> None:
        request = self._pb2.DeleteNvmeRemoteControllerRequest(
            name=nvme_controller_name(name),
            allow_missing=allow_missing,
        )
        self._invoke(self._stub.DeleteNvmeRemoteController, request, timeout)

    def get_controller(
        self, name: str, *, timeout: float | None = None
    ) -> NvmeController:
        request = self._pb2.GetNvmeRemoteControllerRequest(
            name=nvme_controller_name(name),
        )
        response = self._invoke(self._stub.GetNvmeRemoteController, request, timeout)
        return controller_from_proto(response)

    def list_controllers(
        self,
        page_size: int,
        page_token: str,
        *,
        timeout: float | None = None,
    ) -> Page[NvmeController]:
        request = self._pb2.ListNvmeRemoteControllersRequest(
            page_size=page_size,
            page_token=page_token,
        )
        response = self._invoke(self._stub.ListNvmeRemoteControllers, request, timeout)
        return Page(
            items=tuple(
                controller_from_proto(ctrl) for ctrl in response.nvme_remote_controllers
            ),
            next_page_token=response.next_page_token,
        )
