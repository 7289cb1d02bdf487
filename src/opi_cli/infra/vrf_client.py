"""gRPC implementation of :class:`~opi_cli.core.protocols.VrfClient`.

Talks to the OPI EVPN gateway ``VrfService``.  Short VRF ids are
expanded to full resource names here, CLI prefix strings are converted
to wire ``IPPrefix`` messages, and responses are converted to
:class:`~opi_cli.core.models.Vrf` before they leave this module.
"""

from __future__ import annotations

from collections.abc import Sequence
from types import ModuleType
from typing import Any

from opi_cli.core.models import ComponentStatus, Page, Vrf
from opi_cli.infra.grpc_channel import GrpcAdapter, enum_name, import_stubs
from opi_cli.utils.ipaddr import compose_ip_prefix, parse_ip_prefix
from opi_cli.utils.names import vrf_name

VRF_PB2 = "opi_api.network.evpn_gw.v1alpha1.l3_xpu_infra_mgr_pb2"
VRF_PB2_GRPC = "opi_api.network.evpn_gw.v1alpha1.l3_xpu_infra_mgr_pb2_grpc"
NET_TYPES_PB2 = "opi_api.network.opinetcommon.v1alpha1.networktypes_pb2"
FIELD_MASK_PB2 = "google.protobuf.field_mask_pb2"

# IpAf values of the OPI network types
_AF_INET = 1
_AF_INET6 = 2


def load_vrf_stubs() -> tuple[ModuleType, ModuleType, ModuleType, ModuleType]:
    """Return ``(pb2, pb2_grpc, net_types_pb2, field_mask_pb2)``."""
    pb2, pb2_grpc, types_pb2, mask_pb2 = import_stubs(
        VRF_PB2, VRF_PB2_GRPC, NET_TYPES_PB2, FIELD_MASK_PB2,
    )
    return pb2, pb2_grpc, types_pb2, mask_pb2


# ---------------------------------------------------------------------------
# Wire <-> domain conversion
# ---------------------------------------------------------------------------

def prefix_to_proto(types_pb2: ModuleType, text: str) -> Any:
    """Build an ``IPPrefix`` message from ``"a.b.c.d/len"``."""
    prefix = parse_ip_prefix(text)
    if prefix.version == 4:
        addr = types_pb2.IPAddress(af=_AF_INET, v4_addr=prefix.address)
    else:
        addr = types_pb2.IPAddress(af=_AF_INET6, v6_addr=prefix.packed())
    return types_pb2.IPPrefix(addr=addr, len=prefix.length)


def prefix_from_proto(message: Any) -> str:
    addr = message.addr
    if addr.af == _AF_INET6:
        return compose_ip_prefix(6, bytes(addr.v6_addr), message.len)
    return compose_ip_prefix(4, addr.v4_addr, message.len)


def vrf_from_proto(message: Any) -> Vrf:
    """Convert a wire ``Vrf`` message into the domain model."""
    spec = message.spec
    status = message.status

    loopback = (
        prefix_from_proto(spec.loopback_ip_prefix)
        if spec.HasField("loopback_ip_prefix")
        else None
    )
    vtep = (
        prefix_from_proto(spec.vtep_ip_prefix)
        if spec.HasField("vtep_ip_prefix")
        else None
    )
    components = tuple(
        ComponentStatus(
            name=comp.name,
            status=enum_name(comp, "status"),
            details=comp.details,
        )
        for comp in status.components
    )
    return Vrf(
        name=message.name,
        vni=spec.vni if spec.HasField("vni") else None,
        loopback=loopback,
        vtep=vtep,
        oper_status=enum_name(status, "oper_status"),
        components=components,
    )


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------

class GrpcVrfClient(GrpcAdapter):
    """Concrete :class:`VrfClient` backed by the OPI ``VrfService`` stub.

    Usage::

        with GrpcVrfClient("localhost:50151") as client:
            vrf = client.get_vrf("blue", timeout=10)
    """

    def __init__(self, address: str) -> None:
        self._pb2, pb2_grpc, self._types, self._mask = load_vrf_stubs()
        super().__init__(address)
        self._stub: Any = pb2_grpc.VrfServiceStub(self._channel)

    def create_vrf(
        self,
        name: str,
        vni: int | None,
        loopback: str,
        vtep: str,
        *,
        timeout: float | None = None,
    ) -> Vrf:
        spec_fields: dict[str, Any] = {
            "loopback_ip_prefix": prefix_to_proto(self._types, loopback),
        }
        if vni is not None:
            spec_fields["vni"] = vni
        if vtep:
            spec_fields["vtep_ip_prefix"] = prefix_to_proto(self._types, vtep)

        request = self._pb2.CreateVrfRequest(
            vrf_id=name,
            vrf=self._pb2.Vrf(spec=self._pb2.VrfSpec(**spec_fields)),
        )
        return vrf_from_proto(self._invoke(self._stub.CreateVrf, request, timeout))

    def delete_vrf(
        self,
        name: str,
        allow_missing: bool,
        *,
        timeout: float | None = None,
    ) -> None:
        request = self._pb2.DeleteVrfRequest(
            name=vrf_name(name),
            allow_missing=allow_missing,
        )
        self._invoke(self._stub.DeleteVrf, request, timeout)

    def get_vrf(self, name: str, *, timeout: float | None = None) -> Vrf:
        request = self._pb2.GetVrfRequest(name=vrf_name(name))
        return vrf_from_proto(self._invoke(self._stub.GetVrf, request, timeout))

    def list_vrfs(
        self,
        page_size: int,
        page_token: str,
        *,
        timeout: float | None = None,
    ) -> Page[Vrf]:
        request = self._pb2.ListVrfsRequest(page_size=page_size, page_token=page_token)
        response = self._invoke(self._stub.ListVrfs, request, timeout)
        return Page(
            items=tuple(vrf_from_proto(vrf) for vrf in response.vrfs),
            next_page_token=response.next_page_token,
        )

    def update_vrf(
        self,
        name: str,
        update_mask: Sequence[str],
        allow_missing: bool,
        *,
        timeout: float | None = None,
    ) -> Vrf:
        request = self._pb2.UpdateVrfRequest(
            vrf=self._pb2.Vrf(name=vrf_name(name)),
            update_mask=self._mask.FieldMask(paths=list(update_mask)),
            allow_missing=allow_missing,
        )
        return vrf_from_proto(self._invoke(self._stub.UpdateVrf, request, timeout))
