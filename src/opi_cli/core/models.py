"""Domain models for opi-cli.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependency on
the generated protobuf classes; the infrastructure layer converts wire
messages into these before anything else sees them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Network: VRF
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ComponentStatus:
    """Per-component realisation status reported for a resource."""

    name: str
    status: str
    details: str = ""


@dataclass(frozen=True, slots=True)
class Vrf:
    """A Virtual Routing and Forwarding instance as reported by the server."""

    name: str
    """Full resource name (e.g. ``//network.opiproject.org/vrfs/blue``)."""

    vni: int | None
    """VXLAN Network Identifier, or ``None`` when unset."""

    loopback: str | None
    """Loopback IP prefix in ``a.b.c.d/len`` form."""

    vtep: str | None
    """VTEP IP prefix in ``a.b.c.d/len`` form, or ``None`` when unset."""

    oper_status: str = "UNSPECIFIED"
    components: tuple[ComponentStatus, ...] = ()


# ---------------------------------------------------------------------------
# Storage: NVMe remote controller
# ---------------------------------------------------------------------------

MULTIPATH_MODES: tuple[str, ...] = ("disable", "failover", "multipath")
"""Accepted values for the NVMe controller multipath mode."""


@dataclass(frozen=True, slots=True)
class NvmeController:
    """A storage backend NVMe remote controller."""

    name: str
    multipath: str
    """One of :data:`MULTIPATH_MODES`, or ``"unspecified"``."""

    hdgst: bool = False
    """Header digest enabled."""

    ddgst: bool = False
    """Data digest enabled."""


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of a list response.

    ``next_page_token`` is an opaque server cursor.  An empty token means
    the listing is complete.
    """

    items: tuple[T, ...]
    next_page_token: str = ""

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return len(self.items) > 0

    @property
    def has_more(self) -> bool:
        return self.next_page_token != ""
