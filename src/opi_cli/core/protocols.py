"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete gRPC
implementations, preserving the dependency inversion principle.

Every remote method takes a keyword-only ``timeout`` (seconds, or
``None`` for no limit) that bounds that single round trip.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from opi_cli.core.models import NvmeController, Page, Vrf


class VrfClient(Protocol):
    """Contract for VRF service backends.

    Implementations must map all backend-specific exceptions to
    :class:`~opi_cli.exceptions.OpiCliError` subclasses.
    """

    def create_vrf(
        self,
        name: str,
        vni: int | None,
        loopback: str,
        vtep: str,
        *,
        timeout: float | None = None,
    ) -> Vrf:
        """Create a VRF.  ``vni=None`` leaves the VNI unset."""
        ...  # pragma: no cover

    def delete_vrf(
        self,
        name: str,
        allow_missing: bool,
        *,
        timeout: float | None = None,
    ) -> None:
        """Delete a VRF; ``allow_missing`` suppresses not-found errors."""
        ...  # pragma: no cover

    def get_vrf(self, name: str, *, timeout: float | None = None) -> Vrf:
        ...  # pragma: no cover

    def list_vrfs(
        self,
        page_size: int,
        page_token: str,
        *,
        timeout: float | None = None,
    ) -> Page[Vrf]:
        """Return one page of VRFs starting at ``page_token``."""
        ...  # pragma: no cover

    def update_vrf(
        self,
        name: str,
        update_mask: Sequence[str],
        allow_missing: bool,
        *,
        timeout: float | None = None,
    ) -> Vrf:
        ...  # pragma: no cover

    def close(self) -> None:
        ...  # pragma: no cover


class NvmeControllerClient(Protocol):
    """Contract for storage backend NVMe controller service backends."""

    def create_controller(
        self,
        controller_id: str,
        multipath: str,
        hdgst: bool,
        ddgst: bool,
        *,
        timeout: float | None = None,
    ) -> NvmeController:
        """Create a controller.  An empty ``controller_id`` lets the server pick."""
        ...  # pragma: no cover

    def delete_controller(
        self,
        name: str,
        allow_missing: bool,
        *,
        timeout: float | None = None,
    ) -> None:
        ...  # pragma: no cover

    def get_controller(
        self, name: str, *, timeout: float | None = None
    ) -> NvmeController:
        ...  # pragma: no cover

    def list_controllers(
        self,
        page_size: int,
        page_token: str,
        *,
        timeout: float | None = None,
    ) -> Page[NvmeController]:
        ...  # pragma: no cover

    def close(self) -> None:
        ...  # pragma: no cover


VrfClientFactory = Callable[[str], VrfClient]
"""Builds a :class:`VrfClient` connected to the given server address."""

NvmeControllerClientFactory = Callable[[str], NvmeControllerClient]
"""Builds a :class:`NvmeControllerClient` connected to the given address."""
