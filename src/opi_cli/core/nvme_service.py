"""Core NVMe controller service for the storage backend subtree."""

from __future__ import annotations

from collections.abc import Iterator

from opi_cli.core.deadline import Deadline
from opi_cli.core.models import MULTIPATH_MODES, NvmeController
from opi_cli.core.pagination import iter_items
from opi_cli.core.protocols import NvmeControllerClient
from opi_cli.core.remote import operation_errors
from opi_cli.exceptions import InvalidArgumentError


class NvmeControllerService:
    """Drives NVMe controller create/delete/get/list for one command run.

    Parameters
    ----------
    client:
        Any object satisfying the :class:`NvmeControllerClient` protocol.
    deadline:
        Budget shared by every call made through this service.
    """

    def __init__(self, client: NvmeControllerClient, deadline: Deadline) -> None:
        self._client: NvmeControllerClient = client
        self._deadline: Deadline = deadline

    def create(
        self,
        controller_id: str,
        multipath: str,
        *,
        hdgst: bool = False,
        ddgst: bool = False,
    ) -> NvmeController:
        with operation_errors("failed to create nvme controller"):
            mode = multipath.lower()
            if mode not in MULTIPATH_MODES:
                raise InvalidArgumentError(
                    f"invalid multipath mode {multipath!r}",
                    hint=f"Choose one of: {', '.join(MULTIPATH_MODES)}.",
                )
            return self._client.create_controller(
                controller_id,
                mode,
                hdgst,
                ddgst,
                timeout=self._deadline.remaining(),
            )

    def delete(self, name: str, allow_missing: bool) -> None:
        with operation_errors("failed to delete nvme controller"):
            self._client.delete_controller(
                name,
                allow_missing,
                timeout=self._deadline.remaining(),
            )

    def get(self, name: str) -> NvmeController:
        with operation_errors("failed to get nvme controller"):
            return self._client.get_controller(
                name, timeout=self._deadline.remaining()
            )

    def list(
        self,
        *,
        page_size: int = 0,
        page_token: str = "",
        max_pages: int = 0,
    ) -> Iterator[NvmeController]:
        with operation_errors("failed to list nvme controllers"):
            yield from iter_items(
                self._client.list_controllers,
                self._deadline,
                page_size=page_size,
                page_token=page_token,
                max_pages=max_pages,
            )
