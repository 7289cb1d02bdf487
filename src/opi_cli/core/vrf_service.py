"""Core VRF service: maps verb arguments onto :class:`VrfClient` calls.

The service depends on a :class:`~opi_cli.core.protocols.VrfClient`
injected at construction time together with the command's
:class:`~opi_cli.core.deadline.Deadline`.

Guarantees
----------
* Exactly one adapter call per verb (listing: one per page).
* No retries; the first error aborts the operation.
* Only :class:`~opi_cli.exceptions.OpiCliError` subclasses escape.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from opi_cli.core.deadline import Deadline
from opi_cli.core.models import Vrf
from opi_cli.core.pagination import iter_items
from opi_cli.core.protocols import VrfClient
from opi_cli.core.remote import operation_errors
from opi_cli.exceptions import InvalidArgumentError

UINT32_MAX: int = 2**32 - 1


def vni_param(vni: int) -> int | None:
    """Translate the ``--vni`` flag into the request value.

    ``0`` means "unset" and yields ``None``; there is no way to send an
    explicit zero.  Any other value must fit in an unsigned 32-bit int.
    """
    if vni < 0 or vni > UINT32_MAX:
        raise InvalidArgumentError(
            f"invalid vni {vni}: must be between 0 and {UINT32_MAX}",
        )
    return vni if vni != 0 else None


class VrfService:
    """Drives VRF create/delete/get/list/update for one command run.

    Parameters
    ----------
    client:
        Any object satisfying the :class:`VrfClient` protocol.
    deadline:
        Budget shared by every call made through this service.
    """

    def __init__(self, client: VrfClient, deadline: Deadline) -> None:
        self._client: VrfClient = client
        self._deadline: Deadline = deadline

    def create(self, name: str, vni: int, loopback: str, vtep: str) -> Vrf:
        with operation_errors("failed to create vrf"):
            vni_value = vni_param(vni)
            return self._client.create_vrf(
                name,
                vni_value,
                loopback,
                vtep,
                timeout=self._deadline.remaining(),
            )

    def delete(self, name: str, allow_missing: bool) -> None:
        with operation_errors("failed to delete vrf"):
            self._client.delete_vrf(
                name,
                allow_missing,
                timeout=self._deadline.remaining(),
            )

    def get(self, name: str) -> Vrf:
        with operation_errors("failed to get vrf"):
            return self._client.get_vrf(name, timeout=self._deadline.remaining())

    def list(
        self,
        *,
        page_size: int = 0,
        page_token: str = "",
        max_pages: int = 0,
    ) -> Iterator[Vrf]:
        """Yield every VRF across all pages, in server order.

        Items from earlier pages are yielded before later pages are
        requested; an error on any page stops the iteration.
        """
        with operation_errors("failed to list vrfs"):
            yield from iter_items(
                self._client.list_vrfs,
                self._deadline,
                page_size=page_size,
                page_token=page_token,
                max_pages=max_pages,
            )

    def update(
        self,
        name: str,
        update_mask: Sequence[str],
        allow_missing: bool,
    ) -> Vrf:
        with operation_errors("failed to update vrf"):
            return self._client.update_vrf(
                name,
                list(update_mask),
                allow_missing,
                timeout=self._deadline.remaining(),
            )
