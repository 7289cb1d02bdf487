"""Resource-name helpers.

The server addresses resources by full names such as
``//network.opiproject.org/vrfs/blue``.  Users type the short id
(``blue``); these helpers expand an id into its full name.
"""

from __future__ import annotations

NETWORK_DOMAIN: str = "network.opiproject.org"
STORAGE_DOMAIN: str = "storage.opiproject.org"

VRF_COLLECTION: str = "vrfs"
NVME_CONTROLLER_COLLECTION: str = "nvmeRemoteControllers"


def full_name(domain: str, collection: str, resource_id: str) -> str:
    """Return ``//<domain>/<collection>/<resource_id>``.

    Names that are already fully qualified (leading ``//``) and empty ids
    are returned unchanged.
    """
    if not resource_id or resource_id.startswith("//"):
        return resource_id
    return f"//{domain}/{collection}/{resource_id}"


def vrf_name(resource_id: str) -> str:
    return full_name(NETWORK_DOMAIN, VRF_COLLECTION, resource_id)


def nvme_controller_name(resource_id: str) -> str:
    return full_name(STORAGE_DOMAIN, NVME_CONTROLLER_COLLECTION, resource_id)
