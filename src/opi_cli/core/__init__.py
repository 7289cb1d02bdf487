"""Core / service layer: pure request mapping and pagination.

Rules
-----
* No ``print()`` calls.
* No network I/O of its own; all calls go through injected protocols.
* No imports from ``cli`` or ``infra``.
"""

from opi_cli.core.deadline import Deadline
from opi_cli.core.models import ComponentStatus, NvmeController, Page, Vrf
from opi_cli.core.nvme_service import NvmeControllerService
from opi_cli.core.pagination import iter_items, iter_pages
from opi_cli.core.protocols import NvmeControllerClient, VrfClient
from opi_cli.core.vrf_service import VrfService

__all__: list[str] = [
    "ComponentStatus",
    "Deadline",
    "NvmeController",
    "NvmeControllerClient",
    "NvmeControllerService",
    "Page",
    "Vrf",
    "VrfClient",
    "VrfService",
    "iter_items",
    "iter_pages",
]
