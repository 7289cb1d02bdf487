"""Storage backend subtree: ``backend nvme controller {create,delete,get,list}``."""

from __future__ import annotations

import argparse
import logging
from contextlib import closing

from opi_cli.cli import exit_codes
from opi_cli.cli.console import console
from opi_cli.cli.flags import add_connection_flags, add_delete_flags, add_paging_flags
from opi_cli.cli.printer import print_nvme_controller
from opi_cli.config import Settings
from opi_cli.core.deadline import Deadline
from opi_cli.core.models import MULTIPATH_MODES
from opi_cli.core.nvme_service import NvmeControllerService
from opi_cli.core.protocols import NvmeControllerClient, NvmeControllerClientFactory

LOG = logging.getLogger(__name__)


def _client_factory() -> NvmeControllerClientFactory:
    from opi_cli.infra.nvme_client import GrpcNvmeControllerClient

    return GrpcNvmeControllerClient


def _connect(address: str) -> NvmeControllerClient:
    LOG.debug("connecting to NVMe controller service at %s", address)
    return _client_factory()(address)


def _handle_create(args: argparse.Namespace) -> int:
    deadline = Deadline(args.timeout)
    with closing(_connect(args.addr)) as client:
        controller = NvmeControllerService(client, deadline).create(
            args.id, args.multipath, hdgst=args.hdgst, ddgst=args.ddgst,
        )
    print_nvme_controller(controller, heading="Created NVMe controller:")
    return exit_codes.SUCCESS


def _handle_delete(args: argparse.Namespace) -> int:
    deadline = Deadline(args.timeout)
    with closing(_connect(args.addr)) as client:
        NvmeControllerService(client, deadline).delete(args.name, args.allow_missing)
    console.print(f"Deleted NVMe controller: {args.name}", markup=False)
    return exit_codes.SUCCESS


def _handle_get(args: argparse.Namespace) -> int:
    deadline = Deadline(args.timeout)
    with closing(_connect(args.addr)) as client:
        controller = NvmeControllerService(client, deadline).get(args.name)
    print_nvme_controller(controller, heading="Get NVMe controller:")
    return exit_codes.SUCCESS


def _handle_list(args: argparse.Namespace) -> int:
    deadline = Deadline(args.timeout)
    with closing(_connect(args.addr)) as client:
        service = NvmeControllerService(client, deadline)
        console.print("list NVMe controllers:", markup=False)
        for controller in service.list(
            page_size=args.pagesize,
            page_token=args.pagetoken,
            max_pages=args.max_pages,
        ):
            print_nvme_controller(controller, heading="NVMe controller with:")
    return exit_codes.SUCCESS


def register(subparsers: argparse._SubParsersAction, settings: Settings) -> None:
    """Attach the controller verbs to the ``controller`` group's *subparsers*."""
    create = subparsers.add_parser(
        "create",
        help="Create an NVMe controller representing an external NVMe device",
        description="Create an NVMe controller representing an external NVMe device",
    )
    create.add_argument("--id", default="", help="id for the created resource; assigned by the server if omitted")
    create.add_argument(
        "--multipath",
        default="disable",
        choices=MULTIPATH_MODES,
        help="multipath mode (default: disable)",
    )
    create.add_argument("--hdgst", action="store_true", help="enable header digest")
    create.add_argument("--ddgst", action="store_true", help="enable data digest")
    add_connection_flags(create, settings)
    create.set_defaults(handler=_handle_create)

    delete = subparsers.add_parser(
        "delete", help="Delete an NVMe controller", description="Delete an NVMe controller",
    )
    add_delete_flags(delete, "controller")
    add_connection_flags(delete, settings)
    delete.set_defaults(handler=_handle_delete)

    get = subparsers.add_parser(
        "get", help="Show details of an NVMe controller", description="Show details of an NVMe controller",
    )
    get.add_argument("-n", "--name", required=True, help="name of the controller")
    add_connection_flags(get, settings)
    get.set_defaults(handler=_handle_get)

    list_ = subparsers.add_parser(
        "list", help="Show details of all NVMe controllers", description="Show details of all NVMe controllers",
    )
    add_paging_flags(list_)
    add_connection_flags(list_, settings)
    list_.set_defaults(handler=_handle_list)
