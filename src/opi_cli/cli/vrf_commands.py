"""EVPN VRF verbs: ``create-vrf``, ``delete-vrf``, ``get-vrf``, ``list-vrfs``,
``update-vrf``.

Each handler starts the command deadline, connects, makes its call
through :class:`~opi_cli.core.vrf_service.VrfService` and prints the
result.  Errors propagate to the boundary in :mod:`opi_cli.cli.app`.
"""

from __future__ import annotations

import argparse
import logging
from contextlib import closing

from opi_cli.cli import exit_codes
from opi_cli.cli.console import console
from opi_cli.cli.flags import (
    add_connection_flags,
    add_delete_flags,
    add_paging_flags,
    field_paths,
    uint32,
)
from opi_cli.cli.printer import print_vrf
from opi_cli.config import Settings
from opi_cli.core.deadline import Deadline
from opi_cli.core.protocols import VrfClient, VrfClientFactory
from opi_cli.core.vrf_service import VrfService

LOG = logging.getLogger(__name__)


def _client_factory() -> VrfClientFactory:
    from opi_cli.infra.vrf_client import GrpcVrfClient

    return GrpcVrfClient


def _connect(address: str) -> VrfClient:
    LOG.debug("connecting to VRF service at %s", address)
    return _client_factory()(address)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _handle_create(args: argparse.Namespace) -> int:
    deadline = Deadline(args.timeout)
    with closing(_connect(args.addr)) as client:
        vrf = VrfService(client, deadline).create(
            args.name, args.vni, args.loopback, args.vtep,
        )
    print_vrf(vrf, heading="Created VRF:")
    return exit_codes.SUCCESS


def _handle_delete(args: argparse.Namespace) -> int:
    deadline = Deadline(args.timeout)
    with closing(_connect(args.addr)) as client:
        VrfService(client, deadline).delete(args.name, args.allow_missing)
    console.print(f"Deleted VRF: {args.name}", markup=False)
    return exit_codes.SUCCESS


def _handle_get(args: argparse.Namespace) -> int:
    deadline = Deadline(args.timeout)
    with closing(_connect(args.addr)) as client:
        vrf = VrfService(client, deadline).get(args.name)
    print_vrf(vrf, heading="Get VRF:")
    return exit_codes.SUCCESS


def _handle_list(args: argparse.Namespace) -> int:
    deadline = Deadline(args.timeout)
    with closing(_connect(args.addr)) as client:
        service = VrfService(client, deadline)
        console.print("list VRFs:", markup=False)
        for vrf in service.list(
            page_size=args.pagesize,
            page_token=args.pagetoken,
            max_pages=args.max_pages,
        ):
            print_vrf(vrf, heading="VRF with:")
    return exit_codes.SUCCESS


def _handle_update(args: argparse.Namespace) -> int:
    deadline = Deadline(args.timeout)
    with closing(_connect(args.addr)) as client:
        vrf = VrfService(client, deadline).update(
            args.name, args.update_mask or [], args.allow_missing,
        )
    print_vrf(vrf, heading="Updated VRF:")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def register(subparsers: argparse._SubParsersAction, settings: Settings) -> None:
    """Attach the five VRF verbs to *subparsers*."""
    create = subparsers.add_parser("create-vrf", help="Create a VRF", description="Create a VRF")
    create.add_argument("-n", "--name", default="", help="descriptive name")
    create.add_argument("-v", "--vni", type=uint32, default=0, help="VNI, must be unique; 0 leaves it unset")
    create.add_argument("--loopback", required=True, help="loopback IP prefix, e.g. 10.0.0.1/32")
    create.add_argument("--vtep", default="", help="VTEP IP prefix")
    add_connection_flags(create, settings)
    create.set_defaults(handler=_handle_create)

    delete = subparsers.add_parser("delete-vrf", help="Delete a VRF", description="Delete a VRF")
    add_delete_flags(delete, "VRF")
    add_connection_flags(delete, settings)
    delete.set_defaults(handler=_handle_delete)

    get = subparsers.add_parser("get-vrf", help="Show details of a VRF", description="Show details of a VRF")
    get.add_argument("-n", "--name", required=True, help="name of the VRF")
    add_connection_flags(get, settings)
    get.set_defaults(handler=_handle_get)

    list_ = subparsers.add_parser(
        "list-vrfs", help="Show details of all VRFs", description="Show details of all VRFs",
    )
    add_paging_flags(list_)
    add_connection_flags(list_, settings)
    list_.set_defaults(handler=_handle_list)

    update = subparsers.add_parser("update-vrf", help="Update a VRF", description="Update a VRF")
    update.add_argument("-n", "--name", default="", help="name of the VRF")
    update.add_argument(
        "--update-mask",
        type=field_paths,
        action="extend",
        default=None,
        help="comma-separated field paths to apply; may be repeated",
    )
    update.add_argument(
        "-a", "--allowMissing",
        dest="allow_missing",
        action="store_true",
        help="create the VRF if it does not exist",
    )
    add_connection_flags(update, settings)
    update.set_defaults(handler=_handle_update)
