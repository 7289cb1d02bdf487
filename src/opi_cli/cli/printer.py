"""Human-readable rendering of resource records.

``format_*`` functions are pure and return the lines; ``print_*``
functions emit them through the console.  Server-provided values are
printed with markup disabled so brackets in names are shown verbatim.
"""

from __future__ import annotations

from opi_cli.cli.console import console
from opi_cli.core.models import NvmeController, Vrf


def format_vrf(vrf: Vrf) -> list[str]:
    """Return the ``name: value`` block for *vrf*.

    An unset VNI is shown as ``0``; unset prefixes as empty values.
    """
    lines = [
        f"name: {vrf.name}",
        f"operation status: {vrf.oper_status}",
        f"vni: {vrf.vni if vrf.vni is not None else 0}",
        f"loopback ip: {vrf.loopback or ''}",
        f"vtep ip: {vrf.vtep or ''}",
        "Component Status:",
    ]
    for comp in vrf.components:
        lines.append(f"  name: {comp.name} status: {comp.status} details: {comp.details}")
    return lines


def format_nvme_controller(controller: NvmeController) -> list[str]:
    return [
        f"name: {controller.name}",
        f"multipath: {controller.multipath}",
        f"hdgst: {str(controller.hdgst).lower()}",
        f"ddgst: {str(controller.ddgst).lower()}",
    ]


def _emit(lines: list[str], heading: str | None) -> None:
    if heading:
        console.print(heading, markup=False)
    for line in lines:
        console.print(line, markup=False)


def print_vrf(vrf: Vrf, heading: str | None = None) -> None:
    _emit(format_vrf(vrf), heading)


def print_nvme_controller(controller: NvmeController, heading: str | None = None) -> None:
    _emit(format_nvme_controller(controller), heading)
