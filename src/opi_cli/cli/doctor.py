"""``opi-cli doctor``: environment diagnostics command.

Gathers runtime information and renders a Rich table summarising
whether the environment can talk to an OPI server.

This module lives in the CLI layer; it may import from ``infra``
and ``core``, and it renders via Rich.  It purely collects and
displays diagnostic data.
"""

from __future__ import annotations

import importlib
import platform
import sys

from opi_cli.cli import exit_codes
from opi_cli.cli.console import console, escape
from opi_cli.exceptions import OpiCliError
from opi_cli.infra.grpc_channel import probe_server
from opi_cli.infra.nvme_client import NVME_PB2
from opi_cli.infra.vrf_client import VRF_PB2
from opi_cli.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _opi_cli_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the opi-cli version row."""
    return "opi-cli", __version__, "[green]OK[/green]"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _grpcio_check() -> tuple[str, str, str]:
    try:
        import grpc
    except ImportError:
        return "grpcio", "NOT INSTALLED", "[red]FAIL[/red]"
    return "grpcio", getattr(grpc, "__version__", "unknown"), "[green]OK[/green]"


def _opi_api_check() -> tuple[str, str, str]:
    """Both the network and storage stubs must import."""
    missing = []
    for module in (VRF_PB2, NVME_PB2):
        try:
            importlib.import_module(module)
        except ImportError:
            missing.append(module.rsplit(".", 1)[-1])
    if missing:
        return "opi-api", f"missing {', '.join(missing)}", "[red]FAIL[/red]"
    return "opi-api", "installed", "[green]OK[/green]"


def _rich_check() -> tuple[str, str, str]:
    try:
        import rich  # noqa: F401
    except ImportError:
        return "rich", "NOT INSTALLED", "[yellow]WARN[/yellow]"
    return "rich", "installed", "[green]OK[/green]"


def _server_check(addr: str, timeout: float) -> tuple[str, str, str]:
    """Return (label, value, status) for the server reachability row."""
    try:
        ready = probe_server(addr, timeout)
    except OpiCliError as exc:
        return "server", escape(f"{addr} ({exc})"), "[yellow]WARN[/yellow]"
    if ready:
        return "server", escape(addr), "[green]OK[/green]"
    return "server", escape(f"{addr} unreachable"), "[yellow]WARN[/yellow]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nopi-cli doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(addr: str, timeout: float) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  An unreachable
        server is only a warning.
    """
    checks = [
        _opi_cli_version_check(),
        _python_version_check(),
        _grpcio_check(),
        _opi_api_check(),
        _rich_check(),
        _server_check(addr, timeout),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="opi-cli doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
