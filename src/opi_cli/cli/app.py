"""CLI application entry point and command tree for opi-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~opi_cli.exceptions.OpiCliError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, printing a single diagnostic line and
returning well-defined exit codes.

Command tree
------------
::

    opi-cli
    ├── create-vrf | delete-vrf | get-vrf | list-vrfs | update-vrf
    ├── backend (b)
    │   └── nvme (n)
    │       └── controller (c)
    │           └── create | delete | get | list
    └── doctor

A group invoked without a subcommand prints its own help and exits 0.
"""

from __future__ import annotations

import argparse
import logging
import sys

from opi_cli.cli import exit_codes, nvme_commands, vrf_commands
from opi_cli.cli.console import console, escape, get_rich_console
from opi_cli.cli.flags import add_connection_flags
from opi_cli.config import Settings, load_settings
from opi_cli.exceptions import OpiCliError
from opi_cli.version import __version__

LOG = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool) -> None:
    """Send log records to stderr; Rich-formatted when Rich is installed."""
    level = logging.DEBUG if verbose else logging.WARNING
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)
        return
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=get_rich_console(), show_path=False)],
    )


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_group(
    subparsers: argparse._SubParsersAction,
    name: str,
    help_text: str,
    aliases: list[str],
) -> argparse._SubParsersAction:
    """Add a parent command that prints its help when invoked bare."""
    parser = subparsers.add_parser(
        name, aliases=aliases, help=help_text, description=help_text,
    )
    parser.set_defaults(handler=None, help_parser=parser)
    return parser.add_subparsers(title="commands", metavar="<command>")


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from opi_cli.cli.doctor import run_doctor

    return run_doctor(args.addr, args.timeout)


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Construct the full, fixed command tree."""
    parser = argparse.ArgumentParser(
        prog="opi-cli",
        description="Manage storage and network resources on an OPI gRPC server.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    parser.set_defaults(handler=None, help_parser=parser)

    commands = parser.add_subparsers(title="commands", metavar="<command>")

    vrf_commands.register(commands, settings)

    backend = _add_group(commands, "backend", "Manage storage backend resources", ["b"])
    nvme = _add_group(backend, "nvme", "Manage NVMe backend resources", ["n"])
    controller = _add_group(nvme, "controller", "Manage NVMe controllers", ["c"])
    nvme_commands.register(controller, settings)

    doctor = commands.add_parser(
        "doctor",
        help="Check the local environment and server reachability",
        description="Check the local environment and server reachability",
    )
    add_connection_flags(doctor, settings)
    doctor.set_defaults(handler=_handle_doctor)

    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the opi-cli CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    OpiCliError
        Any command failure; :func:`cli` maps it to an exit code.
    SystemExit
        From argparse for ``--help``, ``--version`` and usage errors.
    """
    settings = load_settings()
    parser = _build_parser(settings)
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.handler is None:
        args.help_parser.print_help()
        return exit_codes.SUCCESS

    LOG.debug("dispatching %s", args.handler.__name__)
    return args.handler(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except OpiCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
