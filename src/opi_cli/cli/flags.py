"""Shared flag definitions and argparse type converters."""

from __future__ import annotations

import argparse

from opi_cli.config import Settings, parse_timeout
from opi_cli.core.vrf_service import UINT32_MAX
from opi_cli.exceptions import InvalidArgumentError

INT32_MAX: int = 2**31 - 1


def uint32(text: str) -> int:
    """argparse ``type=`` for unsigned 32-bit integers."""
    try:
        value = int(text, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid uint32 value: {text!r}") from exc
    if value < 0 or value > UINT32_MAX:
        raise argparse.ArgumentTypeError(
            f"value out of range for uint32: {text!r}"
        )
    return value


def page_size(text: str) -> int:
    """argparse ``type=`` for a non-negative int32 page size."""
    try:
        value = int(text, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid page size: {text!r}") from exc
    if value < 0 or value > INT32_MAX:
        raise argparse.ArgumentTypeError(f"page size out of range: {text!r}")
    return value


def non_negative(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {text!r}")
    return value


def timeout_seconds(text: str) -> float:
    try:
        return parse_timeout(text)
    except InvalidArgumentError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def field_paths(text: str) -> list[str]:
    """Split a comma-separated update mask into field paths."""
    return [path.strip() for path in text.split(",") if path.strip()]


# ---------------------------------------------------------------------------
# Flag groups
# ---------------------------------------------------------------------------

def add_connection_flags(parser: argparse.ArgumentParser, settings: Settings) -> None:
    """Add the universal ``--addr`` and ``--timeout`` flags."""
    parser.add_argument(
        "--addr",
        default=settings.addr,
        help=f"address of OPI gRPC server (default: {settings.addr})",
    )
    parser.add_argument(
        "--timeout",
        type=timeout_seconds,
        default=settings.timeout,
        help=(
            "seconds allowed for the whole command, shared by all calls "
            f"(default: {settings.timeout:g})"
        ),
    )


def add_paging_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-s", "--pagesize",
        type=page_size,
        default=0,
        help="page size to request; 0 lets the server choose",
    )
    parser.add_argument(
        "-t", "--pagetoken",
        default="",
        help="page token to start listing from",
    )
    parser.add_argument(
        "--max-pages",
        type=non_negative,
        default=0,
        help="stop with an error after this many pages; 0 means no limit",
    )


def add_delete_flags(parser: argparse.ArgumentParser, what: str) -> None:
    parser.add_argument("-n", "--name", default="", help=f"name of the {what}")
    parser.add_argument(
        "-a", "--allowMissing",
        dest="allow_missing",
        action="store_true",
        help=f"succeed even if the {what} does not exist",
    )
