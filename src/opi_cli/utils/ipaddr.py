"""IP prefix helpers for the ``a.b.c.d/len`` strings used on the CLI."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

from opi_cli.exceptions import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class IpPrefix:
    """A parsed address plus prefix length."""

    version: int
    """``4`` or ``6``."""

    address: int
    """Address as an integer (network byte order value)."""

    length: int

    def packed(self) -> bytes:
        """Address as big-endian bytes (4 or 16 of them)."""
        if self.version == 4:
            return ipaddress.IPv4Address(self.address).packed
        return ipaddress.IPv6Address(self.address).packed

    def __str__(self) -> str:
        if self.version == 4:
            addr = ipaddress.IPv4Address(self.address)
        else:
            addr = ipaddress.IPv6Address(self.address)
        return f"{addr}/{self.length}"


def parse_ip_prefix(text: str) -> IpPrefix:
    """Parse ``"10.0.0.1/32"`` (or a bare address) into an :class:`IpPrefix`.

    A bare address gets the full host length (32 or 128).  The host bits
    are kept as given; this is an interface address, not a network.

    Raises
    ------
    InvalidArgumentError
        If *text* is not a valid IPv4 or IPv6 address or prefix.
    """
    try:
        iface = ipaddress.ip_interface(text.strip())
    except ValueError as exc:
        raise InvalidArgumentError(
            f"invalid IP prefix {text!r}",
            hint="Use the form a.b.c.d/len, e.g. 10.0.0.1/32.",
        ) from exc
    return IpPrefix(
        version=iface.version,
        address=int(iface.ip),
        length=iface.network.prefixlen,
    )


def compose_ip_prefix(version: int, address: int | bytes, length: int) -> str:
    """Render a wire-level address back to ``a.b.c.d/len``.

    IPv4 arrives as an integer, IPv6 as 16 packed bytes.
    """
    if version == 6:
        addr = ipaddress.IPv6Address(address)
    else:
        addr = ipaddress.IPv4Address(address)
    return f"{addr}/{length}"
