"""opi-cli: command-line front-end for OPI gRPC servers.

Manages storage backend NVMe controllers and EVPN VRFs with a strict
layered architecture.
"""

from opi_cli.version import __version__

__all__: list[str] = ["__version__"]
