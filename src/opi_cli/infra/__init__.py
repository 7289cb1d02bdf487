"""Infrastructure layer: gRPC integration with the OPI server.

This layer wraps all interaction with ``grpcio`` and the generated OPI
stubs.  Every raw third-party exception must be caught here and
re-raised as an :class:`~opi_cli.exceptions.OpiCliError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must satisfy the protocols declared in ``opi_cli.core.protocols``.
"""

from opi_cli.infra.grpc_channel import GrpcAdapter, map_rpc_error, open_channel, probe_server
from opi_cli.infra.nvme_client import GrpcNvmeControllerClient
from opi_cli.infra.vrf_client import GrpcVrfClient

__all__: list[str] = [
    "GrpcAdapter",
    "GrpcNvmeControllerClient",
    "GrpcVrfClient",
    "map_rpc_error",
    "open_channel",
    "probe_server",
]
