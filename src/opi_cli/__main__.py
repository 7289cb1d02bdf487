"""Allow ``python -m opi_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m opi_cli`` behaves identically to the ``opi-cli``
console script.
"""

from __future__ import annotations

from opi_cli.cli.app import cli

if __name__ == "__main__":
    cli()
