"""Shared utilities: resource naming and address helpers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""
