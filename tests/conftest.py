"""Shared pytest fixtures and configuration for the opi-cli test suite.

Guidelines
----------
* No network access in any test.
* gRPC is mocked at the infra boundary; commands run against in-memory
  fake clients that record every call.
* Tests must not depend on OS state (``OPI_CLI_*`` env vars are cleared).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from opi_cli.core.models import NvmeController, Page, Vrf


def make_vrf(**overrides: Any) -> Vrf:
    defaults: dict[str, Any] = {
        "name": "//network.opiproject.org/vrfs/blue",
        "vni": 1000,
        "loopback": "10.0.0.1/32",
        "vtep": "10.1.0.1/32",
        "oper_status": "VRF_OPER_STATUS_UP",
    }
    defaults.update(overrides)
    return Vrf(**defaults)


def make_controller(**overrides: Any) -> NvmeController:
    defaults: dict[str, Any] = {
        "name": "//storage.opiproject.org/nvmeRemoteControllers/nvme0",
        "multipath": "disable",
        "hdgst": False,
        "ddgst": False,
    }
    defaults.update(overrides)
    return NvmeController(**defaults)


class FakeVrfClient:
    """In-memory :class:`VrfClient` recording every call.

    ``pages`` are returned by successive ``list_vrfs`` calls.  ``error``
    is raised by every call, or only by the ``fail_at``-th list call
    (1-based) when that is set.
    """

    def __init__(
        self,
        *,
        vrf: Vrf | None = None,
        pages: Sequence[Page[Vrf]] = (),
        error: Exception | None = None,
        fail_at: int = 0,
    ) -> None:
        self.vrf = vrf or make_vrf()
        self.pages = list(pages)
        self.error = error
        self.fail_at = fail_at
        self.calls: list[tuple[Any, ...]] = []
        self.timeouts: list[float | None] = []
        self.closed = False

    def _record(self, *call: Any, timeout: float | None) -> None:
        self.calls.append(call)
        self.timeouts.append(timeout)
        if self.error is not None and not self.fail_at:
            raise self.error

    def create_vrf(self, name, vni, loopback, vtep, *, timeout=None):
        self._record("create_vrf", name, vni, loopback, vtep, timeout=timeout)
        return self.vrf

    def delete_vrf(self, name, allow_missing, *, timeout=None):
        self._record("delete_vrf", name, allow_missing, timeout=timeout)

    def get_vrf(self, name, *, timeout=None):
        self._record("get_vrf", name, timeout=timeout)
        return self.vrf

    def list_vrfs(self, page_size, page_token, *, timeout=None):
        self._record("list_vrfs", page_size, page_token, timeout=timeout)
        list_calls = sum(1 for call in self.calls if call[0] == "list_vrfs")
        if self.error is not None and self.fail_at == list_calls:
            raise self.error
        return self.pages.pop(0)

    def update_vrf(self, name, update_mask, allow_missing, *, timeout=None):
        self._record("update_vrf", name, list(update_mask), allow_missing, timeout=timeout)
        return self.vrf

    def close(self) -> None:
        self.closed = True


class FakeNvmeControllerClient:
    """In-memory :class:`NvmeControllerClient` recording every call."""

    def __init__(
        self,
        *,
        controller: NvmeController | None = None,
        pages: Sequence[Page[NvmeController]] = (),
        error: Exception | None = None,
    ) -> None:
        self.controller = controller or make_controller()
        self.pages = list(pages)
        self.error = error
        self.calls: list[tuple[Any, ...]] = []
        self.closed = False

    def _record(self, *call: Any) -> None:
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    def create_controller(self, controller_id, multipath, hdgst, ddgst, *, timeout=None):
        self._record("create_controller", controller_id, multipath, hdgst, ddgst)
        return self.controller

    def delete_controller(self, name, allow_missing, *, timeout=None):
        self._record("delete_controller", name, allow_missing)

    def get_controller(self, name, *, timeout=None):
        self._record("get_controller", name)
        return self.controller

    def list_controllers(self, page_size, page_token, *, timeout=None):
        self._record("list_controllers", page_size, page_token)
        return self.pages.pop(0)

    def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPI_CLI_ADDR", raising=False)
    monkeypatch.delenv("OPI_CLI_TIMEOUT", raising=False)


@pytest.fixture
def vrf_client() -> FakeVrfClient:
    return FakeVrfClient()


@pytest.fixture
def connect_vrf(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Route ``GrpcVrfClient(addr)`` to a fake; returns the addresses used.

    Tests assign ``connect_vrf.client`` before invoking a command.
    """
    class _Recorder(list):
        client: Any = None

    recorder = _Recorder()

    def _factory(address: str) -> Any:
        recorder.append(address)
        return recorder.client

    monkeypatch.setattr("opi_cli.infra.vrf_client.GrpcVrfClient", _factory)
    return recorder


@pytest.fixture
def connect_nvme(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Route ``GrpcNvmeControllerClient(addr)`` to a fake."""

    class _Recorder(list):
        client: Any = None

    recorder = _Recorder()

    def _factory(address: str) -> Any:
        recorder.append(address)
        return recorder.client

    monkeypatch.setattr(
        "opi_cli.infra.nvme_client.GrpcNvmeControllerClient", _factory,
    )
    return recorder
