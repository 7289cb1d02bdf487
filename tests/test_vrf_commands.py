"""CLI integration tests for the VRF verbs.

``GrpcVrfClient`` is replaced by an in-memory fake at the infra
boundary; commands run through :func:`opi_cli.cli.app.main`.
"""

from __future__ import annotations

from typing import Any

import pytest

from conftest import FakeVrfClient, make_vrf
from opi_cli.cli import exit_codes
from opi_cli.cli.app import main
from opi_cli.core.models import ComponentStatus, Page
from opi_cli.exceptions import ConnectionFailedError, OpiCliError, RequestFailedError


@pytest.fixture
def client(connect_vrf: Any, vrf_client: FakeVrfClient) -> FakeVrfClient:
    connect_vrf.client = vrf_client
    return vrf_client


# ---------------------------------------------------------------------------
# create-vrf
# ---------------------------------------------------------------------------

class TestCreateVrf:
    def test_missing_loopback_is_rejected_before_connecting(self, connect_vrf: Any) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["create-vrf", "--name", "blue"])
        assert exc_info.value.code == exit_codes.USAGE_ERROR
        assert list(connect_vrf) == []

    def test_vni_zero_is_sent_as_unset(self, client: FakeVrfClient) -> None:
        code = main(["create-vrf", "--loopback", "10.0.0.1/32", "--vni", "0"])
        assert code == exit_codes.SUCCESS
        assert client.calls == [("create_vrf", "", None, "10.0.0.1/32", "")]

    def test_vni_five_is_sent(self, client: FakeVrfClient) -> None:
        main(["create-vrf", "-n", "blue", "-v", "5", "--loopback", "10.0.0.1/32", "--vtep", "10.1.0.1/32"])
        assert client.calls == [("create_vrf", "blue", 5, "10.0.0.1/32", "10.1.0.1/32")]

    @pytest.mark.parametrize("bad", ["-1", "4294967296", "ten"])
    def test_vni_must_be_uint32(self, bad: str, connect_vrf: Any) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["create-vrf", "--loopback", "10.0.0.1/32", "--vni", bad])
        assert exc_info.value.code == exit_codes.USAGE_ERROR
        assert list(connect_vrf) == []

    def test_prints_created_record(
        self, client: FakeVrfClient, capsys: pytest.CaptureFixture[str],
    ) -> None:
        main(["create-vrf", "--loopback", "10.0.0.1/32"])
        err = capsys.readouterr().err
        assert "Created VRF:" in err
        assert "name: //network.opiproject.org/vrfs/blue" in err
        assert "vni: 1000" in err

    def test_default_address(self, connect_vrf: Any, client: FakeVrfClient) -> None:
        main(["create-vrf", "--loopback", "10.0.0.1/32"])
        assert list(connect_vrf) == ["localhost:50151"]

    def test_addr_flag_and_env(
        self,
        connect_vrf: Any,
        client: FakeVrfClient,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("OPI_CLI_ADDR", "dpu:9000")
        main(["get-vrf", "-n", "blue"])
        main(["get-vrf", "-n", "blue", "--addr", "other:1"])
        assert list(connect_vrf) == ["dpu:9000", "other:1"]

    def test_client_is_closed(self, client: FakeVrfClient) -> None:
        main(["create-vrf", "--loopback", "10.0.0.1/32"])
        assert client.closed


# ---------------------------------------------------------------------------
# delete / get / update
# ---------------------------------------------------------------------------

class TestOtherVerbs:
    def test_delete_allow_missing(
        self, client: FakeVrfClient, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["delete-vrf", "--name", "ghost", "--allowMissing"])
        assert code == exit_codes.SUCCESS
        assert client.calls == [("delete_vrf", "ghost", True)]
        assert "Deleted VRF: ghost" in capsys.readouterr().err

    def test_delete_defaults(self, client: FakeVrfClient) -> None:
        main(["delete-vrf", "-n", "blue"])
        assert client.calls == [("delete_vrf", "blue", False)]

    def test_get_requires_name(self, connect_vrf: Any) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["get-vrf"])
        assert exc_info.value.code == exit_codes.USAGE_ERROR
        assert list(connect_vrf) == []

    def test_get_prints_components(
        self,
        connect_vrf: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        connect_vrf.client = FakeVrfClient(vrf=make_vrf(
            vni=None,
            vtep=None,
            components=(ComponentStatus("frr", "COMP_STATUS_SUCCESS", ""),),
        ))
        main(["get-vrf", "-n", "blue"])
        err = capsys.readouterr().err
        assert "Get VRF:" in err
        assert "vni: 0" in err
        assert "Component Status:" in err
        assert "name: frr status: COMP_STATUS_SUCCESS" in err

    def test_update_mask_comma_and_repeat(self, client: FakeVrfClient) -> None:
        main([
            "update-vrf", "-n", "blue",
            "--update-mask", "spec.vni,spec.loopback_ip_prefix",
            "--update-mask", "spec.vtep_ip_prefix",
            "-a",
        ])
        assert client.calls == [(
            "update_vrf",
            "blue",
            ["spec.vni", "spec.loopback_ip_prefix", "spec.vtep_ip_prefix"],
            True,
        )]

    def test_update_without_mask_sends_empty(
        self, client: FakeVrfClient, capsys: pytest.CaptureFixture[str],
    ) -> None:
        main(["update-vrf", "-n", "blue"])
        assert client.calls == [("update_vrf", "blue", [], False)]
        assert "Updated VRF:" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# list-vrfs
# ---------------------------------------------------------------------------

class TestListVrfs:
    def test_three_pages_print_all_items_in_order(
        self,
        connect_vrf: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        client = FakeVrfClient(pages=[
            Page((make_vrf(name="vrf-a"), make_vrf(name="vrf-b")), "t1"),
            Page((make_vrf(name="vrf-c"),), "t2"),
            Page((make_vrf(name="vrf-d"),), ""),
        ])
        connect_vrf.client = client

        code = main(["list-vrfs", "--pagesize", "2"])

        assert code == exit_codes.SUCCESS
        assert [call[2] for call in client.calls] == ["", "t1", "t2"]
        err = capsys.readouterr().err
        positions = [err.index(f"name: vrf-{x}") for x in "abcd"]
        assert positions == sorted(positions)
        assert err.count("VRF with:") == 4

    def test_single_page(self, connect_vrf: Any) -> None:
        client = FakeVrfClient(pages=[Page((make_vrf(),), "")])
        connect_vrf.client = client
        main(["list-vrfs"])
        assert client.calls == [("list_vrfs", 0, "")]

    def test_pagetoken_flag_resumes(self, connect_vrf: Any) -> None:
        client = FakeVrfClient(pages=[Page((), "")])
        connect_vrf.client = client
        main(["list-vrfs", "-t", "resume", "-s", "7"])
        assert client.calls == [("list_vrfs", 7, "resume")]

    def test_hex_page_size(self, connect_vrf: Any) -> None:
        client = FakeVrfClient(pages=[Page((), "")])
        connect_vrf.client = client
        main(["list-vrfs", "--pagesize", "0x10"])
        assert client.calls == [("list_vrfs", 16, "")]

    @pytest.mark.parametrize("bad", ["-1", "2147483648", "many"])
    def test_bad_page_size_is_usage_error(self, bad: str, connect_vrf: Any) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["list-vrfs", "--pagesize", bad])
        assert exc_info.value.code == exit_codes.USAGE_ERROR
        assert list(connect_vrf) == []

    def test_failed_page_keeps_earlier_output(
        self,
        connect_vrf: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        connect_vrf.client = FakeVrfClient(
            pages=[Page((make_vrf(name="vrf-a"),), "t1")],
            error=RequestFailedError("UNAVAILABLE: gone"),
            fail_at=2,
        )
        with pytest.raises(RequestFailedError, match="failed to list vrfs"):
            main(["list-vrfs"])
        assert "name: vrf-a" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestFailures:
    @pytest.mark.parametrize(
        "argv, heading",
        [
            (["create-vrf", "--loopback", "10.0.0.1/32"], "Created VRF:"),
            (["delete-vrf", "-n", "blue"], "Deleted VRF"),
            (["get-vrf", "-n", "blue"], "Get VRF:"),
            (["update-vrf", "-n", "blue"], "Updated VRF:"),
        ],
    )
    def test_adapter_error_prints_no_success(
        self,
        argv: list[str],
        heading: str,
        connect_vrf: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        connect_vrf.client = FakeVrfClient(error=RequestFailedError("INTERNAL: boom"))
        with pytest.raises(OpiCliError):
            main(argv)
        assert heading not in capsys.readouterr().err

    def test_connection_failure_propagates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _refuse(address: str) -> Any:
            raise ConnectionFailedError("could not create gRPC client: bad target")

        monkeypatch.setattr("opi_cli.infra.vrf_client.GrpcVrfClient", _refuse)
        with pytest.raises(ConnectionFailedError):
            main(["get-vrf", "-n", "blue"])

    def test_cli_boundary_exits_with_general_error(
        self,
        connect_vrf: Any,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from opi_cli.cli.app import cli

        connect_vrf.client = FakeVrfClient(error=RequestFailedError("NOT_FOUND: blue"))
        monkeypatch.setattr("sys.argv", ["opi-cli", "get-vrf", "-n", "blue"])
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "failed to get vrf: NOT_FOUND: blue" in err
        assert "Get VRF:" not in err


def test_client_factory_is_grpc_adapter() -> None:
    from opi_cli.cli.vrf_commands import _client_factory
    from opi_cli.infra.vrf_client import GrpcVrfClient

    assert _client_factory() is GrpcVrfClient
