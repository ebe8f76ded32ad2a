# -*- coding: utf-8 -*-
import json
import asyncio

import pytest
from requests.exceptions import ConnectionError as RequestsConnectionError

from hyperv_mcp import cli
from hyperv_mcp.client import scripts, vmm as vmm_module
from hyperv_mcp.client import get_vmm_client
from hyperv_mcp.models import ErrorType, MCPResult
from hyperv_mcp.server import mcp
from hyperv_mcp.tools import base as tools_base
from hyperv_mcp.tools import (
    describe_clusters,
    describe_hosts,
    describe_host_memory,
    describe_host_mpio,
    describe_vm_disks,
    set_vm_time_sync,
    create_cluster_shared_volume,
)
from hyperv_mcp.utils import PowerShellError

from conftest import CLUSTER_ROW, HOST_ROW, VM_ROW


@pytest.fixture
def patched_client(monkeypatch, client):
    monkeypatch.setattr(tools_base, "get_vmm_client", lambda: (client, None))
    return client


def run(coro) -> MCPResult:
    return asyncio.run(coro)


# =============================================================================
# 配置
# =============================================================================
@pytest.mark.parametrize("missing", ["SCVMM_SERVER", "SCVMM_USERNAME", "SCVMM_PASSWORD"])
def test_missing_configuration_aborts_before_connecting(monkeypatch, vmm_env, missing):
    monkeypatch.delenv(missing)

    def _no_connect(*args, **kwargs):
        raise AssertionError("should not connect")

    monkeypatch.setattr(vmm_module, "VMMClient", _no_connect)

    client, error = get_vmm_client()

    assert client is None
    assert error.error_type == ErrorType.MISSING_PARAMETER
    assert "SCVMM_SERVER, SCVMM_USERNAME, SCVMM_PASSWORD" in error.suggestion


def test_tool_reports_missing_configuration(monkeypatch):
    for name in ("SCVMM_SERVER", "SCVMM_USERNAME", "SCVMM_PASSWORD"):
        monkeypatch.delenv(name, raising=False)

    result = run(describe_clusters())

    assert result.success is False
    assert result.error.error_type == ErrorType.MISSING_PARAMETER


def test_get_vmm_client_uses_environment(monkeypatch, vmm_env):
    monkeypatch.setenv("SCVMM_TRANSPORT", "kerberos")
    monkeypatch.delenv("SCVMM_CERT_VALIDATION", raising=False)
    created = {}

    class _Client:
        def __init__(self, server, username, password, transport, cert_validation):
            created.update(server=server, transport=transport, cert_validation=cert_validation)

        def connect(self):
            return None

    monkeypatch.setattr(vmm_module, "VMMClient", _Client)

    client, error = get_vmm_client()

    assert error is None
    assert created == {"server": "vmm01.contoso.local", "transport": "kerberos", "cert_validation": "validate"}


# =============================================================================
# 工具层
# =============================================================================
def test_describe_clusters(patched_client, remote):
    remote.on(scripts.CLUSTERS, [CLUSTER_ROW])

    result = run(describe_clusters())

    assert result.success
    assert result.data[0].name == "HVCLUSTER01"
    assert not patched_client.is_connected()


def test_describe_hosts_optional_filter(patched_client, remote):
    remote.on(scripts.HOSTS, [HOST_ROW])

    result = run(describe_hosts(host_group=None))

    assert result.success
    assert remote.calls[0].params["HostGroup"] is None


def test_validation_happens_before_connecting(monkeypatch):
    def _no_client():
        raise AssertionError("should not connect")

    monkeypatch.setattr(tools_base, "get_vmm_client", _no_client)

    result = run(describe_host_memory(host_name=""))

    assert result.error.error_type == ErrorType.MISSING_PARAMETER
    assert result.error.parameter == "host_name"


def test_not_found_becomes_failed_result(patched_client, remote):
    remote.on(scripts.VM_DETAIL, [])

    result = run(describe_vm_disks(vm_name="ghost"))

    assert result.success is False
    assert result.error.error_type == ErrorType.RESOURCE_NOT_FOUND
    assert result.error.related_tools[0].tool_name == "describeHostVMs"


def test_remote_exception_becomes_api_error(patched_client, remote):
    remote.on(scripts.HOSTS, [HOST_ROW])
    remote.on(scripts.HOST_MPIO, PowerShellError("hv01.contoso.local", 1, "MPIO feature is not installed"))

    result = run(describe_host_mpio(host_name="hv01"))

    assert result.success is False
    assert result.error.error_type == ErrorType.API_ERROR
    assert "hv01" in result.error.message


def test_vmm_side_failure_names_the_vmm_server(patched_client, remote):
    remote.on(scripts.HOST_MEMORY, RequestsConnectionError("Connection reset by peer"))

    result = run(describe_host_memory(host_name="hv01"))

    assert result.error.error_type == ErrorType.CONNECTION_ERROR
    assert "vmm01.contoso.local" in result.error.message
    assert "hv01" not in result.error.message


def test_set_time_sync_rejects_non_bool(patched_client, remote):
    result = run(set_vm_time_sync(vm_name="web01", enabled="off"))

    assert result.error.error_type == ErrorType.INVALID_PARAMETER
    assert remote.calls == []


def test_set_time_sync_tool(patched_client, remote):
    remote.on(scripts.VM_DETAIL, [VM_ROW])
    remote.on(scripts.TIME_SYNC_GET, [{"Enabled": False}])

    result = run(set_vm_time_sync(vm_name="web01", enabled=False))

    assert result.success
    assert result.data.changed is False


def test_create_csv_validates_volume_name(patched_client, remote):
    result = run(create_cluster_shared_volume(
        cluster_name="HVCLUSTER01", host_name="hv01",
        serial_number="6005076300810C5A", volume_name="bad/name"
    ))

    assert result.error.parameter == "volume_name"
    assert remote.calls == []


def test_create_csv_request_id(patched_client, remote):
    remote.on(scripts.CLUSTERS, [CLUSTER_ROW])
    remote.on(scripts.CSV_PREPARE_DISK, [{"Number": 7, "SerialNumber": "6005076300810C5A"}])
    remote.on(scripts.CSV_REGISTER, [{"ResourceName": "CSV02", "Path": "C:\\ClusterStorage\\CSV02"}])
    remote.on(scripts.REFRESH_CLUSTER, [])

    result = run(create_cluster_shared_volume(
        cluster_name="HVCLUSTER01", host_name="hv02",
        serial_number="6005076300810C5A", volume_name="CSV02"
    ))

    assert result.success
    assert result.request_id == "csv-HVCLUSTER01-CSV02"
    assert result.data.host_name == "hv02.contoso.local"


# =============================================================================
# 服务器注册
# =============================================================================
def test_every_tool_is_registered():
    tools = {tool.name: tool for tool in asyncio.run(mcp.list_tools())}

    assert set(tools) == set(cli.TOOLS)
    assert len(tools) == 25
    assert tools["describeHostMemory"].annotations.readOnlyHint is True
    assert tools["createClusterSharedVolume"].annotations.destructiveHint is True
    assert "host_name" in tools["describeHostNicStatus"].inputSchema["properties"]


# =============================================================================
# 命令行
# =============================================================================
def test_parse_assignments():
    assert cli.parse_assignments(["vm_name=web01", "enabled=false"]) == {"vm_name": "web01", "enabled": "false"}
    with pytest.raises(ValueError):
        cli.parse_assignments(["vm_name"])


def test_resolve_arguments_coerces_only_bool_parameters():
    assert cli.resolve_arguments(set_vm_time_sync, {"vm_name": "1", "enabled": "no"}) == {
        "vm_name": "1", "enabled": False
    }
    kwargs = cli.resolve_arguments(create_cluster_shared_volume, {"serial_number": "1", "host_name": "0"})
    assert kwargs["serial_number"] == "1"
    assert kwargs["host_name"] == "0"


def test_cli_keeps_numeric_looking_names_as_text(patched_client, remote, capsys):
    remote.on(scripts.HOSTS, [])

    code = cli.main(["describeHostVMs", "host_name=0"])

    output = json.loads(capsys.readouterr().out)
    assert code == 1
    assert output["error"]["error_type"] == "RESOURCE_NOT_FOUND"
    assert remote.calls[0].params["HostName"] == "0"


def test_cli_accepts_single_character_serial(patched_client, remote, capsys):
    remote.on(scripts.CLUSTERS, [CLUSTER_ROW])
    remote.on(scripts.CSV_PREPARE_DISK, [])

    code = cli.main([
        "createClusterSharedVolume", "cluster_name=HVCLUSTER01", "host_name=hv01",
        "serial_number=1", "volume_name=CSV02"
    ])

    output = json.loads(capsys.readouterr().out)
    assert code == 1
    assert output["error"]["parameter"] == "serial_number"
    assert remote.ran(scripts.CSV_PREPARE_DISK)[0].params["SerialNumber"] == "1"
    assert remote.ran(scripts.CSV_REGISTER) == []


def test_resolve_arguments_fills_field_defaults():
    assert cli.resolve_arguments(describe_hosts, {}) == {"host_group": None}
    assert cli.resolve_arguments(describe_host_memory, {}) == {"host_name": None}
    with pytest.raises(ValueError):
        cli.resolve_arguments(describe_host_memory, {"vm_name": "x"})


def test_cli_prints_result(patched_client, remote, capsys):
    remote.on(scripts.HOST_MEMORY, [{"Name": "hv01", "TotalMemory": 68719476736, "AvailableMemory": 16384}])

    code = cli.main(["describeHostMemory", "host_name=hv01"])

    output = json.loads(capsys.readouterr().out)
    assert code == 0
    assert output["data"]["used_percent"] == "75%"
    assert output["data"]["total_memory_gb"] == 64.0


def test_cli_unknown_tool(capsys):
    assert cli.main(["describeEverything"]) == 2


def test_cli_failure_exit_code(monkeypatch, capsys):
    for name in ("SCVMM_SERVER", "SCVMM_USERNAME", "SCVMM_PASSWORD"):
        monkeypatch.delenv(name, raising=False)

    assert cli.main(["describeClusters"]) == 1
    assert json.loads(capsys.readouterr().out)["error"]["error_type"] == "MISSING_PARAMETER"
