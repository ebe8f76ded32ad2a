# -*- coding: utf-8 -*-
"""
测试夹具：用脚本化的假会话替代 WinRM
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pytest

from hyperv_mcp.client import VMMClient
from hyperv_mcp.client import scripts


@dataclass
class Call:
    host: str
    script: str
    params: Dict[str, Any] = field(default_factory=dict)


class FakeSession:
    def __init__(self, remote: "FakeRemote", host: str):
        self.remote = remote
        self.host = host

    def run(self, script, **params):
        return self.remote.respond(self.host, script, params)


class FakeRemote:
    """
    按脚本常量应答

    on(script, reply1, reply2, ...) 依次消费应答，最后一个应答会被重复使用；
    应答可以是行列表、异常实例或接收参数字典的函数。
    """

    def __init__(self):
        self.replies: Dict[str, List[Any]] = {}
        self.calls: List[Call] = []
        self.opened: List[str] = []

    def on(self, script: str, *replies):
        self.replies.setdefault(script, []).extend(replies)
        return self

    def factory(self, host, username, password, transport="ntlm", cert_validation="validate"):
        self.opened.append(host)
        return FakeSession(self, host)

    def respond(self, host, script, params):
        self.calls.append(Call(host, script, params))
        for key, queue in self.replies.items():
            if script.endswith(key):
                reply = queue.pop(0) if len(queue) > 1 else queue[0]
                if isinstance(reply, Exception):
                    raise reply
                if callable(reply):
                    return reply(params)
                return reply
        raise AssertionError(f"unexpected script:\n{script}")

    def ran(self, script: str) -> List[Call]:
        return [c for c in self.calls if c.script.endswith(script)]

    def reset(self):
        self.calls.clear()
        self.opened.clear()


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def client(remote):
    remote.on(scripts.PING, [{"Name": "vmm01.contoso.local", "ProductVersion": "10.22.1287.0"}])
    vmm = VMMClient("vmm01.contoso.local", "CONTOSO\\svc-vmm", "secret", session_factory=remote.factory)
    assert vmm.connect() is None
    remote.reset()
    return vmm


@pytest.fixture
def vmm_env(monkeypatch):
    monkeypatch.setenv("SCVMM_SERVER", "vmm01.contoso.local")
    monkeypatch.setenv("SCVMM_USERNAME", "CONTOSO\\svc-vmm")
    monkeypatch.setenv("SCVMM_PASSWORD", "secret")


HOST_ROW = {
    "Name": "hv01.contoso.local",
    "FQDN": "hv01.contoso.local",
    "ClusterName": "HVCLUSTER01",
    "HostGroup": "All Hosts\\Production",
    "OverallState": "OK",
    "CommunicationState": "Responding",
    "VMCount": 12,
    "OSVersion": "10.0.20348",
}

CLUSTER_ROW = {
    "Name": "HVCLUSTER01",
    "HostGroup": "All Hosts\\Production",
    "NodeCount": 2,
    "ClusterReserve": 1,
    "VMCount": 24,
    "Nodes": ["hv01.contoso.local", "hv02.contoso.local"],
}

VM_ROW = {
    "Name": "web01",
    "HostName": "hv01",
    "HostFQDN": "hv01.contoso.local",
    "Status": "Running",
    "CPUCount": 4,
    "Memory": 8192,
    "DynamicMemoryEnabled": True,
    "DynamicMemoryMinimumMB": 2048,
    "DynamicMemoryMaximumMB": 16384,
    "Generation": 2,
    "OperatingSystem": "Windows Server 2022 Datacenter",
    "IsHighlyAvailable": True,
    "Location": "C:\\ClusterStorage\\Volume1\\web01",
    "CreationTime": "2024-03-01T10:15:00",
}
