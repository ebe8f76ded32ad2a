# -*- coding: utf-8 -*-
from types import SimpleNamespace

import pytest

from hyperv_mcp.client import session as session_module
from hyperv_mcp.client.session import PowerShellSession, ps_literal, render_script, parse_json_rows
from hyperv_mcp.utils import PowerShellError


def test_ps_literal():
    assert ps_literal("hv01") == "'hv01'"
    assert ps_literal("O'Brien") == "'O''Brien'"
    assert ps_literal(True) == "$true"
    assert ps_literal(False) == "$false"
    assert ps_literal(None) == "$null"
    assert ps_literal(5) == "5"
    assert ps_literal(["a", "b"]) == "@('a', 'b')"


def test_render_script_assigns_parameters_before_body():
    rendered = render_script("Get-Disk", {"HostName": "hv01", "Enabled": False})
    lines = rendered.splitlines()
    assert lines[0] == "$ErrorActionPreference = 'Stop'"
    assert "$HostName = 'hv01'" in lines
    assert "$Enabled = $false" in lines
    assert lines[-1] == "Get-Disk"


def test_render_script_quotes_injected_text():
    rendered = render_script("", {"VMName": "x'; Remove-Item C:\\ -Recurse; '"})
    assert "$VMName = 'x''; Remove-Item C:\\ -Recurse; '''" in rendered


@pytest.mark.parametrize("output, expected", [
    ("", []),
    ("  \r\n", []),
    ("null", []),
    ('{"Name": "hv01"}', [{"Name": "hv01"}]),
    ('[{"Name": "hv01"}, {"Name": "hv02"}]', [{"Name": "hv01"}, {"Name": "hv02"}]),
    ("[]", []),
    ("[null]", []),
    ('[{"Name": "hv01"}, null]', [{"Name": "hv01"}]),
])
def test_parse_json_rows(output, expected):
    assert parse_json_rows(output) == expected


class _FakeWinrmSession:
    response = None
    scripts = []

    def __init__(self, target, auth, transport, server_cert_validation):
        self.target = target
        self.auth = auth
        self.transport = transport
        self.server_cert_validation = server_cert_validation

    def run_ps(self, script):
        _FakeWinrmSession.scripts.append(script)
        return _FakeWinrmSession.response


@pytest.fixture
def fake_winrm(monkeypatch):
    _FakeWinrmSession.scripts = []
    monkeypatch.setattr(session_module.winrm, "Session", _FakeWinrmSession)
    return _FakeWinrmSession


def test_session_run_parses_stdout(fake_winrm):
    fake_winrm.response = SimpleNamespace(status_code=0, std_out=b'{"Number": 1}', std_err=b"")

    ps = PowerShellSession("hv01", "CONTOSO\\admin", "pw", transport="kerberos")
    rows = ps.run("Get-Disk", SerialNumber="ABC")

    assert rows == [{"Number": 1}]
    assert ps._session.transport == "kerberos"
    assert ps._session.auth == ("CONTOSO\\admin", "pw")
    assert "$SerialNumber = 'ABC'" in fake_winrm.scripts[0]


def test_session_run_raises_on_failure(fake_winrm):
    fake_winrm.response = SimpleNamespace(status_code=1, std_out=b"", std_err=b"Get-Disk : Access is denied.")

    ps = PowerShellSession("hv01", "admin", "pw")
    with pytest.raises(PowerShellError) as info:
        ps.run("Get-Disk")

    assert info.value.host == "hv01"
    assert info.value.status_code == 1
    assert "Access is denied" in info.value.stderr
