# -*- coding: utf-8 -*-
import pytest
from requests.exceptions import ConnectionError as RequestsConnectionError
from winrm.exceptions import InvalidCredentialsError

from hyperv_mcp.models import ErrorType
from hyperv_mcp.utils import (
    PowerShellError,
    not_found_error,
    parse_winrm_error,
    validate_host_name,
    validate_enabled,
    validate_serial_number,
    validate_volume_name,
)


def test_connection_errors():
    error = parse_winrm_error(RequestsConnectionError("Max retries exceeded"), "connect", "vmm01")
    assert error.error_type == ErrorType.CONNECTION_ERROR
    assert "vmm01" in error.message


def test_invalid_credentials():
    error = parse_winrm_error(InvalidCredentialsError("the specified credentials were rejected"), "connect")
    assert error.error_type == ErrorType.PERMISSION_DENIED


def test_remote_access_denied_is_permission_error():
    error = parse_winrm_error(PowerShellError("hv01", 1, "Access is denied."), "describe_host_disks")
    assert error.error_type == ErrorType.PERMISSION_DENIED


def test_remote_failure_is_generic_api_error():
    error = parse_winrm_error(
        PowerShellError("hv01", 1, "The term 'Get-MPIOSetting' is not recognized; connection ok"),
        "describe_host_mpio", "hv01"
    )
    assert error.error_type == ErrorType.API_ERROR
    assert "Get-MPIOSetting" in error.message


def test_remote_failure_reports_the_host_that_ran_the_script():
    error = parse_winrm_error(PowerShellError("hv02.contoso.local", 1, "boom"), "describe_host_os", "vmm01")
    assert "hv02.contoso.local" in error.message
    assert "vmm01" not in error.message


def test_not_found_error_names_the_lookup_tool(caplog):
    error = not_found_error("vm", "web99")
    assert error.error_type == ErrorType.RESOURCE_NOT_FOUND
    assert error.parameter == "vm_name"
    assert error.related_tools[0].tool_name == "describeHostVMs"
    assert "web99" in caplog.text


@pytest.mark.parametrize("value", [None, "", "   "])
def test_required_names(value):
    error = validate_host_name(value)
    assert error.error_type == ErrorType.MISSING_PARAMETER
    assert error.parameter == "host_name"


def test_enabled_must_be_bool():
    assert validate_enabled(True) is None
    assert validate_enabled("true").error_type == ErrorType.INVALID_PARAMETER


@pytest.mark.parametrize("serial, valid", [
    ("6005076300810C5A3000000000000012", True),
    ("S3Z2NB0K123456", True),
    ("has space", False),
    ("x" * 65, False),
])
def test_serial_number(serial, valid):
    assert (validate_serial_number(serial) is None) is valid


@pytest.mark.parametrize("name, valid", [
    ("CSV-DATA01", True),
    ("data/01", False),
    ("C:", False),
    ("x" * 33, False),
])
def test_volume_name(name, valid):
    assert (validate_volume_name(name) is None) is valid


def test_mcp_error_str():
    text = str(not_found_error("cluster", "NOPE"))
    assert text.startswith("[RESOURCE_NOT_FOUND]")
    assert "describeClusters" in text
