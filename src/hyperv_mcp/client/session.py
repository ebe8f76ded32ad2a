# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - WinRM / PowerShell 会话模块

通过 pywinrm 在远程 Windows 机器上执行 PowerShell 脚本块，
脚本以 ConvertTo-Json 输出，这里解析为字典列表。
"""

import json
import logging
from typing import Any, Dict, List

import winrm

from ..utils.errors import PowerShellError


logger = logging.getLogger(__name__)

SCRIPT_PREAMBLE = "$ErrorActionPreference = 'Stop'\n$ProgressPreference = 'SilentlyContinue'\n"


def ps_literal(value: Any) -> str:
    """Python 值转为 PowerShell 字面量"""
    if value is None:
        return "$null"
    if isinstance(value, bool):
        return "$true" if value else "$false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "@(" + ", ".join(ps_literal(v) for v in value) + ")"
    return "'" + str(value).replace("'", "''") + "'"


def render_script(script: str, params: Dict[str, Any]) -> str:
    """在脚本前加上错误策略与参数赋值，如 $HostName = 'hv01'"""
    lines = [f"${name} = {ps_literal(value)}" for name, value in params.items()]
    return SCRIPT_PREAMBLE + "\n".join(lines) + "\n" + script


def parse_json_rows(output: str) -> List[Dict[str, Any]]:
    """解析 ConvertTo-Json 输出：空 -> []，单对象 -> [对象]，数组中的 null 丢弃"""
    text = output.strip()
    if not text:
        return []
    data = json.loads(text)
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    return [row for row in data if row is not None]


class PowerShellSession:
    """单个 WinRM 会话 - 每次调用创建，用完即弃"""

    def __init__(self, host: str, username: str, password: str,
                 transport: str = "ntlm", cert_validation: str = "validate"):
        self.host = host
        self._session = winrm.Session(
            host,
            auth=(username, password),
            transport=transport,
            server_cert_validation=cert_validation
        )

    def run(self, script: str, **params) -> List[Dict[str, Any]]:
        """执行脚本并返回 JSON 记录；非零退出码抛出 PowerShellError"""
        logger.debug(f"在 {self.host} 上执行 PowerShell，参数: {sorted(params)}")
        response = self._session.run_ps(render_script(script, params))

        stdout = response.std_out.decode("utf-8", errors="replace")
        if response.status_code != 0:
            stderr = response.std_err.decode("utf-8", errors="replace").strip()
            logger.error(f"{self.host} 上的 PowerShell 执行失败 ({response.status_code}): {stderr}")
            raise PowerShellError(self.host, response.status_code, stderr)

        return parse_json_rows(stdout)
