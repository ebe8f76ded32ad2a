# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 错误处理模块

包含工具建议常量、远程执行异常和 WinRM 错误解析函数
"""

import logging
from typing import Optional

from requests.exceptions import ConnectionError as RequestsConnectionError, Timeout
from winrm.exceptions import InvalidCredentialsError, WinRMOperationTimeoutError, WinRMTransportError

from ..models import ErrorType, MCPError, ToolSuggestion


logger = logging.getLogger(__name__)


class PowerShellError(Exception):
    """远程 PowerShell 脚本以非零状态退出或写入了错误流"""

    def __init__(self, host: str, status_code: int, stderr: str):
        self.host = host
        self.status_code = status_code
        self.stderr = stderr
        super().__init__(f"{host}: PowerShell 退出码 {status_code}: {stderr}")


# =============================================================================
# 工具建议常量 - 用于错误响应中引导 LLM
# =============================================================================
TOOL_DESCRIBE_CLUSTERS = ToolSuggestion(
    tool_name="describeClusters",
    description="查询 VMM 管理的集群列表",
    example_params={}
)

TOOL_DESCRIBE_HOSTS = ToolSuggestion(
    tool_name="describeHosts",
    description="查询 VMM 管理的主机列表",
    example_params={"host_group": "All Hosts"}
)

TOOL_DESCRIBE_CLUSTER_NODES = ToolSuggestion(
    tool_name="describeClusterNodes",
    description="查询集群中的节点",
    example_params={"cluster_name": "HVCLUSTER01"}
)

TOOL_DESCRIBE_VMS = ToolSuggestion(
    tool_name="describeHostVMs",
    description="查询主机上的虚拟机",
    example_params={"host_name": "hv01.contoso.local"}
)

TOOL_DESCRIBE_DISKS = ToolSuggestion(
    tool_name="describeHostDisks",
    description="查询主机可见的磁盘及其序列号",
    example_params={"host_name": "hv01.contoso.local"}
)

_NOT_FOUND_TOOLS = {
    "cluster": ("cluster_name", "集群", TOOL_DESCRIBE_CLUSTERS),
    "host": ("host_name", "主机", TOOL_DESCRIBE_HOSTS),
    "vm": ("vm_name", "虚拟机", TOOL_DESCRIBE_VMS),
    "disk": ("serial_number", "磁盘", TOOL_DESCRIBE_DISKS),
}


def not_found_error(kind: str, name: str) -> MCPError:
    """查找结果为空时的统一错误，同时记录 warning"""
    parameter, label, tool = _NOT_FOUND_TOOLS[kind]
    logger.warning(f"{label} '{name}' 不存在")
    return MCPError(
        error_type=ErrorType.RESOURCE_NOT_FOUND,
        parameter=parameter,
        message=f"{label} '{name}' 不存在",
        suggestion=f"请使用 {tool.tool_name} 查询可用{label}",
        related_tools=[tool]
    )


def parse_winrm_error(error: Exception, operation: str, target: Optional[str] = None) -> MCPError:
    """
    解析 WinRM / PowerShell 错误，转换为结构化的 MCPError

    远程命令失败只做粗粒度分类：连接、凭据、其余一律归为 API_ERROR。
    """
    error_msg = str(error)
    where = f" ({target})" if target else ""
    remote = isinstance(error, PowerShellError)

    # 连接错误
    if isinstance(error, (RequestsConnectionError, Timeout, WinRMTransportError, WinRMOperationTimeoutError)) \
            or (not remote and ('connection' in error_msg.lower() or 'timed out' in error_msg.lower())):
        return MCPError(
            error_type=ErrorType.CONNECTION_ERROR,
            message=f"无法连接到 {target or 'WinRM 端点'}: {error_msg}",
            suggestion="请检查主机名、WinRM 服务 (5985/5986) 和网络连接"
        )

    # 凭据/权限
    if isinstance(error, InvalidCredentialsError) or 'access is denied' in error_msg.lower() \
            or 'unauthorized' in error_msg.lower():
        return MCPError(
            error_type=ErrorType.PERMISSION_DENIED,
            message=f"权限不足{where}: {error_msg}",
            suggestion="请检查 SCVMM_USERNAME / SCVMM_PASSWORD 以及该账号在 VMM 和主机上的权限"
        )

    # 远程脚本失败，以实际执行脚本的主机为准
    if remote:
        return MCPError(
            error_type=ErrorType.API_ERROR,
            message=f"{operation} 远程命令执行失败 ({error.host}): {error.stderr or error.status_code}",
            suggestion="请检查对象名称与主机状态，或在目标机器上手动执行以确认"
        )

    return MCPError(
        error_type=ErrorType.API_ERROR,
        message=f"{operation} 操作失败{where}: {error_msg}",
        suggestion="请检查参数是否正确，或稍后重试"
    )
