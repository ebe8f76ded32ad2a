# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 主机会话查询工具

主机先在 VMM 中解析，再直接建立到该主机的 WinRM 会话执行查询。
"""

from pydantic import Field

from ..models import MCPResult
from ..utils import validate_host_name
from .base import call_client


async def describe_host_os(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机操作系统版本和启动时间"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_os", "get_host_os", host_name, target=host_name)


async def describe_host_nics(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机操作系统中的物理网卡"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_nics", "get_host_nics", host_name, target=host_name)


async def describe_host_nic_status(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询网卡综合状态：主机网卡与 VMM 网卡按 MAC 地址关联"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_nic_status", "get_host_nic_status", host_name, target=host_name)


async def describe_host_hbas(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机光纤通道 HBA 及 WWN"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_hbas", "get_host_hbas", host_name, target=host_name)


async def describe_host_mpio(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机 MPIO 多路径配置"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_mpio", "get_host_mpio", host_name, target=host_name)


async def describe_host_disks(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机可见磁盘及序列号"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_disks", "get_host_disks", host_name, target=host_name)
