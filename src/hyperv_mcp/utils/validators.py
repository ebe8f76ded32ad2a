# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 参数验证模块
"""

import re
from typing import Optional

from ..models import ErrorType, MCPError
from .errors import (
    TOOL_DESCRIBE_CLUSTERS,
    TOOL_DESCRIBE_HOSTS,
    TOOL_DESCRIBE_VMS,
    TOOL_DESCRIBE_DISKS,
)

_SERIAL_PATTERN = re.compile(r'^[\x21-\x7E]{1,64}$')
_VOLUME_FORBIDDEN = set('\\/:*?"<>|')


def _require(value: Optional[str], parameter: str, label: str, tool=None) -> Optional[MCPError]:
    if value is None or not str(value).strip():
        return MCPError(
            error_type=ErrorType.MISSING_PARAMETER,
            parameter=parameter,
            message=f"缺少必需参数: {parameter} ({label})",
            suggestion=f"请先使用 {tool.tool_name} 查询可用{label}" if tool else f"请提供有效的{label}",
            related_tools=[tool] if tool else None
        )
    return None


def validate_cluster_name(cluster_name: Optional[str]) -> Optional[MCPError]:
    """验证集群名称"""
    return _require(cluster_name, "cluster_name", "集群名称", TOOL_DESCRIBE_CLUSTERS)


def validate_host_name(host_name: Optional[str]) -> Optional[MCPError]:
    """验证主机名称"""
    return _require(host_name, "host_name", "主机名称", TOOL_DESCRIBE_HOSTS)


def validate_vm_name(vm_name: Optional[str]) -> Optional[MCPError]:
    """验证虚拟机名称"""
    return _require(vm_name, "vm_name", "虚拟机名称", TOOL_DESCRIBE_VMS)


def validate_enabled(enabled) -> Optional[MCPError]:
    if not isinstance(enabled, bool):
        return MCPError(
            error_type=ErrorType.INVALID_PARAMETER,
            parameter="enabled",
            message=f"enabled 必须为布尔值: {enabled!r}",
            suggestion="请传入 true 或 false"
        )
    return None


def validate_serial_number(serial_number: Optional[str]) -> Optional[MCPError]:
    """验证磁盘序列号：1-64 个可打印、不含空格的字符"""
    if error := _require(serial_number, "serial_number", "磁盘序列号", TOOL_DESCRIBE_DISKS):
        return error

    if not _SERIAL_PATTERN.match(serial_number):
        return MCPError(
            error_type=ErrorType.INVALID_PARAMETER,
            parameter="serial_number",
            message=f"磁盘序列号格式无效: '{serial_number}'",
            suggestion="序列号应为 1-64 个不含空格的可打印字符，可通过 describeHostDisks 查询",
            related_tools=[TOOL_DESCRIBE_DISKS]
        )
    return None


def validate_volume_name(volume_name: Optional[str]) -> Optional[MCPError]:
    """验证共享卷名称 (同时用作卷标、群集资源名和 ClusterStorage 目录名)"""
    if error := _require(volume_name, "volume_name", "共享卷名称"):
        return error

    if len(volume_name) > 32 or _VOLUME_FORBIDDEN.intersection(volume_name):
        return MCPError(
            error_type=ErrorType.INVALID_PARAMETER,
            parameter="volume_name",
            message=f"共享卷名称无效: '{volume_name}'",
            suggestion='请使用不超过 32 个字符且不包含 \\ / : * ? " < > | 的名称'
        )
    return None
