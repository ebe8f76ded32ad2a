# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 工具函数包导出
"""

from .errors import (
    TOOL_DESCRIBE_CLUSTERS,
    TOOL_DESCRIBE_HOSTS,
    TOOL_DESCRIBE_CLUSTER_NODES,
    TOOL_DESCRIBE_VMS,
    TOOL_DESCRIBE_DISKS,
    PowerShellError,
    not_found_error,
    parse_winrm_error,
)

from .validators import (
    validate_cluster_name,
    validate_host_name,
    validate_vm_name,
    validate_enabled,
    validate_serial_number,
    validate_volume_name,
)

from .units import (
    bytes_to_gb,
    mb_to_gb,
    format_percent,
    percent_of,
    normalize_mac,
    format_wwn,
    format_link_speed,
)

__all__ = [
    # 错误处理
    "TOOL_DESCRIBE_CLUSTERS",
    "TOOL_DESCRIBE_HOSTS",
    "TOOL_DESCRIBE_CLUSTER_NODES",
    "TOOL_DESCRIBE_VMS",
    "TOOL_DESCRIBE_DISKS",
    "PowerShellError",
    "not_found_error",
    "parse_winrm_error",
    # 验证函数
    "validate_cluster_name",
    "validate_host_name",
    "validate_vm_name",
    "validate_enabled",
    "validate_serial_number",
    "validate_volume_name",
    # 单位换算
    "bytes_to_gb",
    "mb_to_gb",
    "format_percent",
    "percent_of",
    "normalize_mac",
    "format_wwn",
    "format_link_speed",
]
