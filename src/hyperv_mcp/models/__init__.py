# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 模型包导出
"""

from .base import (
    ErrorType,
    MyBaseModel,
    ToolSuggestion,
    MCPError,
    MCPResult,
)

from .hyperv import (
    ClusterInfo,
    HostInfo,
    HostMemoryInfo,
    HostCpuInfo,
    HostOSInfo,
    VMInfo,
    VMDetail,
    VMStatsInfo,
    VirtualDiskInfo,
    VMNicInfo,
    CheckpointInfo,
    TimeSyncState,
    HostAdapterInfo,
    HostNicInfo,
    NicStatusInfo,
    LldpInfo,
    StorageVolumeInfo,
    HbaInfo,
    MpioInfo,
    HostDiskInfo,
    SharedVolumeResult,
)

__all__ = [
    # 基础模型
    "ErrorType",
    "MyBaseModel",
    "ToolSuggestion",
    "MCPError",
    "MCPResult",
    # 集群与主机
    "ClusterInfo",
    "HostInfo",
    "HostMemoryInfo",
    "HostCpuInfo",
    "HostOSInfo",
    # 虚拟机
    "VMInfo",
    "VMDetail",
    "VMStatsInfo",
    "VirtualDiskInfo",
    "VMNicInfo",
    "CheckpointInfo",
    "TimeSyncState",
    # 网络
    "HostAdapterInfo",
    "HostNicInfo",
    "NicStatusInfo",
    "LldpInfo",
    # 存储
    "StorageVolumeInfo",
    "HbaInfo",
    "MpioInfo",
    "HostDiskInfo",
    "SharedVolumeResult",
]
