# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 工具包导出
"""

from .query import (
    describe_clusters,
    describe_cluster_nodes,
    describe_hosts,
    describe_host_memory,
    describe_host_cpu,
    describe_host_vms,
    describe_cluster_vms,
    describe_vm,
    describe_vm_stats,
    describe_vm_disks,
    describe_vm_nics,
    describe_vm_checkpoints,
    describe_host_volumes,
    describe_cluster_shared_volumes,
    describe_host_adapters,
    describe_host_lldp,
)

from .host import (
    describe_host_os,
    describe_host_nics,
    describe_host_nic_status,
    describe_host_hbas,
    describe_host_mpio,
    describe_host_disks,
)

from .lifecycle import (
    get_vm_time_sync,
    set_vm_time_sync,
    create_cluster_shared_volume,
)

__all__ = [
    # VMM 查询工具
    "describe_clusters",
    "describe_cluster_nodes",
    "describe_hosts",
    "describe_host_memory",
    "describe_host_cpu",
    "describe_host_vms",
    "describe_cluster_vms",
    "describe_vm",
    "describe_vm_stats",
    "describe_vm_disks",
    "describe_vm_nics",
    "describe_vm_checkpoints",
    "describe_host_volumes",
    "describe_cluster_shared_volumes",
    "describe_host_adapters",
    "describe_host_lldp",
    # 主机会话工具
    "describe_host_os",
    "describe_host_nics",
    "describe_host_nic_status",
    "describe_host_hbas",
    "describe_host_mpio",
    "describe_host_disks",
    # 变更工具
    "get_vm_time_sync",
    "set_vm_time_sync",
    "create_cluster_shared_volume",
]
