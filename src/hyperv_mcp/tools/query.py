# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - VMM 查询类工具
"""

from typing import Optional

from pydantic import Field

from ..models import MCPResult
from ..utils import validate_cluster_name, validate_host_name, validate_vm_name
from .base import call_client


async def describe_clusters() -> MCPResult:
    """查询 VMM 管理的集群列表"""
    return call_client("describe_clusters", "get_clusters")


async def describe_cluster_nodes(
    cluster_name: str = Field(description="集群名称")
) -> MCPResult:
    """查询集群节点及其状态"""
    if error := validate_cluster_name(cluster_name):
        return MCPResult.failed(error)
    return call_client("describe_cluster_nodes", "get_cluster_nodes", cluster_name)


async def describe_hosts(
    host_group: Optional[str] = Field(default=None, description="主机组名称或路径，用于筛选")
) -> MCPResult:
    """查询 VMM 管理的主机列表"""
    return call_client("describe_hosts", "get_hosts", host_group)


async def describe_host_memory(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机内存总量、可用量和使用率"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_memory", "get_host_memory", host_name)


async def describe_host_cpu(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机处理器配置和使用率"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_cpu", "get_host_cpu", host_name)


async def describe_host_vms(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机上的虚拟机"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_vms", "get_host_vms", host_name)


async def describe_cluster_vms(
    cluster_name: str = Field(description="集群名称")
) -> MCPResult:
    """查询集群所有节点上的虚拟机"""
    if error := validate_cluster_name(cluster_name):
        return MCPResult.failed(error)
    return call_client("describe_cluster_vms", "get_cluster_vms", cluster_name)


async def describe_vm(
    vm_name: str = Field(description="虚拟机名称")
) -> MCPResult:
    """查询虚拟机详细配置"""
    if error := validate_vm_name(vm_name):
        return MCPResult.failed(error)
    return call_client("describe_vm", "get_vm", vm_name)


async def describe_vm_stats(
    vm_name: str = Field(description="虚拟机名称")
) -> MCPResult:
    """查询虚拟机 CPU 使用率和内存分配/需求"""
    if error := validate_vm_name(vm_name):
        return MCPResult.failed(error)
    return call_client("describe_vm_stats", "get_vm_stats", vm_name)


async def describe_vm_disks(
    vm_name: str = Field(description="虚拟机名称")
) -> MCPResult:
    """查询虚拟机的虚拟磁盘路径和容量"""
    if error := validate_vm_name(vm_name):
        return MCPResult.failed(error)
    return call_client("describe_vm_disks", "get_vm_disks", vm_name)


async def describe_vm_nics(
    vm_name: str = Field(description="虚拟机名称")
) -> MCPResult:
    """查询虚拟机网卡、MAC 地址和 VLAN"""
    if error := validate_vm_name(vm_name):
        return MCPResult.failed(error)
    return call_client("describe_vm_nics", "get_vm_nics", vm_name)


async def describe_vm_checkpoints(
    vm_name: str = Field(description="虚拟机名称")
) -> MCPResult:
    """查询虚拟机检查点"""
    if error := validate_vm_name(vm_name):
        return MCPResult.failed(error)
    return call_client("describe_vm_checkpoints", "get_vm_checkpoints", vm_name)


async def describe_host_volumes(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机存储卷容量"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_volumes", "get_host_volumes", host_name)


async def describe_cluster_shared_volumes(
    cluster_name: str = Field(description="集群名称")
) -> MCPResult:
    """查询集群共享卷容量"""
    if error := validate_cluster_name(cluster_name):
        return MCPResult.failed(error)
    return call_client("describe_cluster_shared_volumes", "get_cluster_shared_volumes", cluster_name)


async def describe_host_adapters(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询 VMM 记录的主机物理网卡"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_adapters", "get_host_adapters", host_name)


async def describe_host_lldp(
    host_name: str = Field(description="主机名称")
) -> MCPResult:
    """查询主机物理网卡连接的交换机 (LLDP)"""
    if error := validate_host_name(host_name):
        return MCPResult.failed(error)
    return call_client("describe_host_lldp", "get_host_lldp", host_name)
