# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 变更类工具
"""

import logging

from pydantic import Field

from ..models import MCPResult
from ..utils import (
    validate_vm_name,
    validate_enabled,
    validate_cluster_name,
    validate_host_name,
    validate_serial_number,
    validate_volume_name,
)
from .base import call_client


logger = logging.getLogger(__name__)


async def get_vm_time_sync(
    vm_name: str = Field(description="虚拟机名称")
) -> MCPResult:
    """查询虚拟机的时间同步集成服务是否启用"""
    if error := validate_vm_name(vm_name):
        return MCPResult.failed(error)
    return call_client("get_vm_time_sync", "get_vm_time_sync", vm_name)


async def set_vm_time_sync(
    vm_name: str = Field(description="虚拟机名称"),
    enabled: bool = Field(description="true 启用，false 禁用")
) -> MCPResult:
    """
    启用或禁用虚拟机的时间同步集成服务

    已处于目标状态时不做修改，返回 changed=false。
    """
    if error := validate_vm_name(vm_name):
        return MCPResult.failed(error)

    if error := validate_enabled(enabled):
        return MCPResult.failed(error)

    return call_client("set_vm_time_sync", "set_vm_time_sync", vm_name, enabled)


async def create_cluster_shared_volume(
    cluster_name: str = Field(description="集群名称"),
    host_name: str = Field(description="执行磁盘初始化的集群节点"),
    serial_number: str = Field(description="LUN 在主机上显示的磁盘序列号"),
    volume_name: str = Field(description="共享卷名称 (卷标、群集资源名、ClusterStorage 目录名)")
) -> MCPResult:
    """
    按磁盘序列号新建群集共享卷 (CSV)

    注意：
    1. 磁盘必须已呈现给所有集群节点，可通过 describeHostDisks 查询序列号。
    2. 磁盘会被初始化为 GPT 并格式化为 NTFS，原有数据将丢失。
    3. 该操作没有回滚，第二步失败时磁盘保留格式化结果。
    """
    # 参数验证链
    if error := validate_cluster_name(cluster_name):
        return MCPResult.failed(error)

    if error := validate_host_name(host_name):
        return MCPResult.failed(error)

    if error := validate_serial_number(serial_number):
        return MCPResult.failed(error)

    if error := validate_volume_name(volume_name):
        return MCPResult.failed(error)

    logger.info(f"在集群 {cluster_name} 上以序列号 {serial_number} 新建共享卷 {volume_name}")
    result = call_client(
        "create_cluster_shared_volume",
        "create_cluster_shared_volume",
        cluster_name, host_name, serial_number, volume_name,
        target=host_name
    )
    if result.success:
        result.request_id = f"csv-{cluster_name}-{volume_name}"
    return result
