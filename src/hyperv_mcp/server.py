# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 服务器入口模块

MCP 服务器的主入口，包含：
- ToolRegistry：工具注册类
- lifespan：生命周期管理
- mcp：FastMCP 实例
- run_server：服务器运行函数
"""

import os
import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .tools import (
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
    describe_host_os,
    describe_host_nics,
    describe_host_nic_status,
    describe_host_hbas,
    describe_host_mpio,
    describe_host_disks,
    get_vm_time_sync,
    set_vm_time_sync,
    create_cluster_shared_volume,
)


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging():
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, log_level_str, logging.INFO), format=LOG_FORMAT)
    return log_level_str


# =============================================================================
# 工具注册类
# =============================================================================
class ToolRegistry:
    """工具注册类 - 管理所有 MCP 工具的注册"""

    # (工具名, 函数, 描述, 标题)
    QUERY_TOOLS = [
        ("describeClusters", describe_clusters, "查询 VMM 管理的故障转移集群列表", "查询集群"),
        ("describeClusterNodes", describe_cluster_nodes, "查询集群节点及其状态", "查询集群节点"),
        ("describeHosts", describe_hosts, "查询 VMM 管理的 Hyper-V 主机列表，可按主机组筛选", "查询主机列表"),
        ("describeHostMemory", describe_host_memory, "查询主机内存总量、可用量 (GB) 和使用率", "查询主机内存"),
        ("describeHostCpu", describe_host_cpu, "查询主机处理器型号、核数和 CPU 使用率", "查询主机 CPU"),
        ("describeHostVMs", describe_host_vms, "查询主机上的虚拟机", "查询主机虚拟机"),
        ("describeClusterVMs", describe_cluster_vms, "查询集群所有节点上的虚拟机", "查询集群虚拟机"),
        ("describeVM", describe_vm, "查询虚拟机详细配置", "查询虚拟机"),
        ("describeVMStats", describe_vm_stats, "查询虚拟机 CPU 使用率和内存分配/需求", "查询虚拟机性能"),
        ("describeVMDisks", describe_vm_disks, "查询虚拟机的 VHD 路径、类型和容量", "查询虚拟磁盘"),
        ("describeVMNics", describe_vm_nics, "查询虚拟机网卡的 MAC、VM 网络和 VLAN", "查询虚拟网卡"),
        ("describeVMCheckpoints", describe_vm_checkpoints, "查询虚拟机检查点", "查询检查点"),
        ("describeHostVolumes", describe_host_volumes, "查询主机存储卷容量和使用率", "查询主机存储卷"),
        ("describeClusterSharedVolumes", describe_cluster_shared_volumes, "查询集群共享卷 (CSV) 容量和使用率", "查询共享卷"),
        ("describeHostAdapters", describe_host_adapters, "查询 VMM 记录的主机物理网卡及虚拟交换机", "查询主机网卡 (VMM)"),
        ("describeHostLldp", describe_host_lldp, "查询主机物理网卡所连交换机的 LLDP 信息", "查询 LLDP"),
    ]

    HOST_TOOLS = [
        ("describeHostOS", describe_host_os, "在主机上查询操作系统版本和启动时间", "查询主机操作系统"),
        ("describeHostNics", describe_host_nics, "在主机上查询物理网卡链路状态和速率", "查询主机网卡"),
        ("describeHostNicStatus", describe_host_nic_status, "网卡综合状态：主机网卡按 MAC 关联 VMM 网卡", "查询网卡综合状态"),
        ("describeHostHbas", describe_host_hbas, "在主机上查询光纤通道 HBA 端口及 WWN", "查询 HBA"),
        ("describeHostMpio", describe_host_mpio, "在主机上查询 MPIO 多路径配置", "查询 MPIO"),
        ("describeHostDisks", describe_host_disks, "在主机上查询磁盘及序列号，新建共享卷前应先调用", "查询主机磁盘"),
    ]

    def __init__(self, mcp_instance):
        self.mcp = mcp_instance

    def register_tools(self):
        """注册所有 MCP 工具"""
        self._register_read_only(self.QUERY_TOOLS)
        self._register_read_only(self.HOST_TOOLS)
        self._register_lifecycle_tools()
        return self.mcp

    def _register_read_only(self, tools):
        for name, fn, description, title in tools:
            self.mcp.tool(
                name=name,
                description=description,
                annotations=ToolAnnotations(title=title, readOnlyHint=True)
            )(fn)

    def _register_lifecycle_tools(self):
        """注册变更类工具"""
        self.mcp.tool(
            name="getVMTimeSync",
            description="查询虚拟机的时间同步集成服务是否启用",
            annotations=ToolAnnotations(title="查询时间同步", readOnlyHint=True)
        )(get_vm_time_sync)

        self.mcp.tool(
            name="setVMTimeSync",
            description="启用或禁用虚拟机的时间同步集成服务。已处于目标状态时不做修改",
            annotations=ToolAnnotations(title="设置时间同步", readOnlyHint=False, destructiveHint=False, idempotentHint=True)
        )(set_vm_time_sync)

        self.mcp.tool(
            name="createClusterSharedVolume",
            description=(
                "按磁盘序列号新建群集共享卷。创建前需要准备: "
                "1) cluster_name - 可通过 describeClusters 查询; "
                "2) host_name - 集群节点，可通过 describeClusterNodes 查询; "
                "3) serial_number - 可通过 describeHostDisks 查询; "
                "4) volume_name - 新卷名称。磁盘将被格式化"
            ),
            annotations=ToolAnnotations(title="新建共享卷", readOnlyHint=False, destructiveHint=True)
        )(create_cluster_shared_volume)


# =============================================================================
# 生命周期管理
# =============================================================================
@asynccontextmanager
async def lifespan(app) -> AsyncGenerator[None, None]:
    """MCP 服务器生命周期管理"""
    logger.info("初始化 Hyper-V MCP Server...")

    server = os.getenv("SCVMM_SERVER")
    if server:
        logger.info(f"VMM 服务器: {server}，传输方式: {os.getenv('SCVMM_TRANSPORT', 'ntlm')}")
    else:
        logger.warning("未设置 SCVMM_SERVER，所有工具调用都将返回 MISSING_PARAMETER")

    yield

    logger.info("关闭 Hyper-V MCP Server...")


# =============================================================================
# FastMCP 实例创建
# =============================================================================
mcp = FastMCP(
    "HyperVReportAssistant",
    lifespan=lifespan,
    instructions=(
        "Hyper-V / System Center VMM 报表助手，提供集群、主机、虚拟机、网卡和存储的查询，"
        "以及时间同步开关和群集共享卷创建。\n\n"
        "**工具使用指南**:\n"
        "1. 先用 describeClusters / describeHosts 确认对象名称\n"
        "2. describe* 工具每次返回一组扁平记录，容量单位为 GB，百分比为整数\n"
        "3. describeHost{OS,Nics,Hbas,Mpio,Disks} 会直接连接到主机执行查询\n\n"
        "**新建共享卷流程**:\n"
        "- describeClusterNodes -> 选择节点\n"
        "- describeHostDisks -> 找到磁盘序列号\n"
        "- createClusterSharedVolume -> 创建\n\n"
        "**错误处理**: 所有工具返回统一的 MCPResult 格式，对象不存在时返回 RESOURCE_NOT_FOUND 并给出相关工具。"
    ),
    host=os.getenv("SERVER_HOST", "0.0.0.0"),
    port=int(os.getenv("SERVER_PORT", "8000"))
)

ToolRegistry(mcp).register_tools()


# =============================================================================
# 服务器运行函数
# =============================================================================
def run_server():
    """运行 MCP 服务器"""
    log_level_str = configure_logging()
    logger.info(f"启动 Hyper-V MCP 服务器，日志级别: {log_level_str}")

    transport = os.getenv('SERVER_TRANSPORT', 'stdio')
    logger.info(f"使用传输协议: {transport}")

    mcp.run(transport=transport)


if __name__ == "__main__":
    run_server()
