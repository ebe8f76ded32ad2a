# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - Hyper-V / VMM 报表记录模型

每个模型对应一种报表的扁平记录，字段即输出字段集。
容量类字段单位为 GB (保留两位小数)，百分比字段为零位小数字符串，如 "45%"。
"""

from typing import Optional, List

from pydantic import Field

from .base import MyBaseModel


# =============================================================================
# 集群与主机
# =============================================================================
class ClusterInfo(MyBaseModel):
    """故障转移集群信息"""
    name: Optional[str] = Field(description="集群名称", default=None)
    host_group: Optional[str] = Field(description="所在主机组路径", default=None)
    node_count: Optional[int] = Field(description="节点数量", default=None)
    cluster_reserve: Optional[int] = Field(description="集群预留节点数", default=None)
    vm_count: Optional[int] = Field(description="虚拟机数量", default=None)


class HostInfo(MyBaseModel):
    """Hyper-V 主机信息"""
    name: Optional[str] = Field(description="主机名称", default=None)
    cluster_name: Optional[str] = Field(description="所在集群", default=None)
    host_group: Optional[str] = Field(description="所在主机组路径", default=None)
    overall_state: Optional[str] = Field(description="总体状态", default=None)
    communication_state: Optional[str] = Field(description="VMM 通信状态", default=None)
    vm_count: Optional[int] = Field(description="虚拟机数量", default=None)
    os_version: Optional[str] = Field(description="操作系统版本", default=None)


class HostMemoryInfo(MyBaseModel):
    """主机内存使用情况"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    total_memory_gb: Optional[float] = Field(description="总内存 (GB)", default=None)
    available_memory_gb: Optional[float] = Field(description="可用内存 (GB)", default=None)
    used_memory_gb: Optional[float] = Field(description="已用内存 (GB)", default=None)
    used_percent: Optional[str] = Field(description="内存使用率", default=None)


class HostCpuInfo(MyBaseModel):
    """主机处理器信息"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    processor_model: Optional[str] = Field(description="处理器型号", default=None)
    physical_cpu_count: Optional[int] = Field(description="物理 CPU 数量", default=None)
    cores_per_cpu: Optional[int] = Field(description="每颗 CPU 核数", default=None)
    logical_processor_count: Optional[int] = Field(description="逻辑处理器数量", default=None)
    cpu_utilization: Optional[str] = Field(description="CPU 使用率", default=None)


class HostOSInfo(MyBaseModel):
    """主机操作系统信息 (来自主机会话)"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    caption: Optional[str] = Field(description="操作系统名称", default=None)
    version: Optional[str] = Field(description="版本号", default=None)
    build_number: Optional[str] = Field(description="内部版本号", default=None)
    install_date: Optional[str] = Field(description="安装时间", default=None)
    last_boot_time: Optional[str] = Field(description="上次启动时间", default=None)


# =============================================================================
# 虚拟机
# =============================================================================
class VMInfo(MyBaseModel):
    """虚拟机基本信息"""
    name: Optional[str] = Field(description="虚拟机名称", default=None)
    host_name: Optional[str] = Field(description="所在主机", default=None)
    status: Optional[str] = Field(description="运行状态", default=None)
    cpu_count: Optional[int] = Field(description="虚拟处理器数量", default=None)
    memory_gb: Optional[float] = Field(description="启动内存 (GB)", default=None)
    dynamic_memory_enabled: Optional[bool] = Field(description="是否启用动态内存", default=None)
    generation: Optional[int] = Field(description="虚拟机代数", default=None)
    operating_system: Optional[str] = Field(description="客户操作系统", default=None)


class VMDetail(VMInfo):
    """虚拟机详细信息"""
    dynamic_memory_min_gb: Optional[float] = Field(description="动态内存最小值 (GB)", default=None)
    dynamic_memory_max_gb: Optional[float] = Field(description="动态内存最大值 (GB)", default=None)
    highly_available: Optional[bool] = Field(description="是否高可用 (群集角色)", default=None)
    location: Optional[str] = Field(description="配置文件路径", default=None)
    creation_time: Optional[str] = Field(description="创建时间", default=None)


class VMStatsInfo(MyBaseModel):
    """虚拟机性能统计"""
    vm_name: Optional[str] = Field(description="虚拟机名称", default=None)
    cpu_utilization: Optional[str] = Field(description="CPU 使用率", default=None)
    memory_assigned_gb: Optional[float] = Field(description="已分配内存 (GB)", default=None)
    memory_demand_gb: Optional[float] = Field(description="内存需求 (GB)", default=None)
    memory_available_percent: Optional[str] = Field(description="可用内存比例", default=None)


class VirtualDiskInfo(MyBaseModel):
    """虚拟磁盘信息"""
    vm_name: Optional[str] = Field(description="虚拟机名称", default=None)
    bus_type: Optional[str] = Field(description="总线类型 (IDE/SCSI)", default=None)
    bus: Optional[int] = Field(description="总线编号", default=None)
    lun: Optional[int] = Field(description="LUN", default=None)
    location: Optional[str] = Field(description="VHD 文件路径", default=None)
    vhd_type: Optional[str] = Field(description="VHD 类型 (Fixed/Dynamic/Differencing)", default=None)
    vhd_format: Optional[str] = Field(description="VHD 格式 (VHD/VHDX)", default=None)
    size_gb: Optional[float] = Field(description="当前文件大小 (GB)", default=None)
    max_size_gb: Optional[float] = Field(description="最大容量 (GB)", default=None)
    used_percent: Optional[str] = Field(description="已用比例", default=None)


class VMNicInfo(MyBaseModel):
    """虚拟网卡信息"""
    vm_name: Optional[str] = Field(description="虚拟机名称", default=None)
    slot: Optional[int] = Field(description="插槽编号", default=None)
    mac_address: Optional[str] = Field(description="MAC 地址", default=None)
    mac_address_type: Optional[str] = Field(description="MAC 地址类型 (Static/Dynamic)", default=None)
    vm_network: Optional[str] = Field(description="VM 网络", default=None)
    logical_network: Optional[str] = Field(description="逻辑网络", default=None)
    vlan_enabled: Optional[bool] = Field(description="是否启用 VLAN", default=None)
    vlan_id: Optional[int] = Field(description="VLAN ID", default=None)
    ipv4_addresses: Optional[List[str]] = Field(description="IPv4 地址列表", default=None)


class CheckpointInfo(MyBaseModel):
    """虚拟机检查点"""
    vm_name: Optional[str] = Field(description="虚拟机名称", default=None)
    name: Optional[str] = Field(description="检查点名称", default=None)
    description: Optional[str] = Field(description="描述", default=None)
    added_time: Optional[str] = Field(description="创建时间", default=None)
    parent_checkpoint: Optional[str] = Field(description="父检查点", default=None)


class TimeSyncState(MyBaseModel):
    """时间同步集成服务状态"""
    vm_name: Optional[str] = Field(description="虚拟机名称", default=None)
    host_name: Optional[str] = Field(description="所在主机", default=None)
    enabled: Optional[bool] = Field(description="时间同步是否启用", default=None)
    changed: bool = Field(description="本次调用是否修改了状态", default=False)


# =============================================================================
# 网络
# =============================================================================
class HostAdapterInfo(MyBaseModel):
    """VMM 视角的主机物理网卡"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    name: Optional[str] = Field(description="网卡描述", default=None)
    connection_name: Optional[str] = Field(description="连接名称", default=None)
    mac_address: Optional[str] = Field(description="MAC 地址", default=None)
    max_bandwidth_mbps: Optional[int] = Field(description="最大带宽 (Mbps)", default=None)
    virtual_switch: Optional[str] = Field(description="绑定的虚拟交换机", default=None)
    logical_networks: Optional[List[str]] = Field(description="关联的逻辑网络", default=None)


class HostNicInfo(MyBaseModel):
    """主机操作系统视角的物理网卡"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    name: Optional[str] = Field(description="网卡名称", default=None)
    interface_description: Optional[str] = Field(description="接口描述", default=None)
    mac_address: Optional[str] = Field(description="MAC 地址", default=None)
    status: Optional[str] = Field(description="链路状态", default=None)
    link_speed: Optional[str] = Field(description="链路速率", default=None)
    driver_version: Optional[str] = Field(description="驱动版本", default=None)


class NicStatusInfo(MyBaseModel):
    """网卡综合状态 (主机网卡按 MAC 关联 VMM 网卡)"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    name: Optional[str] = Field(description="网卡名称", default=None)
    connection_name: Optional[str] = Field(description="VMM 连接名称", default=None)
    interface_description: Optional[str] = Field(description="接口描述", default=None)
    mac_address: Optional[str] = Field(description="MAC 地址", default=None)
    status: Optional[str] = Field(description="链路状态", default=None)
    link_speed: Optional[str] = Field(description="链路速率", default=None)
    virtual_switch: Optional[str] = Field(description="绑定的虚拟交换机", default=None)
    logical_networks: Optional[List[str]] = Field(description="关联的逻辑网络", default=None)


class LldpInfo(MyBaseModel):
    """物理交换机通过 LLDP 上报的邻居信息"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    connection_name: Optional[str] = Field(description="连接名称", default=None)
    mac_address: Optional[str] = Field(description="MAC 地址", default=None)
    chassis_id: Optional[str] = Field(description="交换机机箱 ID", default=None)
    port_id: Optional[str] = Field(description="交换机端口 ID", default=None)
    port_description: Optional[str] = Field(description="交换机端口描述", default=None)
    system_name: Optional[str] = Field(description="交换机名称", default=None)
    system_description: Optional[str] = Field(description="交换机系统描述", default=None)


# =============================================================================
# 存储
# =============================================================================
class StorageVolumeInfo(MyBaseModel):
    """主机存储卷 / 群集共享卷"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    name: Optional[str] = Field(description="卷路径", default=None)
    label: Optional[str] = Field(description="卷标", default=None)
    file_system: Optional[str] = Field(description="文件系统", default=None)
    capacity_gb: Optional[float] = Field(description="容量 (GB)", default=None)
    free_space_gb: Optional[float] = Field(description="剩余空间 (GB)", default=None)
    used_percent: Optional[str] = Field(description="已用比例", default=None)
    is_cluster_shared_volume: Optional[bool] = Field(description="是否为群集共享卷", default=None)


class HbaInfo(MyBaseModel):
    """光纤通道 HBA 端口"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    instance_name: Optional[str] = Field(description="实例名称", default=None)
    node_wwn: Optional[str] = Field(description="节点 WWN", default=None)
    port_wwn: Optional[str] = Field(description="端口 WWN", default=None)
    connection_type: Optional[str] = Field(description="连接类型", default=None)
    operational_status: Optional[str] = Field(description="运行状态", default=None)


class MpioInfo(MyBaseModel):
    """MPIO 多路径配置"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    path_verification_state: Optional[str] = Field(description="路径验证状态", default=None)
    path_verification_period: Optional[int] = Field(description="路径验证周期 (秒)", default=None)
    pdo_remove_period: Optional[int] = Field(description="PDO 移除周期 (秒)", default=None)
    retry_count: Optional[int] = Field(description="重试次数", default=None)
    retry_interval: Optional[int] = Field(description="重试间隔 (秒)", default=None)
    disk_timeout: Optional[int] = Field(description="磁盘超时 (秒)", default=None)
    load_balance_policy: Optional[str] = Field(description="默认负载均衡策略", default=None)


class HostDiskInfo(MyBaseModel):
    """主机磁盘"""
    host_name: Optional[str] = Field(description="主机名称", default=None)
    number: Optional[int] = Field(description="磁盘编号", default=None)
    friendly_name: Optional[str] = Field(description="磁盘名称", default=None)
    serial_number: Optional[str] = Field(description="序列号", default=None)
    bus_type: Optional[str] = Field(description="总线类型", default=None)
    size_gb: Optional[float] = Field(description="容量 (GB)", default=None)
    partition_style: Optional[str] = Field(description="分区形式 (RAW/GPT/MBR)", default=None)
    operational_status: Optional[str] = Field(description="运行状态", default=None)
    is_clustered: Optional[bool] = Field(description="是否已加入群集", default=None)


class SharedVolumeResult(MyBaseModel):
    """新建群集共享卷的结果"""
    cluster_name: Optional[str] = Field(description="集群名称", default=None)
    host_name: Optional[str] = Field(description="执行初始化的节点", default=None)
    serial_number: Optional[str] = Field(description="磁盘序列号", default=None)
    disk_number: Optional[int] = Field(description="磁盘编号", default=None)
    resource_name: Optional[str] = Field(description="群集资源名称", default=None)
    path: Optional[str] = Field(description="共享卷挂载路径", default=None)
