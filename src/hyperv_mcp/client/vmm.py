# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - VMM 客户端模块

封装与 System Center VMM 服务器以及 Hyper-V 主机的所有交互：
VMM 查询在管理服务器上执行，主机查询为每台主机单独建立 WinRM 会话。
"""

import os
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..models import (
    ErrorType,
    MCPError,
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
from ..utils.errors import TOOL_DESCRIBE_CLUSTER_NODES, not_found_error, parse_winrm_error
from ..utils.units import (
    bytes_to_gb,
    mb_to_gb,
    format_percent,
    percent_of,
    normalize_mac,
    format_wwn,
    format_link_speed,
)
from . import scripts
from .session import PowerShellSession


logger = logging.getLogger(__name__)

Row = Dict[str, Any]
SessionFactory = Callable[..., PowerShellSession]


def _blank_to_none(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


class VMMClient:
    """VMM 客户端封装 - 管理连接和全部报表/操作"""

    def __init__(self, server: str, username: str, password: str,
                 transport: str = "ntlm", cert_validation: str = "validate",
                 session_factory: SessionFactory = PowerShellSession):
        self.server = server
        self.username = username
        self.password = password
        self.transport = transport
        self.cert_validation = cert_validation
        self._session_factory = session_factory
        self._session = None

    def _open(self, target: str):
        return self._session_factory(
            target, self.username, self.password,
            transport=self.transport, cert_validation=self.cert_validation
        )

    def connect(self) -> Optional[MCPError]:
        """连接到 VMM 服务器并确认 VMM 模块可用"""
        try:
            self._session = self._open(self.server)
            rows = self.run_vmm(scripts.PING)
            if rows:
                logger.info(f"已连接 VMM {rows[0].get('Name')} (版本 {rows[0].get('ProductVersion')})")
            return None
        except Exception as e:
            self._session = None
            return parse_winrm_error(e, "connect", self.server)

    def disconnect(self):
        self._session = None

    def is_connected(self) -> bool:
        return self._session is not None

    def run_vmm(self, script: str, **params) -> List[Row]:
        """在 VMM 服务器上执行脚本 ($vmm 已就绪)"""
        return self._session.run(scripts.VMM_PREAMBLE + script, Server=self.server, **params)

    def host_session(self, target: str):
        """为目标主机新建会话，不与 VMM 会话共享"""
        return self._open(target)

    # =========================================================================
    # 查找
    # =========================================================================
    def find_cluster(self, cluster_name: str) -> Optional[Row]:
        rows = self.run_vmm(scripts.CLUSTERS, ClusterName=cluster_name)
        return rows[0] if rows else None

    def find_host(self, host_name: str) -> Optional[Row]:
        rows = self.run_vmm(scripts.HOSTS, HostName=host_name, HostGroup=None)
        return rows[0] if rows else None

    def find_vm(self, vm_name: str) -> Optional[Row]:
        rows = self.run_vmm(scripts.VM_DETAIL, VMName=vm_name)
        return rows[0] if rows else None

    def _host_target(self, host_name: str) -> Tuple[Optional[str], Optional[MCPError]]:
        """解析主机会话目标 (优先 FQDN)"""
        row = self.find_host(host_name)
        if not row:
            return None, not_found_error("host", host_name)
        return row.get("FQDN") or row.get("Name"), None

    # =========================================================================
    # 集群与主机
    # =========================================================================
    def get_clusters(self) -> List[ClusterInfo]:
        """获取所有集群"""
        rows = self.run_vmm(scripts.CLUSTERS, ClusterName=None)
        return [
            ClusterInfo(
                name=row.get("Name"),
                host_group=_blank_to_none(row.get("HostGroup")),
                node_count=row.get("NodeCount"),
                cluster_reserve=row.get("ClusterReserve"),
                vm_count=row.get("VMCount"),
            )
            for row in rows
        ]

    def get_cluster_nodes(self, cluster_name: str) -> Tuple[Optional[List[HostInfo]], Optional[MCPError]]:
        """获取集群节点"""
        if not self.find_cluster(cluster_name):
            return None, not_found_error("cluster", cluster_name)

        rows = self.run_vmm(scripts.CLUSTER_NODES, ClusterName=cluster_name)
        return [self._host_info(row) for row in rows], None

    def get_hosts(self, host_group: Optional[str] = None) -> List[HostInfo]:
        """获取 VMM 管理的主机，可按主机组筛选"""
        rows = self.run_vmm(scripts.HOSTS, HostName=None, HostGroup=host_group)
        return [self._host_info(row) for row in rows]

    @staticmethod
    def _host_info(row: Row) -> HostInfo:
        return HostInfo(
            name=row.get("Name"),
            cluster_name=_blank_to_none(row.get("ClusterName")),
            host_group=_blank_to_none(row.get("HostGroup")),
            overall_state=_blank_to_none(row.get("OverallState")),
            communication_state=_blank_to_none(row.get("CommunicationState")),
            vm_count=row.get("VMCount"),
            os_version=_blank_to_none(row.get("OSVersion")),
        )

    def get_host_memory(self, host_name: str) -> Tuple[Optional[HostMemoryInfo], Optional[MCPError]]:
        """
        获取主机内存

        VMM 中 TotalMemory 单位为字节，AvailableMemory 单位为 MB。
        """
        rows = self.run_vmm(scripts.HOST_MEMORY, HostName=host_name)
        if not rows:
            return None, not_found_error("host", host_name)

        row = rows[0]
        total = row.get("TotalMemory")
        available_mb = row.get("AvailableMemory")
        available = available_mb * 1024 * 1024 if available_mb is not None else None
        used = total - available if total is not None and available is not None else None

        return HostMemoryInfo(
            host_name=row.get("Name"),
            total_memory_gb=bytes_to_gb(total),
            available_memory_gb=mb_to_gb(available_mb),
            used_memory_gb=bytes_to_gb(used),
            used_percent=percent_of(used, total),
        ), None

    def get_host_cpu(self, host_name: str) -> Tuple[Optional[HostCpuInfo], Optional[MCPError]]:
        """获取主机处理器信息"""
        rows = self.run_vmm(scripts.HOST_CPU, HostName=host_name)
        if not rows:
            return None, not_found_error("host", host_name)

        row = rows[0]
        return HostCpuInfo(
            host_name=row.get("Name"),
            processor_model=row.get("ProcessorModel"),
            physical_cpu_count=row.get("PhysicalCPUCount"),
            cores_per_cpu=row.get("CoresPerCPU"),
            logical_processor_count=row.get("LogicalProcessorCount"),
            cpu_utilization=format_percent(row.get("CpuUtilization")),
        ), None

    # =========================================================================
    # 虚拟机
    # =========================================================================
    def _vms_on(self, host_names: List[str]) -> List[VMInfo]:
        rows = self.run_vmm(scripts.VMS, HostNames=list(host_names))
        return [
            VMInfo(
                name=row.get("Name"),
                host_name=_blank_to_none(row.get("HostName")),
                status=_blank_to_none(row.get("Status")),
                cpu_count=row.get("CPUCount"),
                memory_gb=mb_to_gb(row.get("Memory")),
                dynamic_memory_enabled=row.get("DynamicMemoryEnabled"),
                generation=row.get("Generation"),
                operating_system=_blank_to_none(row.get("OperatingSystem")),
            )
            for row in rows
        ]

    def get_host_vms(self, host_name: str) -> Tuple[Optional[List[VMInfo]], Optional[MCPError]]:
        """获取主机上的虚拟机"""
        row = self.find_host(host_name)
        if not row:
            return None, not_found_error("host", host_name)
        return self._vms_on([row.get("Name")]), None

    def get_cluster_vms(self, cluster_name: str) -> Tuple[Optional[List[VMInfo]], Optional[MCPError]]:
        """获取集群所有节点上的虚拟机"""
        cluster = self.find_cluster(cluster_name)
        if not cluster:
            return None, not_found_error("cluster", cluster_name)

        nodes = cluster.get("Nodes") or []
        if not nodes:
            return [], None
        return self._vms_on(nodes), None

    def get_vm(self, vm_name: str) -> Tuple[Optional[VMDetail], Optional[MCPError]]:
        """获取虚拟机详细信息"""
        row = self.find_vm(vm_name)
        if not row:
            return None, not_found_error("vm", vm_name)

        return VMDetail(
            name=row.get("Name"),
            host_name=_blank_to_none(row.get("HostName")),
            status=_blank_to_none(row.get("Status")),
            cpu_count=row.get("CPUCount"),
            memory_gb=mb_to_gb(row.get("Memory")),
            dynamic_memory_enabled=row.get("DynamicMemoryEnabled"),
            dynamic_memory_min_gb=mb_to_gb(row.get("DynamicMemoryMinimumMB")),
            dynamic_memory_max_gb=mb_to_gb(row.get("DynamicMemoryMaximumMB")),
            generation=row.get("Generation"),
            operating_system=_blank_to_none(row.get("OperatingSystem")),
            highly_available=row.get("IsHighlyAvailable"),
            location=row.get("Location"),
            creation_time=row.get("CreationTime"),
        ), None

    def get_vm_stats(self, vm_name: str) -> Tuple[Optional[VMStatsInfo], Optional[MCPError]]:
        """获取虚拟机 CPU/内存统计"""
        rows = self.run_vmm(scripts.VM_STATS, VMName=vm_name)
        if not rows:
            return None, not_found_error("vm", vm_name)

        row = rows[0]
        return VMStatsInfo(
            vm_name=row.get("Name"),
            cpu_utilization=format_percent(row.get("PerfCPUUtilization")),
            memory_assigned_gb=mb_to_gb(row.get("MemoryAssignedMB")),
            memory_demand_gb=mb_to_gb(row.get("DynamicMemoryDemandMB")),
            memory_available_percent=format_percent(row.get("MemoryAvailablePercentage")),
        ), None

    def get_vm_disks(self, vm_name: str) -> Tuple[Optional[List[VirtualDiskInfo]], Optional[MCPError]]:
        """获取虚拟机的虚拟磁盘"""
        vm = self.find_vm(vm_name)
        if not vm:
            return None, not_found_error("vm", vm_name)

        disks = []
        for row in self.run_vmm(scripts.VM_DISKS, VMName=vm_name):
            size = row.get("Size")
            max_size = row.get("MaximumSize")
            disks.append(VirtualDiskInfo(
                vm_name=vm.get("Name"),
                bus_type=_blank_to_none(row.get("BusType")),
                bus=row.get("Bus"),
                lun=row.get("Lun"),
                location=row.get("Location"),
                vhd_type=_blank_to_none(row.get("VHDType")),
                vhd_format=_blank_to_none(row.get("VHDFormat")),
                size_gb=bytes_to_gb(size),
                max_size_gb=bytes_to_gb(max_size),
                used_percent=percent_of(size, max_size),
            ))
        return disks, None

    def get_vm_nics(self, vm_name: str) -> Tuple[Optional[List[VMNicInfo]], Optional[MCPError]]:
        """获取虚拟机网卡"""
        vm = self.find_vm(vm_name)
        if not vm:
            return None, not_found_error("vm", vm_name)

        return [
            VMNicInfo(
                vm_name=vm.get("Name"),
                slot=row.get("SlotId"),
                mac_address=normalize_mac(row.get("MACAddress")),
                mac_address_type=_blank_to_none(row.get("MACAddressType")),
                vm_network=_blank_to_none(row.get("VMNetwork")),
                logical_network=_blank_to_none(row.get("LogicalNetwork")),
                vlan_enabled=row.get("VLanEnabled"),
                vlan_id=row.get("VLanID"),
                ipv4_addresses=row.get("IPv4Addresses") or [],
            )
            for row in self.run_vmm(scripts.VM_NICS, VMName=vm_name)
        ], None

    def get_vm_checkpoints(self, vm_name: str) -> Tuple[Optional[List[CheckpointInfo]], Optional[MCPError]]:
        """获取虚拟机检查点"""
        vm = self.find_vm(vm_name)
        if not vm:
            return None, not_found_error("vm", vm_name)

        return [
            CheckpointInfo(
                vm_name=vm.get("Name"),
                name=row.get("Name"),
                description=_blank_to_none(row.get("Description")),
                added_time=row.get("AddedTime"),
                parent_checkpoint=_blank_to_none(row.get("ParentCheckpoint")),
            )
            for row in self.run_vmm(scripts.VM_CHECKPOINTS, VMName=vm_name)
        ], None

    # =========================================================================
    # 存储
    # =========================================================================
    @staticmethod
    def _volume_info(host_name: str, row: Row) -> StorageVolumeInfo:
        capacity = row.get("Capacity")
        free = row.get("FreeSpace")
        used = capacity - free if capacity is not None and free is not None else None
        return StorageVolumeInfo(
            host_name=host_name,
            name=row.get("Name"),
            label=_blank_to_none(row.get("VolumeLabel")),
            file_system=_blank_to_none(row.get("FileSystem")),
            capacity_gb=bytes_to_gb(capacity),
            free_space_gb=bytes_to_gb(free),
            used_percent=percent_of(used, capacity),
            is_cluster_shared_volume=row.get("IsClusterSharedVolume"),
        )

    def get_host_volumes(self, host_name: str) -> Tuple[Optional[List[StorageVolumeInfo]], Optional[MCPError]]:
        """获取主机存储卷"""
        row = self.find_host(host_name)
        if not row:
            return None, not_found_error("host", host_name)

        name = row.get("Name")
        rows = self.run_vmm(scripts.HOST_VOLUMES, HostName=name)
        return [self._volume_info(name, r) for r in rows], None

    def get_cluster_shared_volumes(self, cluster_name: str) -> Tuple[Optional[List[StorageVolumeInfo]], Optional[MCPError]]:
        """获取集群共享卷 (从第一个节点读取)"""
        cluster = self.find_cluster(cluster_name)
        if not cluster:
            return None, not_found_error("cluster", cluster_name)

        nodes = cluster.get("Nodes") or []
        if not nodes:
            return [], None

        rows = self.run_vmm(scripts.HOST_VOLUMES, HostName=nodes[0])
        return [
            self._volume_info(nodes[0], r)
            for r in rows
            if r.get("IsClusterSharedVolume")
        ], None

    # =========================================================================
    # 网络 (VMM)
    # =========================================================================
    def get_host_adapters(self, host_name: str) -> Tuple[Optional[List[HostAdapterInfo]], Optional[MCPError]]:
        """获取 VMM 记录的主机物理网卡"""
        row = self.find_host(host_name)
        if not row:
            return None, not_found_error("host", host_name)

        name = row.get("Name")
        return [
            HostAdapterInfo(
                host_name=name,
                name=r.get("Name"),
                connection_name=_blank_to_none(r.get("ConnectionName")),
                mac_address=normalize_mac(r.get("MacAddress")),
                max_bandwidth_mbps=r.get("MaxBandwidth"),
                virtual_switch=_blank_to_none(r.get("VirtualSwitch")),
                logical_networks=r.get("LogicalNetworks") or [],
            )
            for r in self.run_vmm(scripts.HOST_ADAPTERS, HostName=name)
        ], None

    def get_host_lldp(self, host_name: str) -> Tuple[Optional[List[LldpInfo]], Optional[MCPError]]:
        """获取主机物理网卡的 LLDP 邻居信息"""
        row = self.find_host(host_name)
        if not row:
            return None, not_found_error("host", host_name)

        name = row.get("Name")
        return [
            LldpInfo(
                host_name=name,
                connection_name=_blank_to_none(r.get("ConnectionName")),
                mac_address=normalize_mac(r.get("MacAddress")),
                chassis_id=_blank_to_none(r.get("ChassisId")),
                port_id=_blank_to_none(r.get("PortId")),
                port_description=_blank_to_none(r.get("PortDescription")),
                system_name=_blank_to_none(r.get("SystemName")),
                system_description=_blank_to_none(r.get("SystemDescription")),
            )
            for r in self.run_vmm(scripts.HOST_LLDP, HostName=name)
        ], None

    # =========================================================================
    # 主机会话查询
    # =========================================================================
    def _run_on_host(self, host_name: str, script: str, **params) -> Tuple[Optional[str], Optional[List[Row]], Optional[MCPError]]:
        target, error = self._host_target(host_name)
        if error:
            return None, None, error
        return target, self.host_session(target).run(script, **params), None

    def get_host_os(self, host_name: str) -> Tuple[Optional[HostOSInfo], Optional[MCPError]]:
        """获取主机操作系统信息"""
        target, rows, error = self._run_on_host(host_name, scripts.HOST_OS)
        if error:
            return None, error
        if not rows:
            return None, MCPError(
                error_type=ErrorType.API_ERROR,
                message=f"主机 '{target}' 未返回操作系统信息",
                suggestion="请检查主机上的 WMI/CIM 服务"
            )

        row = rows[0]
        return HostOSInfo(
            host_name=target,
            caption=row.get("Caption"),
            version=row.get("Version"),
            build_number=row.get("BuildNumber"),
            install_date=row.get("InstallDate"),
            last_boot_time=row.get("LastBootUpTime"),
        ), None

    def get_host_nics(self, host_name: str) -> Tuple[Optional[List[HostNicInfo]], Optional[MCPError]]:
        """获取主机操作系统中的物理网卡"""
        target, rows, error = self._run_on_host(host_name, scripts.HOST_NICS)
        if error:
            return None, error

        return [
            HostNicInfo(
                host_name=target,
                name=row.get("Name"),
                interface_description=row.get("InterfaceDescription"),
                mac_address=normalize_mac(row.get("MacAddress")),
                status=_blank_to_none(row.get("Status")),
                link_speed=row.get("LinkSpeed") or format_link_speed(row.get("Speed")),
                driver_version=row.get("DriverVersion"),
            )
            for row in rows
        ], None

    def get_host_nic_status(self, host_name: str) -> Tuple[Optional[List[NicStatusInfo]], Optional[MCPError]]:
        """
        网卡综合状态

        以主机操作系统网卡为主表，按 MAC 地址关联 VMM 网卡；
        VMM 中没有对应记录的网卡，其 VMM 字段为 None。
        """
        nics, error = self.get_host_nics(host_name)
        if error:
            return None, error

        adapters, error = self.get_host_adapters(host_name)
        if error:
            return None, error

        by_mac = {a.mac_address: a for a in adapters if a.mac_address}
        result = []
        for nic in nics:
            adapter = by_mac.get(nic.mac_address)
            result.append(NicStatusInfo(
                host_name=nic.host_name,
                name=nic.name,
                connection_name=adapter.connection_name if adapter else None,
                interface_description=nic.interface_description,
                mac_address=nic.mac_address,
                status=nic.status,
                link_speed=nic.link_speed,
                virtual_switch=adapter.virtual_switch if adapter else None,
                logical_networks=adapter.logical_networks if adapter else None,
            ))
        return result, None

    def get_host_hbas(self, host_name: str) -> Tuple[Optional[List[HbaInfo]], Optional[MCPError]]:
        """获取主机光纤通道 HBA 端口及 WWN"""
        target, rows, error = self._run_on_host(host_name, scripts.HOST_HBAS)
        if error:
            return None, error

        return [
            HbaInfo(
                host_name=target,
                instance_name=row.get("InstanceName"),
                node_wwn=format_wwn(row.get("NodeAddress")),
                port_wwn=format_wwn(row.get("PortAddress")),
                connection_type=_blank_to_none(row.get("ConnectionType")),
                operational_status=_blank_to_none(row.get("OperationalStatus")),
            )
            for row in rows
        ], None

    def get_host_mpio(self, host_name: str) -> Tuple[Optional[MpioInfo], Optional[MCPError]]:
        """获取主机 MPIO 配置"""
        target, rows, error = self._run_on_host(host_name, scripts.HOST_MPIO)
        if error:
            return None, error
        if not rows:
            return None, MCPError(
                error_type=ErrorType.API_ERROR,
                message=f"主机 '{target}' 未返回 MPIO 配置",
                suggestion="请确认主机已安装 Multipath-IO 功能"
            )

        row = rows[0]
        return MpioInfo(
            host_name=target,
            path_verification_state=_blank_to_none(row.get("PathVerificationState")),
            path_verification_period=row.get("PathVerificationPeriod"),
            pdo_remove_period=row.get("PDORemovePeriod"),
            retry_count=row.get("RetryCount"),
            retry_interval=row.get("RetryInterval"),
            disk_timeout=row.get("DiskTimeoutValue"),
            load_balance_policy=_blank_to_none(row.get("LoadBalancePolicy")),
        ), None

    def get_host_disks(self, host_name: str) -> Tuple[Optional[List[HostDiskInfo]], Optional[MCPError]]:
        """获取主机可见磁盘"""
        target, rows, error = self._run_on_host(host_name, scripts.HOST_DISKS)
        if error:
            return None, error

        return [
            HostDiskInfo(
                host_name=target,
                number=row.get("Number"),
                friendly_name=row.get("FriendlyName"),
                serial_number=_blank_to_none(row.get("SerialNumber")),
                bus_type=_blank_to_none(row.get("BusType")),
                size_gb=bytes_to_gb(row.get("Size")),
                partition_style=_blank_to_none(row.get("PartitionStyle")),
                operational_status=_blank_to_none(row.get("OperationalStatus")),
                is_clustered=row.get("IsClustered"),
            )
            for row in rows
        ], None

    # =========================================================================
    # 变更操作
    # =========================================================================
    @staticmethod
    def _time_sync_missing(vm_name: str, host: str) -> MCPError:
        return MCPError(
            error_type=ErrorType.API_ERROR,
            message=f"未能在主机 '{host}' 上读取虚拟机 '{vm_name}' 的时间同步集成服务",
            suggestion="请确认虚拟机存在于该 Hyper-V 主机且集成服务可用"
        )

    def get_vm_time_sync(self, vm_name: str) -> Tuple[Optional[TimeSyncState], Optional[MCPError]]:
        """读取时间同步集成服务状态"""
        vm = self.find_vm(vm_name)
        if not vm:
            return None, not_found_error("vm", vm_name)

        host = vm.get("HostFQDN") or vm.get("HostName")
        rows = self.host_session(host).run(
            scripts.TIME_SYNC_GET, VMName=vm.get("Name"), ServiceId=scripts.TIME_SYNC_SERVICE_ID
        )
        if not rows:
            return None, self._time_sync_missing(vm_name, host)

        return TimeSyncState(
            vm_name=vm.get("Name"), host_name=host, enabled=rows[0].get("Enabled"), changed=False
        ), None

    def set_vm_time_sync(self, vm_name: str, enabled: bool) -> Tuple[Optional[TimeSyncState], Optional[MCPError]]:
        """
        启用/禁用时间同步集成服务

        已处于目标状态时不做修改 (changed=False)，重复调用结果一致。
        """
        vm = self.find_vm(vm_name)
        if not vm:
            return None, not_found_error("vm", vm_name)

        host = vm.get("HostFQDN") or vm.get("HostName")
        session = self.host_session(host)
        rows = session.run(scripts.TIME_SYNC_GET, VMName=vm.get("Name"), ServiceId=scripts.TIME_SYNC_SERVICE_ID)
        if not rows:
            return None, self._time_sync_missing(vm_name, host)

        if rows[0].get("Enabled") == enabled:
            logger.info(f"虚拟机 {vm_name} 的时间同步已是 {'启用' if enabled else '禁用'} 状态，无需修改")
            return TimeSyncState(vm_name=vm.get("Name"), host_name=host, enabled=enabled, changed=False), None

        rows = session.run(
            scripts.TIME_SYNC_SET, VMName=vm.get("Name"), ServiceId=scripts.TIME_SYNC_SERVICE_ID, Enabled=enabled
        )
        if not rows:
            return None, self._time_sync_missing(vm_name, host)

        logger.info(f"虚拟机 {vm_name} 的时间同步已{'启用' if enabled else '禁用'}")
        return TimeSyncState(
            vm_name=vm.get("Name"), host_name=host, enabled=rows[0].get("Enabled"), changed=True
        ), None

    def create_cluster_shared_volume(
        self,
        cluster_name: str,
        host_name: str,
        serial_number: str,
        volume_name: str
    ) -> Tuple[Optional[SharedVolumeResult], Optional[MCPError]]:
        """
        按序列号新建群集共享卷

        1. 在节点上初始化、分区并格式化磁盘 (磁盘不存在则直接失败，集群不受影响)
        2. 加入群集磁盘并转换为 CSV，重命名资源和挂载目录
        没有回滚：步骤二失败时步骤一的格式化结果保留在磁盘上。
        """
        cluster = self.find_cluster(cluster_name)
        if not cluster:
            return None, not_found_error("cluster", cluster_name)

        node = self._match_node(cluster.get("Nodes") or [], host_name)
        if not node:
            return None, MCPError(
                error_type=ErrorType.INVALID_PARAMETER,
                parameter="host_name",
                message=f"主机 '{host_name}' 不是集群 '{cluster_name}' 的节点",
                suggestion="请使用 describeClusterNodes 查询集群节点",
                related_tools=[TOOL_DESCRIBE_CLUSTER_NODES]
            )

        session = self.host_session(node)

        # 步骤一：准备磁盘
        rows = session.run(scripts.CSV_PREPARE_DISK, SerialNumber=serial_number, VolumeName=volume_name)
        if not rows:
            return None, not_found_error("disk", serial_number)
        disk_number = rows[0].get("Number")
        logger.info(f"{node} 上序列号为 {serial_number} 的磁盘 {disk_number} 已完成初始化和格式化")

        # 步骤二：注册为 CSV
        rows = session.run(scripts.CSV_REGISTER, DiskNumber=disk_number, VolumeName=volume_name)
        if not rows:
            logger.error(f"磁盘 {disk_number} 不在集群 {cluster_name} 的可用磁盘中")
            return None, MCPError(
                error_type=ErrorType.API_ERROR,
                message=f"磁盘 {disk_number} 未出现在集群可用磁盘中，无法创建共享卷",
                suggestion="请确认所有节点均可访问该 LUN，然后在故障转移群集管理器中检查"
            )
        logger.info(f"已在集群 {cluster_name} 上创建共享卷 {volume_name}: {rows[0].get('Path')}")

        try:
            self.run_vmm(scripts.REFRESH_CLUSTER, ClusterName=cluster_name)
        except Exception as e:
            logger.warning(f"刷新 VMM 中的集群 {cluster_name} 失败: {e}")

        return SharedVolumeResult(
            cluster_name=cluster.get("Name"),
            host_name=node,
            serial_number=serial_number,
            disk_number=disk_number,
            resource_name=rows[0].get("ResourceName"),
            path=rows[0].get("Path"),
        ), None

    @staticmethod
    def _match_node(nodes: List[str], host_name: str) -> Optional[str]:
        """按完整名称或短名称匹配集群节点"""
        wanted = host_name.lower()
        for node in nodes:
            name = node.lower()
            if name == wanted or name.split(".")[0] == wanted.split(".")[0]:
                return node
        return None


# =============================================================================
# 客户端获取
# =============================================================================
def get_vmm_client() -> Tuple[Optional[VMMClient], Optional[MCPError]]:
    """
    按环境变量创建并连接 VMM 客户端

    每次调用都建立新连接，不在调用之间复用会话。
    """
    server = os.getenv("SCVMM_SERVER")
    username = os.getenv("SCVMM_USERNAME")
    password = os.getenv("SCVMM_PASSWORD")
    transport = os.getenv("SCVMM_TRANSPORT", "ntlm")
    cert_validation = os.getenv("SCVMM_CERT_VALIDATION", "validate")

    if not server or not username or not password:
        return None, MCPError(
            error_type=ErrorType.MISSING_PARAMETER,
            message="VMM 连接配置不完整",
            suggestion="请设置环境变量: SCVMM_SERVER, SCVMM_USERNAME, SCVMM_PASSWORD"
        )

    client = VMMClient(server, username, password, transport, cert_validation)
    error = client.connect()
    if error:
        return None, error

    return client, None
