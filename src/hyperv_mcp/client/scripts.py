# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - PowerShell 脚本块

VMM 脚本在管理服务器上执行 (依赖 VMM_PREAMBLE 中的 $vmm)，
主机脚本直接在目标 Hyper-V 主机上执行。
参数由 session.render_script 以 $Name = 'value' 形式注入，
每个脚本把结果放进 $rows，最后统一以 EMIT 输出 JSON 数组。
"""

EMIT = "\nConvertTo-Json -InputObject @($rows) -Depth 4 -Compress\n"

EMIT_EMPTY_AND_RETURN = "ConvertTo-Json -InputObject @() -Compress; return"

VMM_PREAMBLE = """
Import-Module VirtualMachineManager
$vmm = Get-SCVMMServer -ComputerName $Server
"""

# 时间同步集成服务的固定 ID，不受系统语言影响
TIME_SYNC_SERVICE_ID = "2497F4DE-E9FA-4204-80E4-4B75C46419C0"


# =============================================================================
# VMM 服务器脚本
# =============================================================================
PING = """
$rows = [pscustomobject]@{ Name = $vmm.Name; ProductVersion = [string]$vmm.ProductVersion }
""" + EMIT

CLUSTERS = """
$rows = Get-SCVMHostCluster -VMMServer $vmm |
    Where-Object { -not $ClusterName -or $_.Name -eq $ClusterName -or $_.ClusterName -eq $ClusterName } |
    ForEach-Object {
        $nodes = @($_.Nodes)
        [pscustomobject]@{
            Name           = $_.ClusterName
            HostGroup      = [string]$_.HostGroup.Path
            NodeCount      = $nodes.Count
            ClusterReserve = $_.ClusterReserve
            VMCount        = @($nodes | ForEach-Object { $_.VMs }).Count
            Nodes          = @($nodes | ForEach-Object { $_.Name })
        }
    }
""" + EMIT

HOSTS = """
$rows = Get-SCVMHost -VMMServer $vmm |
    Where-Object { -not $HostName -or $_.Name -eq $HostName -or $_.ComputerName -eq $HostName } |
    Where-Object { -not $HostGroup -or $_.VMHostGroup.Name -eq $HostGroup -or $_.VMHostGroup.Path -like "$HostGroup*" } |
    ForEach-Object {
        [pscustomobject]@{
            Name               = $_.Name
            FQDN               = $_.FQDN
            ClusterName        = [string]$_.HostCluster.ClusterName
            HostGroup          = [string]$_.VMHostGroup.Path
            OverallState       = [string]$_.OverallState
            CommunicationState = [string]$_.CommunicationState
            VMCount            = @($_.VMs).Count
            OSVersion          = [string]$_.OperatingSystem.Version
        }
    }
""" + EMIT

CLUSTER_NODES = """
$cluster = Get-SCVMHostCluster -VMMServer $vmm |
    Where-Object { $_.Name -eq $ClusterName -or $_.ClusterName -eq $ClusterName } |
    Select-Object -First 1
$rows = @($cluster.Nodes) | ForEach-Object {
    [pscustomobject]@{
        Name               = $_.Name
        FQDN               = $_.FQDN
        ClusterName        = $cluster.ClusterName
        HostGroup          = [string]$_.VMHostGroup.Path
        OverallState       = [string]$_.OverallState
        CommunicationState = [string]$_.CommunicationState
        VMCount            = @($_.VMs).Count
        OSVersion          = [string]$_.OperatingSystem.Version
    }
}
""" + EMIT

_HOST_SELECTOR = """
$vmhost = Get-SCVMHost -VMMServer $vmm |
    Where-Object { $_.Name -eq $HostName -or $_.ComputerName -eq $HostName } |
    Select-Object -First 1
"""

HOST_MEMORY = _HOST_SELECTOR + """
$rows = @($vmhost) | Where-Object { $_ } | ForEach-Object {
    [pscustomobject]@{
        Name            = $_.Name
        TotalMemory     = $_.TotalMemory
        AvailableMemory = $_.AvailableMemory
    }
}
""" + EMIT

HOST_CPU = _HOST_SELECTOR + """
$rows = @($vmhost) | Where-Object { $_ } | ForEach-Object {
    [pscustomobject]@{
        Name                  = $_.Name
        ProcessorModel        = $_.ProcessorModel
        PhysicalCPUCount      = $_.PhysicalCPUCount
        CoresPerCPU           = $_.CoresPerCPU
        LogicalProcessorCount = $_.LogicalProcessorCount
        CpuUtilization        = $_.CpuUtilization
    }
}
""" + EMIT

VMS = """
$rows = foreach ($name in $HostNames) {
    $vmhost = Get-SCVMHost -VMMServer $vmm | Where-Object { $_.Name -eq $name } | Select-Object -First 1
    if (-not $vmhost) { continue }
    Get-SCVirtualMachine -VMMServer $vmm -VMHost $vmhost | ForEach-Object {
        [pscustomobject]@{
            Name                 = $_.Name
            HostName             = [string]$_.VMHost.Name
            Status               = [string]$_.Status
            CPUCount             = $_.CPUCount
            Memory               = $_.Memory
            DynamicMemoryEnabled = $_.DynamicMemoryEnabled
            Generation           = $_.Generation
            OperatingSystem      = [string]$_.OperatingSystem.Name
        }
    }
}
""" + EMIT

_VM_SELECTOR = """
$vm = Get-SCVirtualMachine -VMMServer $vmm -Name $VMName | Select-Object -First 1
"""

VM_DETAIL = _VM_SELECTOR + """
$rows = @($vm) | Where-Object { $_ } | ForEach-Object {
    [pscustomobject]@{
        Name                   = $_.Name
        HostName               = [string]$_.VMHost.Name
        HostFQDN               = [string]$_.VMHost.FQDN
        Status                 = [string]$_.Status
        CPUCount               = $_.CPUCount
        Memory                 = $_.Memory
        DynamicMemoryEnabled   = $_.DynamicMemoryEnabled
        DynamicMemoryMinimumMB = $_.DynamicMemoryMinimumMB
        DynamicMemoryMaximumMB = $_.DynamicMemoryMaximumMB
        Generation             = $_.Generation
        OperatingSystem        = [string]$_.OperatingSystem.Name
        IsHighlyAvailable      = $_.IsHighlyAvailable
        Location               = $_.Location
        CreationTime           = $(if ($_.CreationTime) { $_.CreationTime.ToString('s') })
    }
}
""" + EMIT

VM_STATS = _VM_SELECTOR + """
$rows = @($vm) | Where-Object { $_ } | ForEach-Object {
    [pscustomobject]@{
        Name                      = $_.Name
        PerfCPUUtilization        = $_.PerfCPUUtilization
        MemoryAssignedMB          = $_.MemoryAssignedMB
        DynamicMemoryDemandMB     = $_.DynamicMemoryDemandMB
        MemoryAvailablePercentage = $_.MemoryAvailablePercentage
    }
}
""" + EMIT

VM_DISKS = _VM_SELECTOR + """
$rows = Get-SCVirtualDiskDrive -VM $vm | ForEach-Object {
    $vhd = $_.VirtualHardDisk
    [pscustomobject]@{
        BusType     = [string]$_.BusType
        Bus         = $_.Bus
        Lun         = $_.Lun
        Location    = $vhd.Location
        VHDType     = [string]$vhd.VHDType
        VHDFormat   = [string]$vhd.VHDFormatType
        Size        = $vhd.Size
        MaximumSize = $vhd.MaximumSize
    }
}
""" + EMIT

VM_NICS = _VM_SELECTOR + """
$rows = Get-SCVirtualNetworkAdapter -VM $vm | ForEach-Object {
    [pscustomobject]@{
        SlotId         = $_.SlotId
        MACAddress     = $_.MACAddress
        MACAddressType = [string]$_.MACAddressType
        VMNetwork      = [string]$_.VMNetwork.Name
        LogicalNetwork = [string]$_.LogicalNetwork.Name
        VLanEnabled    = $_.VLanEnabled
        VLanID         = $_.VLanID
        IPv4Addresses  = @($_.IPv4Addresses)
    }
}
""" + EMIT

VM_CHECKPOINTS = _VM_SELECTOR + """
$rows = Get-SCVMCheckpoint -VM $vm | ForEach-Object {
    [pscustomobject]@{
        Name             = $_.Name
        Description      = $_.Description
        AddedTime        = $(if ($_.AddedTime) { $_.AddedTime.ToString('s') })
        ParentCheckpoint = [string]$_.ParentCheckpoint.Name
    }
}
""" + EMIT

HOST_VOLUMES = _HOST_SELECTOR + """
$rows = Get-SCStorageVolume -VMHost $vmhost | ForEach-Object {
    [pscustomobject]@{
        Name                  = $_.Name
        VolumeLabel           = $_.VolumeLabel
        FileSystem            = [string]$_.FileSystem
        Capacity              = $_.Capacity
        FreeSpace             = $_.FreeSpace
        IsClusterSharedVolume = $_.IsClusterSharedVolume
    }
}
""" + EMIT

HOST_ADAPTERS = _HOST_SELECTOR + """
$rows = Get-SCVMHostNetworkAdapter -VMHost $vmhost | ForEach-Object {
    [pscustomobject]@{
        Name            = $_.Name
        ConnectionName  = $_.ConnectionName
        MacAddress      = $_.MacAddress
        MaxBandwidth    = $_.MaxBandwidth
        VirtualSwitch   = [string]$_.VirtualNetwork.Name
        LogicalNetworks = @($_.LogicalNetworks | ForEach-Object { $_.Name })
    }
}
""" + EMIT

HOST_LLDP = _HOST_SELECTOR + """
$rows = Get-SCVMHostNetworkAdapter -VMHost $vmhost | ForEach-Object {
    $lldp = $_.LldpInfo
    [pscustomobject]@{
        ConnectionName    = $_.ConnectionName
        MacAddress        = $_.MacAddress
        ChassisId         = $lldp.ChassisId
        PortId            = $lldp.PortId
        PortDescription   = $lldp.PortDescription
        SystemName        = $lldp.SystemName
        SystemDescription = $lldp.SystemDescription
    }
}
""" + EMIT

REFRESH_CLUSTER = """
$cluster = Get-SCVMHostCluster -VMMServer $vmm |
    Where-Object { $_.Name -eq $ClusterName -or $_.ClusterName -eq $ClusterName } |
    Select-Object -First 1
$rows = @(Read-SCVMHostCluster -VMHostCluster $cluster | ForEach-Object { [pscustomobject]@{ Name = $_.ClusterName } })
""" + EMIT


# =============================================================================
# 主机脚本
# =============================================================================
HOST_OS = """
$rows = Get-CimInstance -ClassName Win32_OperatingSystem | ForEach-Object {
    [pscustomobject]@{
        Caption        = $_.Caption
        Version        = $_.Version
        BuildNumber    = $_.BuildNumber
        InstallDate    = $_.InstallDate.ToString('s')
        LastBootUpTime = $_.LastBootUpTime.ToString('s')
    }
}
""" + EMIT

HOST_NICS = """
$rows = Get-NetAdapter -Physical | ForEach-Object {
    [pscustomobject]@{
        Name                 = $_.Name
        InterfaceDescription = $_.InterfaceDescription
        MacAddress           = $_.MacAddress
        Status               = [string]$_.Status
        LinkSpeed            = $_.LinkSpeed
        Speed                = $_.Speed
        DriverVersion        = $_.DriverVersionString
    }
}
""" + EMIT

HOST_HBAS = """
$rows = Get-InitiatorPort | Where-Object { $_.ConnectionType -eq 'Fibre Channel' } | ForEach-Object {
    [pscustomobject]@{
        InstanceName      = $_.InstanceName
        NodeAddress       = $_.NodeAddress
        PortAddress       = $_.PortAddress
        ConnectionType    = [string]$_.ConnectionType
        OperationalStatus = [string]$_.OperationalStatus
    }
}
""" + EMIT

HOST_MPIO = """
$setting = Get-MPIOSetting
$rows = [pscustomobject]@{
    PathVerificationState  = [string]$setting.PathVerificationState
    PathVerificationPeriod = $setting.PathVerificationPeriod
    PDORemovePeriod        = $setting.PDORemovePeriod
    RetryCount             = $setting.RetryCount
    RetryInterval          = $setting.RetryInterval
    DiskTimeoutValue       = $setting.DiskTimeoutValue
    LoadBalancePolicy      = [string](Get-MSDSMGlobalDefaultLoadBalancePolicy)
}
""" + EMIT

HOST_DISKS = """
$rows = Get-Disk | ForEach-Object {
    [pscustomobject]@{
        Number            = $_.Number
        FriendlyName      = $_.FriendlyName
        SerialNumber      = $(if ($_.SerialNumber) { $_.SerialNumber.Trim() })
        BusType           = [string]$_.BusType
        Size              = $_.Size
        PartitionStyle    = [string]$_.PartitionStyle
        OperationalStatus = [string]$_.OperationalStatus
        IsClustered       = $_.IsClustered
    }
}
""" + EMIT

_TIME_SYNC_SELECTOR = """
$service = Get-VMIntegrationService -VMName $VMName |
    Where-Object { $_.Id -like "*$ServiceId" } |
    Select-Object -First 1
"""

TIME_SYNC_GET = _TIME_SYNC_SELECTOR + """
$rows = @($service) | Where-Object { $_ } | ForEach-Object { [pscustomobject]@{ Enabled = $_.Enabled } }
""" + EMIT

TIME_SYNC_SET = _TIME_SYNC_SELECTOR + """
if (-not $service) { """ + EMIT_EMPTY_AND_RETURN + """ }
if ($Enabled) { $service | Enable-VMIntegrationService } else { $service | Disable-VMIntegrationService }
$rows = Get-VMIntegrationService -VMName $VMName |
    Where-Object { $_.Id -like "*$ServiceId" } |
    ForEach-Object { [pscustomobject]@{ Enabled = $_.Enabled } }
""" + EMIT

# 步骤一：按序列号定位磁盘并初始化、分区、格式化；找不到磁盘时输出空数组且不做任何修改
CSV_PREPARE_DISK = """
$disk = Get-Disk | Where-Object { $_.SerialNumber -and $_.SerialNumber.Trim() -eq $SerialNumber } | Select-Object -First 1
if (-not $disk) { """ + EMIT_EMPTY_AND_RETURN + """ }
if ($disk.IsClustered) { throw "Disk $SerialNumber is already a cluster disk" }
if ($disk.IsOffline) { Set-Disk -Number $disk.Number -IsOffline $false }
if ($disk.IsReadOnly) { Set-Disk -Number $disk.Number -IsReadOnly $false }
if ([string]$disk.PartitionStyle -eq 'RAW') { Initialize-Disk -Number $disk.Number -PartitionStyle GPT }
$partition = New-Partition -DiskNumber $disk.Number -UseMaximumSize
Format-Volume -Partition $partition -FileSystem NTFS -NewFileSystemLabel $VolumeName -Confirm:$false | Out-Null
$rows = [pscustomobject]@{ Number = $disk.Number; SerialNumber = $disk.SerialNumber.Trim() }
""" + EMIT

# 步骤二：加入群集磁盘、转换为 CSV，并把资源名和挂载目录改为卷名
CSV_REGISTER = """
Import-Module FailoverClusters
$available = Get-ClusterAvailableDisk | Where-Object { $_.Number -eq $DiskNumber } | Select-Object -First 1
if (-not $available) { """ + EMIT_EMPTY_AND_RETURN + """ }
$resource = $available | Add-ClusterDisk
Add-ClusterSharedVolume -Name $resource.Name | Out-Null
(Get-ClusterResource -Name $resource.Name).Name = $VolumeName
$csv = Get-ClusterSharedVolume -Name $VolumeName
$path = $csv.SharedVolumeInfo[0].FriendlyVolumeName
$target = Join-Path (Split-Path $path -Parent) $VolumeName
if ($path -ne $target) {
    Rename-Item -Path $path -NewName $VolumeName
    $path = $target
}
$rows = [pscustomobject]@{ ResourceName = $VolumeName; Path = $path }
""" + EMIT
