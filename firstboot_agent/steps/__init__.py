from .step_00_script_hook import ScriptHookStep
from .step_20_partition_disk import PartitionDiskStep
from .step_30_rename_host import RenameHostStep
from .step_40_static_ip import StaticDnsStep, StaticIpStep
from .step_60_registry import RegistryStep
from .step_90_reboot import RebootStep

__all__ = [
    "ScriptHookStep",
    "PartitionDiskStep",
    "RenameHostStep",
    "StaticIpStep",
    "StaticDnsStep",
    "RegistryStep",
    "RebootStep",
]
