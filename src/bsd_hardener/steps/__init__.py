"""Hardening step catalog."""

from typing import List

from bsd_hardener.steps.accounts import DeprivilegeUser
from bsd_hardener.steps.base import Step
from bsd_hardener.steps.devices import DisableUsb
from bsd_hardener.steps.display import ConfigureDisplay
from bsd_hardener.steps.filesystem import SetImmutableFlags
from bsd_hardener.steps.firewall import ReplaceFirewall
from bsd_hardener.steps.kernel import HardenMalloc
from bsd_hardener.steps.network import BlockFirmwareUpdates, EnableTor, RedirectMirror
from bsd_hardener.steps.packages import InstallPackages
from bsd_hardener.steps.scheduling import SchedulePeriodicTasks
from bsd_hardener.steps.services import EnableAntivirus


def build_catalog() -> List[Step]:
    """Steps in execution order."""
    return [
        InstallPackages(),
        DeprivilegeUser(),
        ReplaceFirewall(),
        EnableTor(),
        RedirectMirror(),
        BlockFirmwareUpdates(),
        DisableUsb(),
        EnableAntivirus(),
        HardenMalloc(),
        SchedulePeriodicTasks(),
        SetImmutableFlags(),
        ConfigureDisplay(),
    ]


__all__ = ["Step", "build_catalog"]
