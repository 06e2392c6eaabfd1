"""BSD Hardener - interactive BSD workstation hardening tool."""

__version__ = "1.0.0"
__author__ = "DevOps Team"
__license__ = "MIT"

from bsd_hardener.exceptions import (
    BackupError,
    CommandExecutionError,
    ConfigurationError,
    HardenerError,
    PrivilegeError,
    SystemRequirementError,
)
from bsd_hardener.executor import StepExecutor
from bsd_hardener.system_info import SystemInfo

__all__ = [
    "StepExecutor",
    "SystemInfo",
    "HardenerError",
    "BackupError",
    "CommandExecutionError",
    "ConfigurationError",
    "PrivilegeError",
    "SystemRequirementError",
]
