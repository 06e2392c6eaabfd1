"""System information detection for BSD Hardener."""

import os
import platform
from typing import Dict, List, Optional

from bsd_hardener.utils.command import CommandExecutor

REQUIRED_COMMANDS = ("pkg_add", "pkg_info", "pfctl", "rcctl", "crontab", "chflags", "sysctl")

BSD_SYSTEMS = ("OpenBSD", "FreeBSD", "NetBSD", "DragonFly")


class SystemInfo:
    """Detect and store system capabilities."""

    def __init__(self, executor: Optional[CommandExecutor] = None) -> None:
        """Initialize system information detection."""
        self.executor = executor or CommandExecutor()
        self.os_name = platform.system()
        self.release = platform.release()
        self.is_root = os.geteuid() == 0
        self.missing_commands = self._detect_missing_commands()

    @property
    def is_bsd(self) -> bool:
        return self.os_name in BSD_SYSTEMS

    def _detect_missing_commands(self) -> List[str]:
        """List required utilities absent from PATH."""
        return [
            cmd
            for cmd in REQUIRED_COMMANDS
            if not self.executor.check_command_available(cmd)
        ]

    def check_requirements(self) -> List[str]:
        """Check if system meets minimum requirements."""
        issues: List[str] = []

        if not self.is_bsd:
            issues.append(f"Unsupported system {self.os_name}; expected a BSD host")

        for cmd in self.missing_commands:
            issues.append(f"Required utility not found: {cmd}")

        return issues

    def to_dict(self) -> Dict[str, str]:
        """Convert system info to dictionary."""
        return {
            "os": self.os_name,
            "release": self.release,
            "is_root": str(self.is_root),
            "missing_commands": ",".join(self.missing_commands),
        }
