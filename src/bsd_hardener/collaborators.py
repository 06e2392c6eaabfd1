"""Interfaces to the host systems the hardening steps drive.

Each class wraps one external tool. Steps only talk to the host through
these objects, so tests can substitute in-memory fakes.
"""

import os
import pwd
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import List

import structlog

from bsd_hardener.exceptions import (
    CommandExecutionError,
    PackageInstallError,
    ServiceControlError,
)
from bsd_hardener.utils.command import CommandExecutor
from bsd_hardener.utils.validation import Validator

logger = structlog.get_logger(__name__)

INSTALL_TIMEOUT = 300


class PackageManager:
    """pkg_add(1) and pkg_info(1)."""

    def __init__(self, executor: CommandExecutor) -> None:
        self.executor = executor

    def is_installed(self, package: str) -> bool:
        result = self.executor.execute(
            ["pkg_info", "-q", "-e", f"{package}-*"], check=False
        )
        return result.success

    def install(self, package: str) -> None:
        """Install a package non-interactively.

        Raises:
            PackageInstallError: If pkg_add reports failure
        """
        result = self.executor.execute(
            ["pkg_add", "-I", package], check=False, timeout=INSTALL_TIMEOUT
        )
        if not result.success:
            raise PackageInstallError(
                f"pkg_add {package} failed: {result.stderr.strip() or result.stdout.strip()}"
            )
        logger.info("package_installed", package=package)


class Firewall:
    """pfctl(8). Rule syntax is left to pf to judge."""

    def __init__(self, executor: CommandExecutor) -> None:
        self.executor = executor

    def load(self, ruleset: Path) -> None:
        self.executor.execute(["pfctl", "-f", str(ruleset)])
        logger.info("firewall_reloaded", ruleset=str(ruleset))


class ServiceSupervisor:
    """rcctl(8)."""

    def __init__(self, executor: CommandExecutor) -> None:
        self.executor = executor

    def enabled_services(self) -> List[str]:
        result = self.executor.execute(["rcctl", "ls", "on"], check=False)
        if not result.success:
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def is_enabled(self, service: str) -> bool:
        return service in self.enabled_services()

    def enable(self, service: str) -> None:
        self._control(service, "enable")

    def start(self, service: str) -> None:
        self._control(service, "start")

    def restart(self, service: str) -> None:
        self._control(service, "restart")

    def _control(self, service: str, action: str) -> None:
        """Run an rcctl action.

        Raises:
            ServiceControlError: If rcctl fails
        """
        result = self.executor.execute(["rcctl", action, service], check=False)
        if not result.success:
            raise ServiceControlError(
                f"Service {action} {service} failed: {result.stderr.strip()}"
            )
        logger.info("service_control", service=service, action=action)


class Scheduler:
    """crontab(1) for a single account."""

    def __init__(self, executor: CommandExecutor) -> None:
        self.executor = executor

    def current(self, user: str) -> str:
        result = self.executor.execute(["crontab", "-u", user, "-l"], check=False)
        return result.stdout if result.success else ""

    def install(self, user: str, table: Path) -> None:
        self.executor.execute(["crontab", "-u", user, str(table)])
        logger.info("crontab_installed", user=user, table=str(table))


class FileAttributes:
    """File flags via stat(2) and chflags(1)."""

    def __init__(self, executor: CommandExecutor) -> None:
        self.executor = executor

    def is_immutable(self, path: Path) -> bool:
        flag = getattr(stat, "SF_IMMUTABLE", 0)
        try:
            st_flags = getattr(os.stat(path), "st_flags", 0)
        except FileNotFoundError:
            return False
        return bool(flag) and bool(st_flags & flag)

    def set_immutable(self, path: Path) -> None:
        self.executor.execute(["chflags", "schg", str(path)])
        logger.info("immutable_flag_set", path=str(path))


class KernelTunables:
    """sysctl(8) for runtime values."""

    def __init__(self, executor: CommandExecutor) -> None:
        self.executor = executor

    def set(self, name: str, value: str) -> None:
        self.executor.execute(["sysctl", f"{name}={value}"])
        logger.info("sysctl_set", name=name, value=value)


class Accounts:
    """Local account database."""

    def exists(self, user: str) -> bool:
        return Validator.validate_user_exists(user)

    def is_superuser(self, user: str) -> bool:
        try:
            return pwd.getpwnam(user).pw_uid == 0
        except KeyError:
            return False

    def home_dir(self, user: str) -> Path:
        try:
            return Path(pwd.getpwnam(user).pw_dir)
        except KeyError as e:
            raise CommandExecutionError(f"Unknown user: {user}") from e

    def chown(self, path: Path, user: str) -> None:
        try:
            entry = pwd.getpwnam(user)
        except KeyError as e:
            raise CommandExecutionError(f"Unknown user: {user}") from e
        os.chown(path, entry.pw_uid, entry.pw_gid)


@dataclass
class Host:
    """Bundle of collaborator handles passed to every step."""

    packages: PackageManager
    firewall: Firewall
    services: ServiceSupervisor
    scheduler: Scheduler
    attributes: FileAttributes
    tunables: KernelTunables
    accounts: Accounts

    @classmethod
    def from_executor(cls, executor: CommandExecutor) -> "Host":
        """Build the real collaborators around one command executor."""
        return cls(
            packages=PackageManager(executor),
            firewall=Firewall(executor),
            services=ServiceSupervisor(executor),
            scheduler=Scheduler(executor),
            attributes=FileAttributes(executor),
            tunables=KernelTunables(executor),
            accounts=Accounts(),
        )
