"""Pytest configuration and fixtures."""

import logging
from pathlib import Path
from typing import Dict, List, Set

import pytest
import structlog

from bsd_hardener.collaborators import Host
from bsd_hardener.config import HardenerConfig
from bsd_hardener.context import RunContext
from bsd_hardener.exceptions import (
    CommandExecutionError,
    PackageInstallError,
    ServiceControlError,
)


class FakePackages:
    def __init__(self) -> None:
        self.installed: Set[str] = set()
        self.broken: Set[str] = set()
        self.install_calls: List[str] = []

    def is_installed(self, package: str) -> bool:
        return package in self.installed

    def install(self, package: str) -> None:
        self.install_calls.append(package)
        if package in self.broken:
            raise PackageInstallError(f"pkg_add {package} failed: no such package")
        self.installed.add(package)


class FakeFirewall:
    def __init__(self) -> None:
        self.loaded: List[Path] = []
        self.fail = False

    def load(self, ruleset: Path) -> None:
        if self.fail:
            raise CommandExecutionError("Command failed: pfctl -f\nError: syntax error")
        self.loaded.append(ruleset)


class FakeServices:
    def __init__(self) -> None:
        self.enabled: Set[str] = set()
        self.started: List[str] = []

    def is_enabled(self, service: str) -> bool:
        return service in self.enabled

    def enable(self, service: str) -> None:
        self.enabled.add(service)

    def start(self, service: str) -> None:
        if service not in self.enabled:
            raise ServiceControlError(f"Service start {service} failed: not enabled")
        self.started.append(service)

    def restart(self, service: str) -> None:
        self.start(service)


class FakeScheduler:
    def __init__(self) -> None:
        self.tables: Dict[str, str] = {}

    def current(self, user: str) -> str:
        return self.tables.get(user, "")

    def install(self, user: str, table: Path) -> None:
        self.tables[user] = table.read_text()


class FakeAttributes:
    def __init__(self) -> None:
        self.immutable: Set[str] = set()

    def is_immutable(self, path: Path) -> bool:
        return str(path) in self.immutable

    def set_immutable(self, path: Path) -> None:
        self.immutable.add(str(path))


class FakeTunables:
    def __init__(self) -> None:
        self.values: Dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        self.values[name] = value


class FakeAccounts:
    def __init__(self, homes: Dict[str, Path]) -> None:
        self.homes = homes
        self.superusers: Set[str] = {"root", "toor"}
        self.chowned: List[Path] = []

    def exists(self, user: str) -> bool:
        return user in self.homes

    def is_superuser(self, user: str) -> bool:
        return user in self.superusers

    def home_dir(self, user: str) -> Path:
        if user not in self.homes:
            raise CommandExecutionError(f"Unknown user: {user}")
        return self.homes[user]

    def chown(self, path: Path, user: str) -> None:
        self.chowned.append(path)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Silence structlog during tests and undo any CLI configuration."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    yield
    structlog.reset_defaults()


@pytest.fixture
def etc_dir(tmp_path: Path) -> Path:
    """Fake /etc with a group file listing the operator in wheel."""
    etc = tmp_path / "etc"
    etc.mkdir()
    (etc / "group").write_text(
        "wheel:*:0:root,alice\n"
        "operator:*:5:root\n"
        "alice:*:1000:\n"
    )
    (etc / "hosts").write_text("127.0.0.1 localhost\n::1 localhost\n")
    (etc / "pf.conf").write_text("pass\n")
    (etc / "installurl").write_text("https://cdn.example.org/pub/OpenBSD\n")
    (etc / "sysctl.conf").write_text("net.inet.ip.forwarding=0\n")
    return etc


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home" / "alice"
    home.mkdir(parents=True)
    (home / ".profile").write_text("export PATH=$HOME/bin:$PATH\n")
    return home


@pytest.fixture
def test_config(etc_dir: Path, tmp_path: Path) -> HardenerConfig:
    """Create test configuration pointing every path at the temp tree."""
    config = HardenerConfig.from_env()
    paths = config.paths
    paths.group_file = etc_dir / "group"
    paths.pf_conf = etc_dir / "pf.conf"
    paths.global_profile = etc_dir / "profile"
    paths.installurl = etc_dir / "installurl"
    paths.hosts = etc_dir / "hosts"
    paths.reconfig = etc_dir / "bsd.re-config"
    paths.sysctl_conf = etc_dir / "sysctl.conf"
    paths.task_table = etc_dir / "hardening.tasks"
    paths.admin_crontab = tmp_path / "root" / ".hardening.crontab"
    paths.immutable_files = [
        str(etc_dir / "pf.conf"),
        str(etc_dir / "installurl"),
        str(etc_dir / "hosts"),
        str(etc_dir / "missing.conf"),
    ]
    config.packages.install = ["tor", "torsocks", "clamav"]
    config.network.mirror_url = "https://mirror.example.net/pub/OpenBSD"
    config.hardening.target_user = "alice"
    return config


@pytest.fixture
def host(home_dir: Path) -> Host:
    return Host(
        packages=FakePackages(),
        firewall=FakeFirewall(),
        services=FakeServices(),
        scheduler=FakeScheduler(),
        attributes=FakeAttributes(),
        tunables=FakeTunables(),
        accounts=FakeAccounts(
            {"alice": home_dir, "root": Path("/root"), "toor": Path("/root")}
        ),
    )


@pytest.fixture
def ctx(test_config: HardenerConfig, host: Host) -> RunContext:
    return RunContext(config=test_config, host=host, target_user="alice", privileged=True)


class ScriptedInput:
    """Replacement for input() that replays answers and records prompts."""

    def __init__(self, answers: List[str]) -> None:
        self.answers = list(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return self.answers.pop(0)


@pytest.fixture
def scripted_input():
    return ScriptedInput
