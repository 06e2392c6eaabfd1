"""Tests for system info module."""

from bsd_hardener.system_info import REQUIRED_COMMANDS, SystemInfo


class StubExecutor:
    def __init__(self, available):
        self.available = set(available)

    def check_command_available(self, command):
        return command in self.available


def test_system_info_initialization():
    """Test system info detection."""
    system = SystemInfo(StubExecutor(REQUIRED_COMMANDS))

    assert isinstance(system.os_name, str)
    assert isinstance(system.is_root, bool)
    assert system.missing_commands == []


def test_missing_commands_reported(monkeypatch):
    monkeypatch.setattr("bsd_hardener.system_info.platform.system", lambda: "OpenBSD")
    system = SystemInfo(StubExecutor(["pkg_add", "pkg_info", "rcctl", "crontab", "sysctl"]))

    assert system.is_bsd
    assert system.check_requirements() == [
        "Required utility not found: pfctl",
        "Required utility not found: chflags",
    ]


def test_non_bsd_warning(monkeypatch):
    monkeypatch.setattr("bsd_hardener.system_info.platform.system", lambda: "Linux")
    system = SystemInfo(StubExecutor(REQUIRED_COMMANDS))

    assert system.check_requirements() == ["Unsupported system Linux; expected a BSD host"]


def test_to_dict():
    system = SystemInfo(StubExecutor([]))
    info = system.to_dict()

    assert set(info) == {"os", "release", "is_root", "missing_commands"}
    assert "pfctl" in info["missing_commands"]
