"""Read-only checks for whether a change is already present on the host.

A missing file, group or package is a normal "not applied" answer.
Line checks compare whole lines; a line that merely contains the
expected text does not count.
"""

from pathlib import Path
from typing import Iterable, List

import structlog

from bsd_hardener.collaborators import FileAttributes, PackageManager, ServiceSupervisor
from bsd_hardener.exceptions import HardenerError

logger = structlog.get_logger(__name__)


def _read(path: Path) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (FileNotFoundError, NotADirectoryError):
        return ""


def file_has_line(path: Path, line: str) -> bool:
    """True if the file contains exactly this line."""
    return line in _read(path).splitlines()


def file_has_lines(path: Path, lines: Iterable[str]) -> bool:
    """True if every line is present as an exact line."""
    present = set(_read(path).splitlines())
    return all(line in present for line in lines)


def file_content_equals(path: Path, content: str) -> bool:
    """True if the file exists and holds exactly this content."""
    if not path.exists():
        return False
    return _read(path) == content


def file_value_equals(path: Path, value: str) -> bool:
    """True if the file holds exactly one line, equal to value."""
    return _read(path).splitlines() == [value]


def group_members(group_file: Path, group: str) -> List[str]:
    """Members of a group in an /etc/group formatted file."""
    for line in _read(group_file).splitlines():
        fields = line.split(":")
        if len(fields) >= 4 and fields[0] == group:
            return [m.strip() for m in fields[3].split(",") if m.strip()]
    return []


def user_in_group(group_file: Path, group: str, user: str) -> bool:
    return user in group_members(group_file, group)


def package_installed(packages: PackageManager, name: str) -> bool:
    try:
        return packages.is_installed(name)
    except HardenerError as e:
        logger.warning("package_probe_failed", package=name, error=str(e))
        return False


def service_enabled(services: ServiceSupervisor, name: str) -> bool:
    try:
        return services.is_enabled(name)
    except HardenerError as e:
        logger.warning("service_probe_failed", service=name, error=str(e))
        return False


def file_immutable(attributes: FileAttributes, path: Path) -> bool:
    try:
        return attributes.is_immutable(path)
    except OSError as e:
        logger.warning("flag_probe_failed", path=str(path), error=str(e))
        return False
