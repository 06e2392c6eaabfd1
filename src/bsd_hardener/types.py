"""Type definitions for BSD Hardener."""

from enum import Enum
from typing import NamedTuple


class StepOutcome(str, Enum):
    """Terminal states of a hardening step."""

    SKIPPED = "skipped"
    DECLINED = "declined"
    APPLIED = "applied"
    FAILED = "failed"


class CommandResult(NamedTuple):
    """Result of command execution."""

    success: bool
    stdout: str
    stderr: str
    return_code: int = 0


class StepResult(NamedTuple):
    """Recorded outcome of one step."""

    name: str
    outcome: StepOutcome
    detail: str = ""


class BackupRecord(NamedTuple):
    """Backup taken before a file was overwritten."""

    original_path: str
    backup_path: str
    timestamp: str


class PeriodicJob(NamedTuple):
    """A named scheduled job."""

    name: str
    schedule: str
    command: str
