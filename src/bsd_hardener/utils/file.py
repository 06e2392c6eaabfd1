"""File management utilities."""

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

import structlog

from bsd_hardener.exceptions import BackupError
from bsd_hardener.types import BackupRecord

logger = structlog.get_logger(__name__)

BACKUP_SUFFIX = ".bak"


def backup_path_for(filepath: Path) -> Path:
    """Return the sibling backup location for a file."""
    return filepath.with_name(filepath.name + BACKUP_SUFFIX)


def ensure_line(content: str, line: str) -> str:
    """Return content with line appended unless an identical line exists."""
    if line in content.splitlines():
        return content
    if content and not content.endswith("\n"):
        content += "\n"
    return content + line + "\n"


class FileManager:
    """Overwrite files only after preserving their previous content.

    Every path is backed up to ``<path>.bak`` the first time it is overwritten
    during a run. Later overwrites of the same path in that run leave the
    backup alone, so it always holds the content from before the run.
    A path that did not exist when first touched never gets a backup in
    that run, since there was no earlier content to keep.
    Writes go to a temporary file in the target directory and are renamed
    over the original, so readers never see a partially written file.
    """

    def __init__(self) -> None:
        """Initialize file manager."""
        self.backups: Dict[str, BackupRecord] = {}
        self.created: Set[str] = set()

    @property
    def backup_records(self) -> List[BackupRecord]:
        """Backups taken during this run, in creation order."""
        return list(self.backups.values())

    def backup_file(self, filepath: Path) -> Optional[Path]:
        """Copy a file byte-for-byte to its ``.bak`` sibling.

        Args:
            filepath: Path to file to backup

        Returns:
            Path to backup file or None if source doesn't exist

        Raises:
            BackupError: If the copy cannot be made
        """
        key = str(filepath)
        if key in self.backups:
            return Path(self.backups[key].backup_path)

        if key in self.created:
            return None

        if not filepath.exists():
            self.created.add(key)
            return None

        backup_path = backup_path_for(filepath)
        try:
            shutil.copy2(filepath, backup_path)
        except OSError as e:
            raise BackupError(f"Cannot back up {filepath} to {backup_path}: {e}") from e

        self.backups[key] = BackupRecord(
            original_path=key,
            backup_path=str(backup_path),
            timestamp=datetime.now().isoformat(),
        )
        logger.info("file_backed_up", path=key, backup=str(backup_path))
        return backup_path

    def read_file(self, filepath: Path) -> str:
        """Read file content, treating a missing file as empty.

        Args:
            filepath: Path to file

        Returns:
            File content as string
        """
        try:
            with open(filepath, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return ""

    def replace_file(
        self, filepath: Path, content: str, mode: Optional[int] = None
    ) -> None:
        """Back up and atomically overwrite a file.

        Args:
            filepath: Path to file
            content: New full content
            mode: Permission bits for a newly created file
        """
        self.backup_file(filepath)
        self._atomic_write(filepath, content, mode)
        logger.info("file_written", path=str(filepath))

    def transform_file(self, filepath: Path, transform: Callable[[str], str]) -> bool:
        """Back up and rewrite a file through a text transformation.

        Args:
            filepath: Path to file
            transform: Pure function from old content to new content

        Returns:
            True if the content changed and was written
        """
        old = self.read_file(filepath)
        new = transform(old)
        if new == old and filepath.exists():
            return False
        self.replace_file(filepath, new)
        return True

    def append_line(self, filepath: Path, line: str) -> bool:
        """Append an exact line to a file unless it is already present.

        Args:
            filepath: Path to file
            line: Line to add, without trailing newline

        Returns:
            True if the line was appended
        """
        return self.transform_file(filepath, lambda old: ensure_line(old, line))

    def _atomic_write(self, filepath: Path, content: str, mode: Optional[int]) -> None:
        """Write content via a temporary file renamed over the target."""
        filepath.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{filepath.name}.", suffix=".tmp", dir=str(filepath.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if filepath.exists():
                shutil.copymode(filepath, tmp_name)
            else:
                os.chmod(tmp_name, mode if mode is not None else 0o644)
            os.replace(tmp_name, filepath)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
