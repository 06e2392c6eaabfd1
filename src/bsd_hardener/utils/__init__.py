"""Utility modules for BSD Hardener."""

from bsd_hardener.utils.command import CommandExecutor
from bsd_hardener.utils.file import FileManager
from bsd_hardener.utils.validation import Validator

__all__ = ["CommandExecutor", "FileManager", "Validator"]
