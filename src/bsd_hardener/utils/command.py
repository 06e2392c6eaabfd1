"""Command execution utilities."""

import shutil
import subprocess
from typing import Optional, Sequence

import structlog

from bsd_hardener.exceptions import CommandExecutionError
from bsd_hardener.types import CommandResult

logger = structlog.get_logger(__name__)


class CommandExecutor:
    """Execute system commands with proper error handling."""

    def __init__(self, default_timeout: int = 60) -> None:
        """Initialize command executor.

        Args:
            default_timeout: Timeout in seconds used when a call gives none
        """
        self.default_timeout = default_timeout

    def execute(
        self,
        cmd: Sequence[str],
        check: bool = True,
        timeout: Optional[int] = None,
        input_text: Optional[str] = None,
    ) -> CommandResult:
        """Execute command without a shell.

        Args:
            cmd: Argument vector to execute
            check: Whether to raise exception on failure
            timeout: Command timeout in seconds
            input_text: Text fed to the command's stdin

        Returns:
            CommandResult with execution details

        Raises:
            CommandExecutionError: If command fails and check=True
        """
        argv = list(cmd)
        display = " ".join(argv)
        timeout = timeout or self.default_timeout
        logger.debug("command_start", cmd=display)

        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=timeout,
                input=input_text,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            error_msg = f"Command timed out after {timeout}s: {display}"
            logger.warning("command_timeout", cmd=display, timeout=timeout)
            if check:
                raise CommandExecutionError(error_msg) from e
            return CommandResult(False, "", error_msg, -1)
        except OSError as e:
            error_msg = f"Command execution failed: {display}\nError: {e}"
            logger.warning("command_error", cmd=display, error=str(e))
            if check:
                raise CommandExecutionError(error_msg) from e
            return CommandResult(False, "", error_msg, -1)

        cmd_result = CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout,
            stderr=result.stderr,
            return_code=result.returncode,
        )
        logger.debug("command_done", cmd=display, return_code=result.returncode)

        if check and not cmd_result.success:
            raise CommandExecutionError(
                f"Command failed: {display}\nError: {result.stderr.strip()}"
            )

        return cmd_result

    def check_command_available(self, command: str) -> bool:
        """Check if command is available on system."""
        return shutil.which(command) is not None
