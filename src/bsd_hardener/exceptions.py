"""Custom exceptions for BSD Hardener."""


class HardenerError(Exception):
    """Base exception for all hardener errors."""

    pass


class ConfigurationError(HardenerError):
    """Raised when configuration is invalid."""

    pass


class SystemRequirementError(HardenerError):
    """Raised when system requirements are not met."""

    pass


class PrivilegeError(SystemRequirementError):
    """Raised when the process lacks administrative privilege."""

    pass


class CommandExecutionError(HardenerError):
    """Raised when command execution fails."""

    pass


class PackageInstallError(CommandExecutionError):
    """Raised when a package cannot be installed."""

    pass


class BackupError(HardenerError):
    """Raised when a file cannot be backed up before being overwritten."""

    pass


class ServiceControlError(HardenerError):
    """Raised when service control operation fails."""

    pass
