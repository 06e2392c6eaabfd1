"""Configuration management for BSD Hardener."""

from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _split_csv(v: object) -> List[str]:
    """Parse a comma-separated string or list into a clean list."""
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    if isinstance(v, (list, tuple)):
        return [str(item).strip() for item in v if str(item).strip()]
    return []


CsvList = Annotated[List[str], NoDecode]


class PathsConfig(BaseSettings):
    """Locations of every file the hardening steps read or write."""

    group_file: Path = Field(default=Path("/etc/group"))
    pf_conf: Path = Field(default=Path("/etc/pf.conf"))
    global_profile: Path = Field(default=Path("/etc/profile"))
    installurl: Path = Field(default=Path("/etc/installurl"))
    hosts: Path = Field(default=Path("/etc/hosts"))
    reconfig: Path = Field(default=Path("/etc/bsd.re-config"))
    sysctl_conf: Path = Field(default=Path("/etc/sysctl.conf"))
    task_table: Path = Field(default=Path("/etc/hardening.tasks"))
    admin_crontab: Path = Field(default=Path("/root/.hardening.crontab"))
    immutable_files: CsvList = Field(default_factory=list)

    model_config = SettingsConfigDict(
        env_prefix="HARDEN_PATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("immutable_files", mode="before")
    @classmethod
    def parse_immutable_files(cls, v: object) -> List[str]:
        """Parse immutable file list from comma-separated string or list."""
        return _split_csv(v)

    @model_validator(mode="after")
    def default_immutable_files(self) -> "PathsConfig":
        """Protect the hardened configuration files unless a list is given."""
        if not self.immutable_files:
            self.immutable_files = [
                str(path)
                for path in (
                    self.pf_conf,
                    self.installurl,
                    self.hosts,
                    self.sysctl_conf,
                    self.reconfig,
                )
            ]
        return self


class PackagesConfig(BaseSettings):
    """Packages installed by the first step."""

    install: CsvList = Field(default_factory=lambda: ["tor", "torsocks", "clamav"])

    model_config = SettingsConfigDict(
        env_prefix="HARDEN_PKG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("install", mode="before")
    @classmethod
    def parse_install(cls, v: object) -> List[str]:
        """Parse package names from comma-separated string or list."""
        return _split_csv(v)


class NetworkConfig(BaseSettings):
    """Anonymizing network and update source settings."""

    mirror_url: str = Field(default="https://cdn.openbsd.org/pub/OpenBSD")
    proxy_url: str = Field(default="socks5h://127.0.0.1:9050")
    tor_service: str = Field(default="tor")
    blocked_host: str = Field(default="firmware.openbsd.org")
    loopback: str = Field(default="127.0.0.1")

    model_config = SettingsConfigDict(
        env_prefix="HARDEN_NET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class HardeningConfig(BaseSettings):
    """Settings for user, kernel, service and display steps."""

    target_user: Optional[str] = Field(default=None)
    admin_user: str = Field(default="root")
    admin_groups: CsvList = Field(default_factory=lambda: ["wheel"])
    usb_devices: CsvList = Field(default_factory=lambda: ["usb"])
    malloc_options: str = Field(default="S")
    antivirus_services: CsvList = Field(default_factory=lambda: ["clamd", "freshclam"])
    display_manager: str = Field(default="xenodm")
    window_manager: str = Field(default="/usr/X11R6/bin/cwm")

    model_config = SettingsConfigDict(
        env_prefix="HARDEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("admin_groups", "usb_devices", "antivirus_services", mode="before")
    @classmethod
    def parse_lists(cls, v: object) -> List[str]:
        """Parse list settings from comma-separated string or list."""
        return _split_csv(v)


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="WARNING")
    file: Optional[Path] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class HardenerConfig(BaseSettings):
    """Main configuration container."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    packages: PackagesConfig = Field(default_factory=PackagesConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    hardening: HardeningConfig = Field(default_factory=HardeningConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def from_env(cls) -> "HardenerConfig":
        """Create configuration from environment variables."""
        return cls(
            paths=PathsConfig(),
            packages=PackagesConfig(),
            network=NetworkConfig(),
            hardening=HardeningConfig(),
            logging=LoggingConfig(),
        )

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of issues."""
        issues: List[str] = []

        if not self.packages.install:
            issues.append("No packages configured for installation")

        if not self.network.mirror_url.startswith(("http://", "https://")):
            issues.append(f"Mirror URL must be http or https: {self.network.mirror_url}")

        if any(c.isspace() for c in self.network.mirror_url):
            issues.append("Mirror URL must not contain whitespace")

        if not self.hardening.malloc_options.isalpha():
            issues.append(f"Invalid malloc options: {self.hardening.malloc_options}")

        if self.logging.level.upper() not in LOG_LEVELS:
            issues.append(f"Invalid log level: {self.logging.level}")

        return issues
