"""CLI entry point for BSD Hardener."""

import argparse
import sys
from typing import List, NoReturn, Optional

import structlog

from bsd_hardener import __version__
from bsd_hardener.collaborators import Host
from bsd_hardener.config import HardenerConfig
from bsd_hardener.context import RunContext
from bsd_hardener.exceptions import ConfigurationError, HardenerError, PrivilegeError
from bsd_hardener.executor import StepExecutor, format_summary
from bsd_hardener.log import configure_logging
from bsd_hardener.privilege import check_privilege
from bsd_hardener.prompt import ask_target_user
from bsd_hardener.steps import build_catalog
from bsd_hardener.system_info import SystemInfo
from bsd_hardener.utils.command import CommandExecutor
from bsd_hardener.utils.validation import Validator

logger = structlog.get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="BSD Hardener - interactive workstation hardening",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Every change is confirmed interactively. Run as root:
  doas bsd-hardener

Environment variables:
  HARDEN_TARGET_USER        - Account for user-directed steps (skips the prompt)
  HARDEN_NET_MIRROR_URL     - Update mirror written to the installurl file
  HARDEN_PKG_INSTALL        - Comma-separated packages to install
  LOG_LEVEL                 - Log level (DEBUG, INFO, WARNING, ...)
        """,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> HardenerConfig:
    """Load configuration from the environment and validate it.

    Raises:
        ConfigurationError: If any setting is invalid
    """
    try:
        config = HardenerConfig.from_env()
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    if args.verbose:
        config.logging.level = "DEBUG"

    issues = config.validate_config()
    if issues:
        raise ConfigurationError("; ".join(issues))

    return config


def select_target_user(config: HardenerConfig, host: Host) -> str:
    """Return the configured target user, or ask the operator for one.

    Raises:
        ConfigurationError: If the configured user is invalid or administrative
    """
    admin = config.hardening.admin_user

    def is_admin(name: str) -> bool:
        return name == admin or host.accounts.is_superuser(name)

    configured = config.hardening.target_user
    if configured:
        errors = Validator.validate_username(configured)
        if errors:
            raise ConfigurationError("; ".join(errors))
        if not host.accounts.exists(configured):
            raise ConfigurationError(f"No such user: {configured}")
        if is_admin(configured):
            raise ConfigurationError(f"Refusing to harden administrative account: {configured}")
        return configured

    return ask_target_user(host.accounts.exists, is_admin=is_admin)


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Main entry point for CLI.

    Raises:
        SystemExit: Always exits with appropriate code
    """
    args = parse_args(argv)

    try:
        check_privilege()
    except PrivilegeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        config = load_config(args)
        configure_logging(config.logging.level, config.logging.file)

        print("╔══════════════════════════════════════╗")
        print("║  BSD HARDENER                        ║")
        print(f"║  Version {__version__:<28}║")
        print("╚══════════════════════════════════════╝\n")

        executor = CommandExecutor()
        system = SystemInfo(executor)
        for issue in system.check_requirements():
            logger.warning("requirement_missing", issue=issue)

        host = Host.from_executor(executor)
        ctx = RunContext(config=config, host=host, privileged=True)
        ctx.target_user = select_target_user(config, host)

        print(f"\nTarget user: {ctx.target_user}")
        print("Each step asks for confirmation. Backups are written as <file>.bak.\n")

        StepExecutor(build_catalog()).run(ctx)

        print("\n" + format_summary(ctx))
        sys.exit(0)

    except (KeyboardInterrupt, EOFError):
        print("\n\nInterrupted by user", file=sys.stderr)
        sys.exit(130)

    except HardenerError as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"\nUnexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
