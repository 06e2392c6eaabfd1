"""Package installation."""

from typing import List

import structlog

from bsd_hardener.context import RunContext
from bsd_hardener.exceptions import PackageInstallError
from bsd_hardener.probes import package_installed
from bsd_hardener.steps.base import Step

logger = structlog.get_logger(__name__)


class InstallPackages(Step):
    name = "packages"
    prompt = "Install the hardening packages (tor, torsocks, antivirus)?"

    def missing(self, ctx: RunContext) -> List[str]:
        return [
            pkg
            for pkg in ctx.config.packages.install
            if not package_installed(ctx.host.packages, pkg)
        ]

    def is_applied(self, ctx: RunContext) -> bool:
        return not self.missing(ctx)

    def apply(self, ctx: RunContext) -> None:
        failures: List[str] = []
        for pkg in self.missing(ctx):
            try:
                ctx.host.packages.install(pkg)
            except PackageInstallError as e:
                logger.error("package_install_failed", package=pkg, error=str(e))
                failures.append(str(e))
        if failures:
            raise PackageInstallError("; ".join(failures))
