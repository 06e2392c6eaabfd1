"""Antivirus daemons."""

from bsd_hardener.context import RunContext
from bsd_hardener.probes import service_enabled
from bsd_hardener.steps.base import Step


class EnableAntivirus(Step):
    name = "antivirus"
    prompt = "Enable and start the antivirus daemons?"

    def is_applied(self, ctx: RunContext) -> bool:
        return all(
            service_enabled(ctx.host.services, service)
            for service in ctx.config.hardening.antivirus_services
        )

    def apply(self, ctx: RunContext) -> None:
        for service in ctx.config.hardening.antivirus_services:
            ctx.host.services.enable(service)
            ctx.host.services.start(service)
