"""Display manager and window manager session."""

from pathlib import Path

from bsd_hardener.context import RunContext
from bsd_hardener.probes import file_content_equals, service_enabled
from bsd_hardener.steps.base import Step


def xsession_content(ctx: RunContext) -> str:
    return (
        "# Generated by bsd-hardener\n"
        ". ~/.profile\n"
        f"exec {ctx.config.hardening.window_manager}\n"
    )


def xsession_path(ctx: RunContext) -> Path:
    return ctx.host.accounts.home_dir(ctx.user) / ".xsession"


class ConfigureDisplay(Step):
    name = "display"
    prompt = "Enable the display manager and set the window manager session?"

    def is_applied(self, ctx: RunContext) -> bool:
        return service_enabled(
            ctx.host.services, ctx.config.hardening.display_manager
        ) and file_content_equals(xsession_path(ctx), xsession_content(ctx))

    def apply(self, ctx: RunContext) -> None:
        ctx.host.services.enable(ctx.config.hardening.display_manager)

        session = xsession_path(ctx)
        ctx.files.replace_file(session, xsession_content(ctx), mode=0o644)
        ctx.host.accounts.chown(session, ctx.user)
