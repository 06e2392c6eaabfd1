"""Tor, update mirror and firmware host steps."""

from pathlib import Path

from bsd_hardener.context import RunContext
from bsd_hardener.probes import file_has_line, file_value_equals, service_enabled
from bsd_hardener.steps.base import Step

TORSOCKS_LINE = ". torsocks on"


def proxy_line(ctx: RunContext) -> str:
    return f"export ALL_PROXY={ctx.config.network.proxy_url}"


def user_profile(ctx: RunContext) -> Path:
    return ctx.host.accounts.home_dir(ctx.user) / ".profile"


def hosts_line(ctx: RunContext) -> str:
    network = ctx.config.network
    return f"{network.loopback} {network.blocked_host}"


class EnableTor(Step):
    name = "tor"
    prompt = "Enable tor and route login shells through it?"

    def is_applied(self, ctx: RunContext) -> bool:
        return (
            service_enabled(ctx.host.services, ctx.config.network.tor_service)
            and file_has_line(ctx.config.paths.global_profile, proxy_line(ctx))
            and file_has_line(user_profile(ctx), TORSOCKS_LINE)
        )

    def apply(self, ctx: RunContext) -> None:
        service = ctx.config.network.tor_service
        ctx.host.services.enable(service)
        ctx.host.services.restart(service)

        ctx.files.append_line(ctx.config.paths.global_profile, proxy_line(ctx))

        profile = user_profile(ctx)
        if ctx.files.append_line(profile, TORSOCKS_LINE):
            ctx.host.accounts.chown(profile, ctx.user)


class RedirectMirror(Step):
    name = "mirror"
    prompt = "Point system updates at the configured mirror?"

    def is_applied(self, ctx: RunContext) -> bool:
        return file_value_equals(ctx.config.paths.installurl, ctx.config.network.mirror_url)

    def apply(self, ctx: RunContext) -> None:
        ctx.files.replace_file(
            ctx.config.paths.installurl, ctx.config.network.mirror_url + "\n"
        )


class BlockFirmwareUpdates(Step):
    name = "firmware-updates"
    prompt = "Block the firmware update host?"

    def is_applied(self, ctx: RunContext) -> bool:
        return file_has_line(ctx.config.paths.hosts, hosts_line(ctx))

    def apply(self, ctx: RunContext) -> None:
        ctx.files.append_line(ctx.config.paths.hosts, hosts_line(ctx))
