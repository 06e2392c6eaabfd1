"""Boot-time device disabling."""

from functools import reduce
from typing import List

from bsd_hardener.context import RunContext
from bsd_hardener.probes import file_has_lines
from bsd_hardener.steps.base import Step
from bsd_hardener.utils.file import ensure_line


def disable_lines(ctx: RunContext) -> List[str]:
    return [f"disable {device}" for device in ctx.config.hardening.usb_devices]


class DisableUsb(Step):
    name = "usb"
    prompt = "Disable USB controllers at boot?"

    def is_applied(self, ctx: RunContext) -> bool:
        return file_has_lines(ctx.config.paths.reconfig, disable_lines(ctx))

    def apply(self, ctx: RunContext) -> None:
        lines = disable_lines(ctx)
        ctx.files.transform_file(
            ctx.config.paths.reconfig,
            lambda content: reduce(ensure_line, lines, content),
        )
