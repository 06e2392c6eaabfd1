"""Memory allocator hardening."""

from bsd_hardener.context import RunContext
from bsd_hardener.steps.base import Step
from bsd_hardener.utils.file import ensure_line

MALLOC_TUNABLE = "vm.malloc_conf"


def malloc_line(ctx: RunContext) -> str:
    return f"{MALLOC_TUNABLE}={ctx.config.hardening.malloc_options}"


def set_tunable_line(content: str, name: str, line: str) -> str:
    """Replace every assignment of name with line, or append it."""
    kept = [
        existing
        for existing in content.splitlines()
        if existing == line or existing.split("=", 1)[0].strip() != name
    ]
    body = "\n".join(kept) + "\n" if kept else ""
    return ensure_line(body, line)


class HardenMalloc(Step):
    name = "malloc"
    prompt = "Enable hardened malloc options system-wide?"

    def is_applied(self, ctx: RunContext) -> bool:
        # Any other assignment of the tunable overrides ours at boot.
        content = ctx.files.read_file(ctx.config.paths.sysctl_conf)
        return bool(content) and (
            set_tunable_line(content, MALLOC_TUNABLE, malloc_line(ctx)) == content
        )

    def apply(self, ctx: RunContext) -> None:
        line = malloc_line(ctx)
        ctx.files.transform_file(
            ctx.config.paths.sysctl_conf,
            lambda content: set_tunable_line(content, MALLOC_TUNABLE, line),
        )
        ctx.host.tunables.set(MALLOC_TUNABLE, ctx.config.hardening.malloc_options)
