"""System immutable flags on hardened configuration files."""

from pathlib import Path
from typing import List

import structlog

from bsd_hardener.context import RunContext
from bsd_hardener.probes import file_immutable
from bsd_hardener.steps.base import Step

logger = structlog.get_logger(__name__)


def pending_files(ctx: RunContext) -> List[Path]:
    """Existing configured files that do not yet carry the flag."""
    pending = []
    for name in ctx.config.paths.immutable_files:
        path = Path(name)
        if not path.exists():
            logger.debug("immutable_target_missing", path=name)
            continue
        if not file_immutable(ctx.host.attributes, path):
            pending.append(path)
    return pending


class SetImmutableFlags(Step):
    name = "immutable-files"
    prompt = "Mark hardened configuration files immutable (schg)?"

    def is_applied(self, ctx: RunContext) -> bool:
        return not pending_files(ctx)

    def apply(self, ctx: RunContext) -> None:
        for path in pending_files(ctx):
            ctx.host.attributes.set_immutable(path)
