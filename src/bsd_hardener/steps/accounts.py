"""Removal of the operator account from administrative groups."""

from typing import Iterable

from bsd_hardener.context import RunContext
from bsd_hardener.probes import user_in_group
from bsd_hardener.steps.base import Step


def remove_from_groups(content: str, user: str, groups: Iterable[str]) -> str:
    """Drop user from the member list of each named group."""
    targets = set(groups)
    lines = []
    for line in content.splitlines(keepends=True):
        body = line.rstrip("\r\n")
        ending = line[len(body):]
        fields = body.split(":")
        if len(fields) >= 4 and fields[0] in targets:
            members = [m for m in fields[3].split(",") if m.strip() and m.strip() != user]
            fields[3] = ",".join(members)
            body = ":".join(fields)
        lines.append(body + ending)
    return "".join(lines)


class DeprivilegeUser(Step):
    name = "deprivilege-user"
    prompt = "Remove the target user from administrative groups?"

    def is_applied(self, ctx: RunContext) -> bool:
        group_file = ctx.config.paths.group_file
        return not any(
            user_in_group(group_file, group, ctx.user)
            for group in ctx.config.hardening.admin_groups
        )

    def apply(self, ctx: RunContext) -> None:
        user = ctx.user
        groups = ctx.config.hardening.admin_groups
        ctx.files.transform_file(
            ctx.config.paths.group_file,
            lambda content: remove_from_groups(content, user, groups),
        )
