"""Periodic maintenance jobs."""

from typing import List, Sequence

from bsd_hardener.context import RunContext
from bsd_hardener.probes import file_content_equals
from bsd_hardener.steps.base import Step
from bsd_hardener.types import PeriodicJob

BEGIN_MARKER = "# BEGIN bsd-hardener"
END_MARKER = "# END bsd-hardener"

DEFAULT_JOBS = (
    PeriodicJob("freshclam", "0 */4 * * *", "/usr/local/bin/freshclam --quiet"),
    PeriodicJob("syspatch", "30 3 * * *", "/usr/sbin/syspatch"),
    PeriodicJob("pkg-update", "45 3 * * *", "/usr/sbin/pkg_add -u"),
    PeriodicJob("home-scan", "0 4 * * 0", "/usr/local/bin/clamdscan --quiet /home"),
)


def render_task_table(jobs: Sequence[PeriodicJob]) -> str:
    """Tab-separated table of named jobs."""
    lines = ["# Generated by bsd-hardener", "# name\tschedule\tcommand"]
    lines.extend(f"{job.name}\t{job.schedule}\t{job.command}" for job in jobs)
    return "\n".join(lines) + "\n"


def render_cron_block(jobs: Sequence[PeriodicJob]) -> List[str]:
    lines = [BEGIN_MARKER]
    for job in jobs:
        lines.append(f"# {job.name}")
        lines.append(f"{job.schedule}\t{job.command}")
    lines.append(END_MARKER)
    return lines


def merge_crontab(current: str, jobs: Sequence[PeriodicJob]) -> str:
    """Replace the managed block in a crontab, keeping every other entry."""
    kept: List[str] = []
    inside = False
    for line in current.splitlines():
        if line == BEGIN_MARKER:
            inside = True
            continue
        if line == END_MARKER:
            inside = False
            continue
        if not inside:
            kept.append(line)
    while kept and not kept[-1].strip():
        kept.pop()
    if kept:
        kept.append("")
    return "\n".join(kept + render_cron_block(jobs)) + "\n"


class SchedulePeriodicTasks(Step):
    name = "periodic-tasks"
    prompt = "Schedule periodic antivirus and system update jobs?"

    jobs: Sequence[PeriodicJob] = DEFAULT_JOBS

    def is_applied(self, ctx: RunContext) -> bool:
        if not file_content_equals(ctx.config.paths.task_table, render_task_table(self.jobs)):
            return False
        current = ctx.host.scheduler.current(ctx.config.hardening.admin_user)
        return merge_crontab(current, self.jobs) == current

    def apply(self, ctx: RunContext) -> None:
        paths = ctx.config.paths
        admin = ctx.config.hardening.admin_user

        ctx.files.replace_file(paths.task_table, render_task_table(self.jobs))

        crontab = merge_crontab(ctx.host.scheduler.current(admin), self.jobs)
        ctx.files.replace_file(paths.admin_crontab, crontab, mode=0o600)
        ctx.host.scheduler.install(admin, paths.admin_crontab)
