"""Step orchestration."""

import sys
from typing import Callable, Iterable, Optional, TextIO

import structlog

from bsd_hardener.context import RunContext
from bsd_hardener.exceptions import HardenerError
from bsd_hardener.prompt import confirm
from bsd_hardener.steps.base import Step
from bsd_hardener.types import StepOutcome, StepResult

logger = structlog.get_logger(__name__)

OUTCOME_MARKS = {
    StepOutcome.SKIPPED: "=",
    StepOutcome.DECLINED: "-",
    StepOutcome.APPLIED: "+",
    StepOutcome.FAILED: "!",
}


class StepExecutor:
    """Run catalog steps in order, one outcome per step."""

    def __init__(
        self,
        steps: Iterable[Step],
        ask: Callable[[str], bool] = confirm,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        """Initialize step executor.

        Args:
            steps: Steps in execution order
            ask: Yes/no prompt used before each pending step
            out: Stream for outcome lines, stdout by default
            err: Stream for failure diagnostics, stderr by default
        """
        self.steps = list(steps)
        self.ask = ask
        self.out = out
        self.err = err

    def run(self, ctx: RunContext) -> None:
        """Execute every step; failures are recorded and do not stop the run."""
        logger.info("run_start", steps=len(self.steps), user=ctx.target_user)
        for step in self.steps:
            self.run_step(step, ctx)
        logger.info("run_complete", **{o.value: n for o, n in ctx.outcome_counts().items()})

    def run_step(self, step: Step, ctx: RunContext) -> StepResult:
        """Drive one step from pending to its terminal outcome."""
        log = logger.bind(step=step.name)

        try:
            applied = step.is_applied(ctx)
        except (HardenerError, OSError, ValueError) as e:
            log.error("probe_failed", error=str(e))
            return self._finish(ctx, step, StepOutcome.FAILED, str(e))

        if applied:
            log.info("step_skipped")
            return self._finish(ctx, step, StepOutcome.SKIPPED, "already applied")

        if not self.ask(step.prompt):
            log.info("step_declined")
            return self._finish(ctx, step, StepOutcome.DECLINED)

        try:
            step.apply(ctx)
        except (HardenerError, OSError, ValueError) as e:
            log.error("step_failed", error=str(e))
            return self._finish(ctx, step, StepOutcome.FAILED, str(e))

        log.info("step_applied")
        return self._finish(ctx, step, StepOutcome.APPLIED)

    def _finish(
        self, ctx: RunContext, step: Step, outcome: StepOutcome, detail: str = ""
    ) -> StepResult:
        result = ctx.record(step.name, outcome, detail)
        line = f"[{OUTCOME_MARKS[outcome]}] {step.name}: {outcome.value}"
        if outcome is StepOutcome.FAILED:
            print(f"{line} - {detail}", file=self.err or sys.stderr)
        else:
            print(line, file=self.out or sys.stdout)
        return result


def format_summary(ctx: RunContext) -> str:
    """Final report of every recorded outcome."""
    counts = ctx.outcome_counts()
    lines = [
        "Summary: "
        + ", ".join(f"{counts[outcome]} {outcome.value}" for outcome in StepOutcome)
    ]
    for result in ctx.results:
        entry = f"  {result.name:<18} {result.outcome.value}"
        if result.detail and result.outcome is StepOutcome.FAILED:
            entry += f" ({result.detail})"
        lines.append(entry)
    return "\n".join(lines)
