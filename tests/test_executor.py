"""Tests for the step executor state machine."""

import io
from typing import List

from bsd_hardener.exceptions import BackupError
from bsd_hardener.executor import StepExecutor, format_summary
from bsd_hardener.steps.base import Step
from bsd_hardener.types import StepOutcome


class RecordingStep(Step):
    def __init__(self, name: str, applied: bool = False, error: Exception = None) -> None:
        self.name = name
        self.prompt = f"Run {name}?"
        self.applied = applied
        self.error = error
        self.calls: List[str] = []

    def is_applied(self, ctx) -> bool:
        self.calls.append("probe")
        return self.applied

    def apply(self, ctx) -> None:
        self.calls.append("apply")
        if self.error:
            raise self.error
        self.applied = True


def make_executor(steps, answers):
    asked = []

    def ask(prompt):
        asked.append(prompt)
        return answers.pop(0)

    out, err = io.StringIO(), io.StringIO()
    return StepExecutor(steps, ask=ask, out=out, err=err), asked, out, err


def test_skipped_step_is_not_prompted(ctx):
    step = RecordingStep("done", applied=True)
    executor, asked, out, _ = make_executor([step], [])

    executor.run(ctx)

    assert asked == []
    assert step.calls == ["probe"]
    assert ctx.results[0].outcome is StepOutcome.SKIPPED
    assert "[=] done: skipped" in out.getvalue()


def test_declined_step_does_not_block_next(ctx):
    first = RecordingStep("first")
    second = RecordingStep("second")
    executor, asked, _, _ = make_executor([first, second], [False, True])

    executor.run(ctx)

    assert asked == ["Run first?", "Run second?"]
    assert first.calls == ["probe"]
    assert second.calls == ["probe", "apply"]
    assert [r.outcome for r in ctx.results] == [StepOutcome.DECLINED, StepOutcome.APPLIED]


def test_failure_is_local_and_reported(ctx):
    failing = RecordingStep("broken", error=BackupError("Cannot back up /etc/group"))
    after = RecordingStep("after")
    executor, _, _, err = make_executor([failing, after], [True, True])

    executor.run(ctx)

    assert ctx.results[0].outcome is StepOutcome.FAILED
    assert ctx.results[0].detail == "Cannot back up /etc/group"
    assert ctx.results[1].outcome is StepOutcome.APPLIED
    assert "[!] broken: failed - Cannot back up /etc/group" in err.getvalue()


def test_os_error_is_recorded_as_failure(ctx):
    step = RecordingStep("io", error=PermissionError("denied"))
    executor, _, _, _ = make_executor([step], [True])

    executor.run(ctx)

    assert ctx.results[0].outcome is StepOutcome.FAILED


def test_probe_error_is_recorded_as_failure(ctx):
    class BadProbe(RecordingStep):
        def is_applied(self, ctx):
            raise OSError("unreadable")

    executor, asked, _, _ = make_executor([BadProbe("bad"), RecordingStep("ok")], [True])

    executor.run(ctx)

    assert asked == ["Run ok?"]
    assert [r.outcome for r in ctx.results] == [StepOutcome.FAILED, StepOutcome.APPLIED]


def test_every_step_yields_exactly_one_result(ctx):
    steps = [
        RecordingStep("a", applied=True),
        RecordingStep("b"),
        RecordingStep("c", error=BackupError("x")),
        RecordingStep("d"),
    ]
    executor, _, _, _ = make_executor(steps, [False, True, True])

    executor.run(ctx)

    assert [r.name for r in ctx.results] == ["a", "b", "c", "d"]


def test_summary_lists_counts_and_failures(ctx):
    steps = [RecordingStep("a", applied=True), RecordingStep("b", error=BackupError("nope"))]
    executor, _, _, _ = make_executor(steps, [True])
    executor.run(ctx)

    summary = format_summary(ctx)

    assert summary.splitlines()[0] == "Summary: 1 skipped, 0 declined, 0 applied, 1 failed"
    assert "(nope)" in summary
