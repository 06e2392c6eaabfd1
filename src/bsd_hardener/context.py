"""Per-invocation run state."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from bsd_hardener.collaborators import Host
from bsd_hardener.config import HardenerConfig
from bsd_hardener.types import StepOutcome, StepResult
from bsd_hardener.utils.file import FileManager


@dataclass
class RunContext:
    """State owned by one invocation of the tool."""

    config: HardenerConfig
    host: Host
    files: FileManager = field(default_factory=FileManager)
    target_user: Optional[str] = None
    privileged: bool = False
    results: List[StepResult] = field(default_factory=list)

    @property
    def user(self) -> str:
        """Target user; steps that act on an account require one."""
        if not self.target_user:
            raise ValueError("No target user selected")
        return self.target_user

    def record(self, name: str, outcome: StepOutcome, detail: str = "") -> StepResult:
        result = StepResult(name, outcome, detail)
        self.results.append(result)
        return result

    def outcome_counts(self) -> Dict[StepOutcome, int]:
        counts = Counter(r.outcome for r in self.results)
        return {outcome: counts.get(outcome, 0) for outcome in StepOutcome}
