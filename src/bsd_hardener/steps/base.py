"""Hardening step contract."""

from abc import ABC, abstractmethod

from bsd_hardener.context import RunContext


class Step(ABC):
    """One independently confirmable, idempotent change to the host.

    Subclasses set ``name`` and ``prompt`` and implement the probe and
    the mutation. ``is_applied`` must not change anything. ``apply`` raises
    a ``HardenerError`` or ``OSError`` when it cannot finish.
    """

    name: str = ""
    prompt: str = ""

    @abstractmethod
    def is_applied(self, ctx: RunContext) -> bool:
        """Return True if this step's effect is already present."""

    @abstractmethod
    def apply(self, ctx: RunContext) -> None:
        """Make the change."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
