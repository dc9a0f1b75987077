"""Poll state for the retry loop."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Phase(str, Enum):
    COUNTING = "counting"
    ACT = "act"
    DONE = "done"


@dataclass(frozen=True)
class PollState:
    """Immutable poll state; every tick returns a new value."""

    countdown: int
    done: bool = False
    attempts: int = 0  # number of retry cycles that reached the click step

    def __post_init__(self) -> None:
        if self.countdown < 0:
            raise ValueError(f"countdown must be >= 0, got {self.countdown}")
        if self.attempts < 0:
            raise ValueError(f"attempts must be >= 0, got {self.attempts}")

    @property
    def phase(self) -> Phase:
        if self.done:
            return Phase.DONE
        if self.countdown > 0:
            return Phase.COUNTING
        return Phase.ACT

    def counted_down(self) -> PollState:
        return replace(self, countdown=max(0, self.countdown - 1))

    def reset(self, countdown: int) -> PollState:
        return replace(self, countdown=max(0, countdown), attempts=self.attempts + 1)

    def finished(self) -> PollState:
        return replace(self, done=True)
