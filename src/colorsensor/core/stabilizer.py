"""Debounce of per-tick decisions."""

from dataclasses import dataclass
from typing import Optional

from colorsensor.models import DecidedColor


@dataclass(slots=True)
class StabilizationState:
    candidate: Optional[DecidedColor] = None
    count: int = 0


class Stabilizer:
    """
    Confirms a decision once it has been seen on `stable_frames`
    consecutive ticks. Any different decision restarts the count at 1.

    The candidate can be UNDECIDED too; an undecided run gets confirmed
    like any other, the applier decides what that means.
    """

    def __init__(self, stable_frames: int = 3):
        if stable_frames < 1:
            raise ValueError("stable_frames must be at least 1")
        self.stable_frames = stable_frames
        self.state = StabilizationState()

    @property
    def candidate(self) -> Optional[DecidedColor]:
        return self.state.candidate

    @property
    def count(self) -> int:
        return self.state.count

    def update(self, decided: DecidedColor) -> bool:
        """
        Record this tick's raw decision.

        Returns:
            True if the decision is confirmed on this tick
        """
        if decided == self.state.candidate:
            self.state.count += 1
        else:
            self.state.candidate = decided
            self.state.count = 1
        return self.state.count >= self.stable_frames
