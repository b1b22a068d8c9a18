"""Sensor sample data structure.

A dataclass rather than a Pydantic model: one is created for every line on
the hot path, and component values are deliberately not range-validated.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True, slots=True)
class Sample:
    """One channel reading as received on the wire."""

    channel: int
    r: int
    g: int
    b: int
    c: int                              # Clear (unfiltered brightness)
    received_at: Optional[float] = None  # Consumer tick time, seconds (monotonic)

    def stamped(self, now: float) -> "Sample":
        """Return a copy carrying the consumer's receipt time."""
        return replace(self, received_at=now)
