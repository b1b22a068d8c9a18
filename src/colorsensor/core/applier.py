"""Cooldown and change gate in front of the consumer callback."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from colorsensor.exceptions import handle_errors
from colorsensor.models import DecidedColor

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplyState:
    last_applied: Optional[DecidedColor] = None
    last_applied_at: Optional[float] = None  # seconds, consumer clock


@handle_errors(operation_name="apply decided color", re_raise=False, fallback_value=False)
def _invoke(callback: Callable[[int], None], index: int) -> bool:
    callback(index)
    return True


class Applier:
    """
    Forwards confirmed color changes to the consumer callback.

    Fires only when the decision is confirmed, decided (not UNDECIDED),
    different from the color already applied, and at least `cooldown_ms`
    after the previous change. An undecided confirmation never clears the
    applied color: it stays in effect until a different color replaces it.

    If the callback raises, the error is logged and the state is left as
    is, so the same color is retried on a later tick.
    """

    def __init__(self, callback: Callable[[int], None], cooldown_ms: int = 120):
        self._callback = callback
        self.cooldown_ms = cooldown_ms
        self.state = ApplyState()

    @property
    def last_applied(self) -> Optional[DecidedColor]:
        return self.state.last_applied

    def offer(self, decided: DecidedColor, confirmed: bool, now: float) -> bool:
        """
        Consider a tick's decision for application.

        Args:
            decided: This tick's decision
            confirmed: Whether the stabilizer confirmed it
            now: Current tick time in seconds

        Returns:
            True if the callback was invoked successfully
        """
        if not confirmed or decided == DecidedColor.UNDECIDED:
            return False

        last_at = self.state.last_applied_at
        if last_at is not None and (now - last_at) * 1000.0 < self.cooldown_ms:
            return False

        if decided == self.state.last_applied:
            return False

        if not _invoke(self._callback, int(decided)):
            return False

        self.state.last_applied = decided
        self.state.last_applied_at = now
        logger.info(f"Applied color {decided.display_name} ({int(decided)})")
        return True
