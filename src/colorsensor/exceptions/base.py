"""Root of the colorsensor exception tree.

Errors here are mostly reported, not raised to the top: a missing port or
a garbled line should cost the user a color change, never the host loop.
Every error therefore carries two audiences:

- `user_message` is what the CLI prints after ERROR: or [FAIL]
- `technical_message` goes to the log and includes the port or the raw line
"""

from typing import Optional


class ColorSensorError(Exception):
    """
    Base exception for all colorsensor errors.

    Attributes:
        user_message: One-line summary for the terminal
        technical_message: Log detail (port, offending line, pyserial text)
        recoverable: True when the pipeline keeps running after the error,
            e.g. a read fault the reader retries or a dropped line
        recovery_hint: What the user can change, usually a
            `colorsensor config set` invocation or a cable/port check
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, as shown by click."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
