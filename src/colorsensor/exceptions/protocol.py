"""Wire protocol exceptions.

Raised by the line parser and the sample store. The pipeline catches them,
drops the offending line and leaves its state untouched.
"""

from .base import ColorSensorError


class ProtocolError(ColorSensorError):
    """A received line could not be turned into a usable sample."""

    def __init__(self, user_message: str, line: str = "", **kwargs):
        super().__init__(user_message, recoverable=True, **kwargs)
        self.line = line


class MalformedLineError(ProtocolError):
    """Line has the wrong field count or a non-integer field."""

    def __init__(self, line: str, reason: str):
        """
        Initialize malformed line error.

        Args:
            line: The raw line as received
            reason: Why the line was rejected
        """
        super().__init__(
            user_message=f"Malformed sensor line: {reason}",
            technical_message=f"Malformed sensor line {line!r}: {reason}",
            line=line,
        )
        self.reason = reason


class OutOfRangeChannelError(ProtocolError):
    """Parsed channel index is outside the configured channel count."""

    def __init__(self, channel: int, max_channels: int):
        super().__init__(
            user_message=f"Channel {channel} is not active (active: 0-{max_channels - 1})",
        )
        self.channel = channel
        self.max_channels = max_channels
