"""Serial device exceptions.

- DeviceError: Base class for device link errors
- DeviceUnavailableError: The port could not be opened
- StreamFaultError: An I/O error occurred mid-read
"""

from typing import Optional

from .base import ColorSensorError


class DeviceError(ColorSensorError):
    """Serial device initialization or operation failed."""

    def __init__(self, user_message: str, port: Optional[str] = None, **kwargs):
        """
        Initialize device error.

        Args:
            user_message: User-friendly error message
            port: The serial port involved (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.port = port


class DeviceUnavailableError(DeviceError):
    """Serial port could not be opened."""

    def __init__(self, port: str, original_error: Optional[str] = None):
        """
        Initialize device-unavailable error.

        Args:
            port: The port that failed to open
            original_error: The original error message from pyserial
        """
        user_msg = f"Color sensor port {port} is not available."
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        recovery = (
            "Check that the sensor board is plugged in and that no other program "
            "(serial monitor, Arduino IDE) holds the port. "
            "Run 'colorsensor config set --port <PORT>' to change the port."
        )

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            port=port,
            recoverable=True,
            recovery_hint=recovery,
        )


class StreamFaultError(DeviceError):
    """Reading from an open port failed."""

    def __init__(self, port: Optional[str] = None, original_error: Optional[str] = None):
        """
        Initialize stream fault error.

        Args:
            port: The port being read
            original_error: The original error message
        """
        user_msg = "Lost data from the color sensor."
        tech_msg = f"Read fault on {port or 'serial port'}"
        if original_error:
            tech_msg += f": {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            port=port,
            recoverable=True,
            recovery_hint="Check the USB cable. Reading resumes automatically.",
        )
