"""Serial link to the color sensor board."""

import logging
import threading
from typing import Callable, Optional

import serial

from colorsensor.exceptions import StreamFaultError, wrap_serial_error
from colorsensor.models import SerialConfig

logger = logging.getLogger(__name__)


class DeviceLink:
    """
    Owns the byte-stream connection to the sensor board.

    Wraps pyserial. Reads happen on the reader thread while close() may be
    called from any teardown path, so the handle is guarded by a lock and
    released exactly once.
    """

    def __init__(self, serial_factory: Callable[[], serial.Serial] = serial.Serial):
        """
        Initialize the link (does not open the port).

        Args:
            serial_factory: Creates an unopened serial port object. Tests
                            substitute a scripted fake.
        """
        self._serial_factory = serial_factory
        self._serial: Optional[serial.Serial] = None
        self._lock = threading.Lock()
        self._port_name: Optional[str] = None

    @property
    def is_open(self) -> bool:
        """Check if the serial port is open."""
        handle = self._serial
        return handle is not None and handle.is_open

    @property
    def port_name(self) -> Optional[str]:
        return self._port_name

    def open(self, config: SerialConfig) -> None:
        """
        Open and configure the serial port.

        DTR/RTS are set before the port is opened so that the board does
        not see a reset pulse when both are disabled.

        Raises:
            DeviceUnavailableError: If the port cannot be opened
        """
        with self._lock:
            if self._serial is not None and self._serial.is_open:
                logger.warning(f"Already connected to {self._port_name}")
                return

            self._port_name = config.port
            try:
                port = self._serial_factory()
                port.port = config.port
                port.baudrate = config.baud_rate
                port.bytesize = serial.EIGHTBITS
                port.parity = serial.PARITY_NONE
                port.stopbits = serial.STOPBITS_ONE
                port.timeout = config.read_timeout_ms / 1000.0
                port.write_timeout = config.write_timeout_ms / 1000.0
                port.dtr = config.dtr_enable
                port.rts = config.rts_enable
                port.open()
            except (serial.SerialException, OSError, ValueError) as e:
                self._serial = None
                raise wrap_serial_error(e, config.port, opening=True) from e

            self._serial = port

        logger.info(f"Opened {config.port} @ {config.baud_rate}")

    def read_byte(self, timeout: Optional[float] = None) -> Optional[int]:
        """
        Read a single byte.

        Args:
            timeout: Seconds to wait; None keeps the timeout configured on open

        Returns:
            The byte value (0-255), or None if nothing arrived before the timeout

        Raises:
            StreamFaultError: If the port is closed or the read fails
        """
        handle = self._serial
        if handle is None or not handle.is_open:
            raise StreamFaultError(port=self._port_name, original_error="port not open")

        try:
            if timeout is not None and handle.timeout != timeout:
                handle.timeout = timeout
            data = handle.read(1)
        except (serial.SerialException, OSError, TypeError, AttributeError) as e:
            # pyserial raises TypeError/AttributeError when the port is closed mid-read
            raise wrap_serial_error(e, self._port_name) from e

        if not data:
            return None
        return data[0]

    def close(self) -> None:
        """
        Close the port. Safe to call any number of times from any thread.

        Errors from the underlying close are logged, never raised.
        """
        with self._lock:
            handle, self._serial = self._serial, None

        if handle is None:
            return

        try:
            if handle.is_open:
                handle.close()
            logger.info(f"Closed {self._port_name}")
        except Exception as e:
            logger.warning(f"Error closing {self._port_name}: {e}")
