"""Background reader turning the serial byte stream into text lines."""

import logging
import threading
from typing import Optional

from colorsensor.exceptions import ColorSensorError

from .line_queue import LineQueue
from .link import DeviceLink

logger = logging.getLogger(__name__)

LINE_FEED = 0x0A


class FrameReader:
    """
    Reads the device link one byte at a time on a dedicated thread and
    pushes each complete line onto a LineQueue.

    The reader never touches classification state; the queue is the only
    thing shared with the consumer.
    """

    def __init__(
        self,
        link: DeviceLink,
        line_queue: LineQueue,
        read_timeout: float = 0.05,
        buffer_limit: int = 256,
        fault_backoff: float = 0.05,
    ):
        """
        Initialize the reader (does not start the thread).

        Args:
            link: Opened device link to read from
            line_queue: Queue receiving complete, non-empty lines
            read_timeout: Per-byte read timeout in seconds; bounds stop latency
            buffer_limit: Longest accepted line in bytes
            fault_backoff: Pause after a stream fault, in seconds
        """
        self._link = link
        self._queue = line_queue
        self._read_timeout = read_timeout
        self._buffer_limit = buffer_limit
        self._fault_backoff = fault_backoff
        self._buffer = bytearray()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the reader thread."""
        if self.is_running:
            logger.warning("FrameReader is already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._read_loop, name="colorsensor-reader", daemon=True
        )
        self._thread.start()
        logger.info(f"FrameReader started on {self._link.port_name}")

    def stop(self) -> None:
        """Signal the loop to exit. Returns immediately."""
        self._stop_event.set()

    def join(self, timeout: float) -> bool:
        """
        Wait for the thread to exit.

        Returns:
            True if the thread has exited (or was never started)
        """
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout=timeout)
        if thread.is_alive():
            return False
        self._thread = None
        return True

    def _read_loop(self) -> None:
        """Read until stopped. Faults are logged and retried, never fatal."""
        while not self._stop_event.is_set():
            try:
                value = self._link.read_byte(self._read_timeout)
            except ColorSensorError as e:
                logger.warning(f"Read error: {e.technical_message}")
                self._stop_event.wait(self._fault_backoff)
                continue
            except Exception as e:
                logger.warning(f"Unexpected read error: {e}")
                self._stop_event.wait(self._fault_backoff)
                continue

            if value is not None:
                self.feed_byte(value)

        logger.info("FrameReader stopped")

    def feed_byte(self, value: int) -> None:
        """Accumulate one byte, emitting a line on line feed."""
        if value == LINE_FEED:
            line = self._buffer.decode("ascii", errors="replace").strip("\r\n ")
            self._buffer.clear()
            if line:
                self._queue.put(line)
        elif len(self._buffer) < self._buffer_limit:
            self._buffer.append(value)
        else:
            # Unterminated garbage
            self._buffer.clear()
