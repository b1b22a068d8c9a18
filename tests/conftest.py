"""Pytest fixtures for tests."""

import threading
import time
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
import serial

from colorsensor.models import AppConfig, ClassifierConfig


class FakeSerial:
    """
    Scripted stand-in for serial.Serial.

    Bytes passed to feed() are returned one at a time by read(); when the
    script is exhausted, read() waits for the configured timeout and
    returns b'' like a real port.
    """

    def __init__(self, fail_open: bool = False):
        self.port = None
        self.baudrate = 9600
        self.bytesize = serial.EIGHTBITS
        self.parity = serial.PARITY_NONE
        self.stopbits = serial.STOPBITS_ONE
        self.timeout = None
        self.write_timeout = None
        self.dtr = True
        self.rts = True
        self.is_open = False
        self.fail_open = fail_open
        self.open_calls = 0
        self.close_calls = 0
        self.read_errors: list[Exception] = []
        self._data = bytearray()
        self._lock = threading.Lock()

    def feed(self, data: bytes) -> None:
        with self._lock:
            self._data.extend(data)

    @property
    def pending(self) -> int:
        """Scripted bytes not yet read."""
        with self._lock:
            return len(self._data)

    def open(self) -> None:
        self.open_calls += 1
        if self.fail_open:
            raise serial.SerialException(f"could not open port {self.port}")
        self.is_open = True

    def read(self, size: int = 1) -> bytes:
        if self.read_errors:
            raise self.read_errors.pop(0)
        with self._lock:
            if self._data:
                chunk = bytes(self._data[:size])
                del self._data[:size]
                return chunk
        time.sleep(self.timeout or 0.01)
        return b""

    def close(self) -> None:
        self.close_calls += 1
        self.is_open = False


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> float:
        self.now += ms / 1000.0
        return self.now


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_serial():
    """An unopened scripted serial port."""
    return FakeSerial()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def classifier_config():
    """Default classifier thresholds."""
    return ClassifierConfig()


@pytest.fixture
def app_config():
    """Config tuned for fast tests: no warm-up, short timeouts."""
    config = AppConfig(warmup_ms=0, reader_join_timeout_ms=500, fault_backoff_ms=5)
    return config.model_copy(
        update={"serial": config.serial.model_copy(update={"port": "/dev/ttyFAKE0", "read_timeout_ms": 5})}
    )
