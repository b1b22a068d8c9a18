"""Color sensor pipeline: serial lines in, confirmed color changes out.

Two execution contexts:

- the reader thread (FrameReader) does all blocking I/O and only pushes
  complete lines onto the line queue;
- the host calls tick() periodically; each tick drains the queue and runs
  parsing, classification, fusion, stabilization and apply synchronously.

All classification state belongs to the tick context, so the queue is the
only synchronization point.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from colorsensor.device import DeviceLink, FrameReader, LineQueue
from colorsensor.exceptions import DeviceUnavailableError, ErrorContext, ProtocolError
from colorsensor.models import (
    SNAPSHOT_SLOTS,
    AppConfig,
    BaseColor,
    ChannelDisplay,
    DecidedColor,
    DisplaySnapshot,
    Sample,
)
from colorsensor.protocols import ColorConsumer

from .applier import Applier
from .classifier import build_classifier
from .parser import parse_line
from .resolver import resolve_mixed_color
from .stabilizer import Stabilizer
from .store import SampleStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TickResult:
    """Outcome of one tick."""

    decided: DecidedColor  # Raw fused decision for this tick
    confirmed: bool        # Stabilizer confirmed the decision
    applied: bool          # Consumer callback fired


class ColorPipeline:
    """
    Real-time color decision pipeline for a multi-channel color sensor.

    Lifecycle is explicit: init() once, tick() from the host loop,
    shutdown() from any number of teardown paths.

    Usage:
        ```python
        pipeline = ColorPipeline(AppConfig.load_or_default(), player.set_attack_color)
        pipeline.init()
        try:
            while running:
                pipeline.tick()
                hud.render(pipeline.snapshot)
                time.sleep(0.016)
        finally:
            pipeline.shutdown()
        ```
    """

    def __init__(
        self,
        config: AppConfig,
        consumer: Union[Callable[[int], None], ColorConsumer],
        link: Optional[DeviceLink] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the pipeline (no I/O happens until init()).

        Args:
            config: Application configuration
            consumer: Callable taking the decided color index, or a ColorConsumer
            link: Device link to use (defaults to a pyserial-backed link)
            clock: Monotonic clock in seconds; tick() uses it when no time is given
        """
        self.config = config
        self._clock = clock
        self._link = link or DeviceLink()

        if callable(consumer):
            callback = consumer
        else:
            callback = consumer.apply_decided_color

        self._queue = LineQueue(maxsize=config.line_queue_limit)
        self._reader = FrameReader(
            self._link,
            self._queue,
            read_timeout=config.serial.read_timeout_ms / 1000.0,
            buffer_limit=config.line_buffer_limit,
            fault_backoff=config.fault_backoff_ms / 1000.0,
        )

        self._store = SampleStore(config.max_channels)
        self._classifier = build_classifier(config.classifier)
        self._stabilizer = Stabilizer(config.stable_frames)
        self._applier = Applier(callback, config.apply_cooldown_ms)
        self._snapshot = DisplaySnapshot.empty()

        self._lifecycle_lock = threading.Lock()
        self._warmup_timer: Optional[threading.Timer] = None
        self._initialized = False
        self._stopping = False
        self._device_available = False

    # =================================================================
    # Lifecycle
    # =================================================================

    def init(self) -> None:
        """
        Open the device and schedule the reader start after the warm-up delay.

        Never raises for device problems: if the port cannot be opened the
        pipeline keeps running in a permanent no-data state.
        """
        with self._lifecycle_lock:
            if self._initialized or self._stopping:
                logger.warning("ColorPipeline.init() called more than once; ignoring")
                return
            self._initialized = True

        try:
            self._link.open(self.config.serial)
        except DeviceUnavailableError as e:
            logger.error(f"Color sensor unavailable: {e.technical_message}")
            return

        self._device_available = True

        warmup = self.config.warmup_ms / 1000.0
        if warmup <= 0:
            self._start_reader()
            return

        # Boards that reset on port open send garbage while booting
        timer = threading.Timer(warmup, self._start_reader)
        timer.daemon = True
        with self._lifecycle_lock:
            if self._stopping:
                return
            self._warmup_timer = timer
        timer.start()
        logger.debug(f"Reader start deferred by {self.config.warmup_ms} ms")

    def _start_reader(self) -> None:
        with self._lifecycle_lock:
            self._warmup_timer = None
            if self._stopping or not self._link.is_open:
                return
            self._reader.start()

    def shutdown(self) -> None:
        """
        Stop the reader and close the device.

        Safe to call any number of times, from any thread. Each step runs
        even if an earlier one failed; nothing is raised.
        """
        with self._lifecycle_lock:
            first_call = not self._stopping
            self._stopping = True
            timer, self._warmup_timer = self._warmup_timer, None

        if first_call:
            logger.info("Shutting down color pipeline")

        with ErrorContext("cancel warm-up timer", logger, re_raise=False):
            if timer is not None:
                timer.cancel()

        with ErrorContext("stop reader thread", logger, re_raise=False):
            self._reader.stop()
            join_timeout = self.config.reader_join_timeout_ms / 1000.0
            if not self._reader.join(join_timeout):
                logger.warning(
                    f"Reader thread did not exit within "
                    f"{self.config.reader_join_timeout_ms} ms; abandoning it"
                )

        with ErrorContext("close device link", logger, re_raise=False):
            self._link.close()

    def __enter__(self):
        self.init()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    # =================================================================
    # Per-tick processing
    # =================================================================

    def feed_line(self, line: str) -> None:
        """Queue a protocol line as if it had arrived from the device."""
        self._queue.put(line)

    def tick(self, now: Optional[float] = None) -> TickResult:
        """
        Run one pipeline iteration.

        Args:
            now: Tick time in seconds; defaults to the pipeline clock

        Returns:
            TickResult describing this tick's decision
        """
        if now is None:
            now = self._clock()

        for line in self._queue.drain():
            logger.debug(f"RAW {line}")
            try:
                self._store.update(parse_line(line), now)
            except ProtocolError as e:
                logger.debug(f"Dropped line: {e.technical_message}")

        samples = [self._store.latest(ch) for ch in range(self._store.max_channels)]
        base_colors = [self._classifier.classify(s, now) for s in samples]
        decided = resolve_mixed_color(base_colors)

        self._publish_snapshot(samples, base_colors, decided, now)

        confirmed = self._stabilizer.update(decided)
        applied = self._applier.offer(decided, confirmed, now)
        return TickResult(decided=decided, confirmed=confirmed, applied=applied)

    def _publish_snapshot(
        self,
        samples: list[Optional[Sample]],
        base_colors: list[BaseColor],
        decided: DecidedColor,
        now: float,
    ) -> None:
        slots = []
        for ch in range(SNAPSHOT_SLOTS):
            if ch >= len(samples):
                slots.append(ChannelDisplay())
                continue

            sample = samples[ch]
            if sample is None:
                slots.append(ChannelDisplay(final_color=decided))
                continue

            slots.append(
                ChannelDisplay(
                    has_data=self._classifier.is_fresh(sample, now),
                    r=sample.r,
                    g=sample.g,
                    b=sample.b,
                    c=sample.c,
                    base_color=base_colors[ch],
                    final_color=decided,
                )
            )

        self._snapshot = DisplaySnapshot(channels=tuple(slots))

    # =================================================================
    # Observability
    # =================================================================

    @property
    def snapshot(self) -> DisplaySnapshot:
        """Latest published display snapshot (immutable)."""
        return self._snapshot

    @property
    def device_available(self) -> bool:
        """True if the device opened successfully during init()."""
        return self._device_available

    @property
    def reader_running(self) -> bool:
        return self._reader.is_running

    @property
    def dropped_lines(self) -> int:
        """Lines dropped because the consumer fell behind."""
        return self._queue.dropped

    @property
    def last_applied(self) -> Optional[DecidedColor]:
        return self._applier.last_applied
