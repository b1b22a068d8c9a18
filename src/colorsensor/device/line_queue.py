"""Bounded FIFO between the reader thread and the consumer tick."""

import logging
from queue import Empty, Full, Queue

logger = logging.getLogger(__name__)


class LineQueue:
    """
    Thread-safe line FIFO with a drop-oldest overflow policy.

    If the consumer stalls, the most recent lines are kept and the oldest
    ones are discarded, so a recovering consumer sees fresh readings.
    """

    def __init__(self, maxsize: int = 1024):
        self._queue: Queue[str] = Queue(maxsize=maxsize)
        self._dropped = 0

    @property
    def dropped(self) -> int:
        """Lines discarded because the queue was full."""
        return self._dropped

    def put(self, line: str) -> None:
        """Enqueue a line without blocking, evicting the oldest line if full."""
        while True:
            try:
                self._queue.put_nowait(line)
                return
            except Full:
                try:
                    self._queue.get_nowait()
                except Empty:
                    continue
                self._dropped += 1
                if self._dropped == 1 or self._dropped % 100 == 0:
                    logger.warning(
                        f"Line queue full, dropped {self._dropped} oldest line(s) so far"
                    )

    def drain(self) -> list[str]:
        """Remove and return every pending line in arrival order."""
        lines = []
        while True:
            try:
                lines.append(self._queue.get_nowait())
            except Empty:
                return lines

    def __len__(self) -> int:
        return self._queue.qsize()
