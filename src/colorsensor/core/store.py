"""Latest-sample table, one slot per active channel."""

from typing import Optional

from colorsensor.exceptions import OutOfRangeChannelError
from colorsensor.models import Sample


class SampleStore:
    """
    Holds the most recent sample for each channel.

    Owned by the consumer tick; not thread-safe. Samples are overwritten,
    never merged, so several updates to one channel within a tick collapse
    to the last one.
    """

    def __init__(self, max_channels: int):
        """
        Initialize an empty store.

        Args:
            max_channels: Number of active channels; valid indices are 0..max_channels-1
        """
        if max_channels < 1:
            raise ValueError("max_channels must be at least 1")
        self._latest: list[Optional[Sample]] = [None] * max_channels

    @property
    def max_channels(self) -> int:
        return len(self._latest)

    def update(self, sample: Sample, now: float) -> Sample:
        """
        Store a sample, stamping it with the consumer's tick time.

        Any timestamp carried by the incoming sample is ignored.

        Returns:
            The stored (stamped) sample

        Raises:
            OutOfRangeChannelError: Channel is not an active channel
        """
        if not 0 <= sample.channel < len(self._latest):
            raise OutOfRangeChannelError(sample.channel, len(self._latest))

        stamped = sample.stamped(now)
        self._latest[sample.channel] = stamped
        return stamped

    def latest(self, channel: int) -> Optional[Sample]:
        """Most recent sample for a channel, or None if nothing has arrived."""
        if not 0 <= channel < len(self._latest):
            return None
        return self._latest[channel]

    def __len__(self) -> int:
        return len(self._latest)
