"""Per-channel base color classification."""

from abc import ABC, abstractmethod
from typing import Optional

from colorsensor.models import BaseColor, ClassifierConfig, ClassifierStrategy, Sample


class ChannelClassifier(ABC):
    """
    Maps a channel's latest sample to a base color.

    Shared gates run first: a channel with no sample, a stale sample or a
    reading too dark to judge is NONE. Subclasses only decide between the
    colors for a reading that passed those gates.
    """

    def __init__(self, config: ClassifierConfig):
        self.config = config

    def is_fresh(self, sample: Optional[Sample], now: float) -> bool:
        """True if a sample exists and is within the no-data timeout."""
        if sample is None or sample.received_at is None:
            return False
        timeout_ms = self.config.no_data_timeout_ms
        if timeout_ms <= 0:
            return True
        age_ms = (now - sample.received_at) * 1000.0
        return age_ms <= timeout_ms

    def classify(self, sample: Optional[Sample], now: float) -> BaseColor:
        """
        Classify one channel.

        Args:
            sample: Latest sample for the channel, or None if none received
            now: Current tick time in seconds (same clock as received_at)
        """
        if not self.is_fresh(sample, now):
            return BaseColor.NONE
        if sample.c < self.config.min_clear:
            return BaseColor.NONE
        return self._classify_rgb(sample.r, sample.g, sample.b)

    @abstractmethod
    def _classify_rgb(self, r: int, g: int, b: int) -> BaseColor:
        """Decide the color of a fresh, bright-enough reading."""
        pass


class ThresholdClassifier(ChannelClassifier):
    """
    Absolute thresholds with fixed precedence: yellow, then blue, then red.

    Yellow is tested first because a yellow card also has a strong red
    component.
    """

    def _classify_rgb(self, r: int, g: int, b: int) -> BaseColor:
        cfg = self.config
        if r >= cfg.yellow_r_min and g >= cfg.yellow_g_min:
            return BaseColor.YELLOW
        if b >= cfg.blue_min:
            return BaseColor.BLUE
        if r >= cfg.red_min:
            return BaseColor.RED
        return BaseColor.NONE


class RatioClassifier(ChannelClassifier):
    """
    Normalized dominance: each component as a fraction of r+g+b.

    Less sensitive to overall brightness than absolute thresholds.
    Precedence: red, then blue, then yellow.
    """

    def _classify_rgb(self, r: int, g: int, b: int) -> BaseColor:
        cfg = self.config
        total = float(r + g + b) + 1.0  # +1 avoids division by zero
        rn = r / total
        gn = g / total
        bn = b / total

        if rn >= cfg.red_dominant_min and gn < 0.30 and bn < 0.30:
            return BaseColor.RED
        if bn >= cfg.blue_dominant_min and rn < 0.35 and gn < 0.35:
            return BaseColor.BLUE
        if rn >= cfg.yellow_rg_min and gn >= cfg.yellow_rg_min and bn <= cfg.yellow_b_max:
            return BaseColor.YELLOW
        return BaseColor.NONE


def build_classifier(config: ClassifierConfig) -> ChannelClassifier:
    """Create the classifier selected by config.strategy."""
    if config.strategy == ClassifierStrategy.RATIO:
        return RatioClassifier(config)
    return ThresholdClassifier(config)
