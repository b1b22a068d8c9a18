"""Unit tests for the sample store and channel classifiers."""

import pytest

from colorsensor.core import RatioClassifier, SampleStore, ThresholdClassifier, build_classifier
from colorsensor.exceptions import OutOfRangeChannelError
from colorsensor.models import BaseColor, ClassifierConfig, ClassifierStrategy, Sample


def fresh(r, g, b, c=150, at=10.0):
    return Sample(channel=0, r=r, g=g, b=b, c=c, received_at=at)


@pytest.mark.unit
class TestSampleStore:
    """Test latest-sample bookkeeping."""

    def test_update_stamps_with_tick_time(self):
        """Test receipt time comes from the consumer, not the sample."""
        store = SampleStore(4)
        stored = store.update(Sample(channel=1, r=1, g=2, b=3, c=4, received_at=999.0), now=5.0)

        assert stored.received_at == 5.0
        assert store.latest(1) == stored

    def test_last_write_wins(self):
        """Test same-channel updates overwrite rather than merge."""
        store = SampleStore(2)
        store.update(Sample(channel=0, r=10, g=10, b=10, c=10), now=1.0)
        store.update(Sample(channel=0, r=200, g=0, b=0, c=50), now=1.0)

        latest = store.latest(0)
        assert (latest.r, latest.g, latest.b, latest.c) == (200, 0, 0, 50)

    def test_out_of_range_channel_rejected(self):
        """Test channels at or above the active count are not stored."""
        store = SampleStore(2)
        with pytest.raises(OutOfRangeChannelError):
            store.update(Sample(channel=2, r=1, g=1, b=1, c=1), now=1.0)
        with pytest.raises(OutOfRangeChannelError):
            store.update(Sample(channel=-1, r=1, g=1, b=1, c=1), now=1.0)

        assert store.latest(0) is None
        assert store.latest(1) is None
        assert store.latest(2) is None

    def test_invalid_channel_count(self):
        with pytest.raises(ValueError):
            SampleStore(0)


@pytest.mark.unit
class TestThresholdClassifier:
    """Test absolute-threshold classification."""

    @pytest.fixture
    def classifier(self, classifier_config):
        return ThresholdClassifier(classifier_config)

    def test_never_received(self, classifier):
        """Test a channel with no sample is NONE."""
        assert classifier.classify(None, now=10.0) is BaseColor.NONE
        assert classifier.classify(None, now=1e6) is BaseColor.NONE

    def test_red(self, classifier):
        assert classifier.classify(fresh(200, 10, 10), now=10.0) is BaseColor.RED

    def test_blue(self, classifier):
        assert classifier.classify(fresh(10, 10, 200), now=10.0) is BaseColor.BLUE

    def test_yellow(self, classifier):
        """Test the 4-field example line classifies yellow."""
        assert classifier.classify(fresh(222, 250, 45, c=79), now=10.0) is BaseColor.YELLOW

    def test_yellow_takes_precedence_over_red_and_blue(self, classifier):
        """Test yellow wins even when blue and red thresholds also match."""
        assert classifier.classify(fresh(255, 255, 255), now=10.0) is BaseColor.YELLOW

    def test_blue_takes_precedence_over_red(self, classifier):
        assert classifier.classify(fresh(200, 100, 150), now=10.0) is BaseColor.BLUE

    def test_no_rule_matches(self, classifier):
        assert classifier.classify(fresh(50, 50, 50), now=10.0) is BaseColor.NONE

    def test_too_dark(self, classifier):
        """Test readings below min_clear are NONE even with strong components."""
        assert classifier.classify(fresh(200, 10, 10, c=9), now=10.0) is BaseColor.NONE
        assert classifier.classify(fresh(200, 10, 10, c=10), now=10.0) is BaseColor.RED

    def test_stale_sample(self, classifier):
        """Test a sample older than the timeout is NONE."""
        sample = fresh(200, 10, 10, at=10.0)
        assert classifier.classify(sample, now=10.5) is BaseColor.RED
        assert classifier.classify(sample, now=10.701) is BaseColor.NONE

    def test_zero_timeout_disables_staleness(self):
        classifier = ThresholdClassifier(ClassifierConfig(no_data_timeout_ms=0))
        assert classifier.classify(fresh(200, 10, 10, at=0.0), now=3600.0) is BaseColor.RED

    def test_custom_thresholds(self):
        classifier = ThresholdClassifier(ClassifierConfig(red_min=250))
        assert classifier.classify(fresh(200, 10, 10), now=10.0) is BaseColor.NONE


@pytest.mark.unit
class TestRatioClassifier:
    """Test normalized-dominance classification."""

    @pytest.fixture
    def classifier(self):
        return RatioClassifier(ClassifierConfig(strategy=ClassifierStrategy.RATIO))

    def test_red(self, classifier):
        assert classifier.classify(fresh(120, 30, 10), now=10.0) is BaseColor.RED

    def test_blue(self, classifier):
        assert classifier.classify(fresh(10, 20, 140), now=10.0) is BaseColor.BLUE

    def test_yellow(self, classifier):
        assert classifier.classify(fresh(120, 110, 20), now=10.0) is BaseColor.YELLOW

    def test_brightness_independent(self, classifier):
        """Test the same proportions classify the same at different brightness."""
        assert classifier.classify(fresh(12, 3, 1), now=10.0) is BaseColor.RED

    def test_grey_is_none(self, classifier):
        assert classifier.classify(fresh(100, 100, 100), now=10.0) is BaseColor.NONE

    def test_black_does_not_divide_by_zero(self, classifier):
        assert classifier.classify(fresh(0, 0, 0), now=10.0) is BaseColor.NONE

    def test_shared_gates_apply(self, classifier):
        assert classifier.classify(fresh(120, 30, 10, c=0), now=10.0) is BaseColor.NONE
        assert classifier.classify(fresh(120, 30, 10, at=0.0), now=10.0) is BaseColor.NONE


@pytest.mark.unit
def test_build_classifier_selects_strategy():
    assert isinstance(build_classifier(ClassifierConfig()), ThresholdClassifier)
    ratio = build_classifier(ClassifierConfig(strategy=ClassifierStrategy.RATIO))
    assert isinstance(ratio, RatioClassifier)
