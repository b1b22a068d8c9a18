"""Unit tests for color fusion, stabilization and the apply gate."""

from itertools import permutations
from unittest.mock import Mock

import pytest

from colorsensor.core import Applier, Stabilizer, resolve_mixed_color
from colorsensor.models import BaseColor, DecidedColor

NONE, RED, BLUE, YELLOW = BaseColor.NONE, BaseColor.RED, BaseColor.BLUE, BaseColor.YELLOW


@pytest.mark.unit
class TestResolveMixedColor:
    """Test fusion of per-channel base colors."""

    @pytest.mark.parametrize(
        "colors,expected",
        [
            ([NONE, NONE, NONE, NONE], DecidedColor.UNDECIDED),
            ([], DecidedColor.UNDECIDED),
            ([RED, NONE, NONE, NONE], DecidedColor.RED),
            ([NONE, BLUE], DecidedColor.BLUE),
            ([YELLOW], DecidedColor.YELLOW),
            ([RED, BLUE, NONE, NONE], DecidedColor.PURPLE),
            ([RED, YELLOW], DecidedColor.ORANGE),
            ([BLUE, YELLOW], DecidedColor.GREEN),
            ([RED, BLUE, YELLOW, NONE], DecidedColor.UNDECIDED),
        ],
    )
    def test_rules(self, colors, expected):
        assert resolve_mixed_color(colors) == expected

    def test_duplicates_count_once(self):
        """Test multiple channels seeing the same color act as one."""
        assert resolve_mixed_color([RED, RED, RED, RED]) == DecidedColor.RED
        assert resolve_mixed_color([RED, BLUE, RED, BLUE]) == DecidedColor.PURPLE

    def test_channel_order_does_not_matter(self):
        """Test every permutation of the inputs fuses the same way."""
        for colors in ([RED, BLUE, NONE, NONE], [YELLOW, BLUE, BLUE, NONE], [RED, BLUE, YELLOW, NONE]):
            results = {resolve_mixed_color(p) for p in permutations(colors)}
            assert len(results) == 1

    def test_accepts_generator(self):
        assert resolve_mixed_color(c for c in [RED, YELLOW]) == DecidedColor.ORANGE


@pytest.mark.unit
class TestStabilizer:
    """Test consecutive-frame confirmation."""

    def test_confirms_on_nth_frame(self):
        stabilizer = Stabilizer(3)
        assert stabilizer.update(DecidedColor.RED) is False
        assert stabilizer.update(DecidedColor.RED) is False
        assert stabilizer.update(DecidedColor.RED) is True
        assert stabilizer.update(DecidedColor.RED) is True
        assert stabilizer.count == 4

    def test_change_restarts_count(self):
        """Test a different decision restarts the count at one."""
        stabilizer = Stabilizer(3)
        stabilizer.update(DecidedColor.RED)
        stabilizer.update(DecidedColor.RED)
        assert stabilizer.update(DecidedColor.BLUE) is False
        assert stabilizer.candidate == DecidedColor.BLUE
        assert stabilizer.count == 1

    def test_alternating_never_confirms(self):
        stabilizer = Stabilizer(2)
        for color in [DecidedColor.RED, DecidedColor.BLUE] * 5:
            assert stabilizer.update(color) is False

    def test_undecided_is_tracked(self):
        stabilizer = Stabilizer(2)
        stabilizer.update(DecidedColor.UNDECIDED)
        assert stabilizer.update(DecidedColor.UNDECIDED) is True

    def test_single_frame(self):
        assert Stabilizer(1).update(DecidedColor.GREEN) is True

    def test_invalid_frames(self):
        with pytest.raises(ValueError):
            Stabilizer(0)


@pytest.mark.unit
class TestApplier:
    """Test the cooldown and change gate."""

    @pytest.fixture
    def callback(self):
        return Mock()

    @pytest.fixture
    def applier(self, callback):
        return Applier(callback, cooldown_ms=120)

    def test_unconfirmed_not_applied(self, applier, callback):
        assert applier.offer(DecidedColor.RED, confirmed=False, now=1.0) is False
        callback.assert_not_called()

    def test_first_confirmed_color_applied(self, applier, callback):
        assert applier.offer(DecidedColor.PURPLE, confirmed=True, now=1.0) is True
        callback.assert_called_once_with(3)
        assert applier.last_applied == DecidedColor.PURPLE
        assert applier.state.last_applied_at == 1.0

    def test_undecided_never_applied(self, applier, callback):
        """Test an undecided confirmation keeps the previous color in effect."""
        applier.offer(DecidedColor.RED, confirmed=True, now=1.0)
        assert applier.offer(DecidedColor.UNDECIDED, confirmed=True, now=5.0) is False
        assert applier.last_applied == DecidedColor.RED
        callback.assert_called_once_with(0)

    def test_same_color_not_reapplied(self, applier, callback):
        applier.offer(DecidedColor.BLUE, confirmed=True, now=1.0)
        assert applier.offer(DecidedColor.BLUE, confirmed=True, now=10.0) is False
        assert callback.call_count == 1

    def test_cooldown(self, applier, callback):
        """Test changes inside the cooldown window are suppressed."""
        applier.offer(DecidedColor.RED, confirmed=True, now=1.0)
        assert applier.offer(DecidedColor.BLUE, confirmed=True, now=1.1) is False
        assert applier.offer(DecidedColor.BLUE, confirmed=True, now=1.125) is True
        assert [c.args[0] for c in callback.call_args_list] == [0, 1]

    def test_return_to_previous_color(self, applier, callback):
        applier.offer(DecidedColor.RED, confirmed=True, now=1.0)
        applier.offer(DecidedColor.BLUE, confirmed=True, now=2.0)
        assert applier.offer(DecidedColor.RED, confirmed=True, now=3.0) is True
        assert callback.call_count == 3

    def test_callback_error_leaves_state(self, callback):
        """Test a failing callback is retried on the next offer."""
        callback.side_effect = [RuntimeError("consumer broke"), None]
        applier = Applier(callback, cooldown_ms=120)

        assert applier.offer(DecidedColor.GREEN, confirmed=True, now=1.0) is False
        assert applier.last_applied is None

        assert applier.offer(DecidedColor.GREEN, confirmed=True, now=1.01) is True
        assert applier.last_applied == DecidedColor.GREEN
        assert callback.call_count == 2

    def test_zero_cooldown(self, callback):
        applier = Applier(callback, cooldown_ms=0)
        applier.offer(DecidedColor.RED, confirmed=True, now=1.0)
        assert applier.offer(DecidedColor.BLUE, confirmed=True, now=1.0) is True
