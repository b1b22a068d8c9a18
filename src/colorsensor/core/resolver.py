"""Fusion of per-channel base colors into one decided color."""

from collections.abc import Iterable

from colorsensor.models import BaseColor, DecidedColor

# Two simultaneous primaries mix into a secondary
_MIXES: dict[frozenset[BaseColor], DecidedColor] = {
    frozenset({BaseColor.RED, BaseColor.BLUE}): DecidedColor.PURPLE,
    frozenset({BaseColor.RED, BaseColor.YELLOW}): DecidedColor.ORANGE,
    frozenset({BaseColor.BLUE, BaseColor.YELLOW}): DecidedColor.GREEN,
}


def resolve_mixed_color(base_colors: Iterable[BaseColor]) -> DecidedColor:
    """
    Decide the fused color from all channels' base colors.

    Only the set of distinct colors matters, so the result does not depend
    on which channel saw which color.

    - no color: UNDECIDED
    - one color: that primary
    - two colors: the secondary they mix into
    - all three primaries: UNDECIDED (no rule for it)
    """
    present = frozenset(c for c in base_colors if c is not BaseColor.NONE)

    if len(present) == 1:
        (only,) = present
        return DecidedColor.from_base(only)
    return _MIXES.get(present, DecidedColor.UNDECIDED)
