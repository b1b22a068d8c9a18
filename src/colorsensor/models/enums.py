"""Enumerations for color classification."""

from enum import Enum, IntEnum


class BaseColor(str, Enum):
    """Per-channel classification result."""

    NONE = "none"
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"


class DecidedColor(IntEnum):
    """Fused color index handed to the consumer.

    Secondary colors only arise from exactly two distinct base colors.
    """

    UNDECIDED = -1
    RED = 0
    BLUE = 1
    YELLOW = 2
    PURPLE = 3  # red + blue
    ORANGE = 4  # red + yellow
    GREEN = 5   # blue + yellow

    @property
    def display_name(self) -> str:
        """Lowercase name used by display layers ("none" when undecided)."""
        if self is DecidedColor.UNDECIDED:
            return "none"
        return self.name.lower()

    @classmethod
    def from_base(cls, color: BaseColor) -> "DecidedColor":
        """Map a primary base color to its decided index."""
        if color is BaseColor.NONE:
            return cls.UNDECIDED
        return cls[color.name]


class ClassifierStrategy(str, Enum):
    """How raw RGBC values are mapped to a base color."""

    THRESHOLD = "threshold"  # Absolute per-component thresholds
    RATIO = "ratio"          # Components as fractions of r+g+b
