"""Data models for the color sensor pipeline."""

from .color import DECIDED_COLOR_RGB, Color
from .config import DEFAULT_CONFIG_PATH, AppConfig, ClassifierConfig, SerialConfig
from .enums import BaseColor, ClassifierStrategy, DecidedColor
from .sample import Sample
from .snapshot import SNAPSHOT_SLOTS, ChannelDisplay, DisplaySnapshot

__all__ = [
    # Config
    "AppConfig",
    "ClassifierConfig",
    "DEFAULT_CONFIG_PATH",
    "SerialConfig",
    # Models
    "ChannelDisplay",
    "Color",
    "DECIDED_COLOR_RGB",
    "DisplaySnapshot",
    "SNAPSHOT_SLOTS",
    "Sample",
    # Enums
    "BaseColor",
    "ClassifierStrategy",
    "DecidedColor",
]
