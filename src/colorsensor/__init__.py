"""colorsensor: real-time color decisions from a multi-channel serial color sensor."""

__version__ = "0.1.0"

from .core import ColorPipeline, TickResult
from .models import AppConfig, BaseColor, DecidedColor, DisplaySnapshot

__all__ = [
    "AppConfig",
    "BaseColor",
    "ColorPipeline",
    "DecidedColor",
    "DisplaySnapshot",
    "TickResult",
]
