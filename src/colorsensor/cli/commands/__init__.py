"""CLI commands for colorsensor."""

from .config import config
from .replay import replay

__all__ = ["config", "replay"]
