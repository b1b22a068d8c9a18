"""Generic utility modules for colorsensor."""

from .persistence import PydanticPersistence

__all__ = ["PydanticPersistence"]
