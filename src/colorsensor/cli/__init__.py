"""Command-line interface for colorsensor."""

from .main import cli

__all__ = ["cli"]
