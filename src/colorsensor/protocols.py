"""Protocols for collaborators of the color pipeline."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ColorConsumer(Protocol):
    """
    Receives decided color changes (attack color, LED, game state...).

    Indices: 0 red, 1 blue, 2 yellow, 3 purple, 4 orange, 5 green.
    """

    def apply_decided_color(self, index: int) -> None:
        """
        Apply a newly confirmed color.

        Note:
            Called from the host's tick context, never from the reader
            thread. Keep it fast: it runs inside the tick.
        """
        ...
