"""Plain-text rendering of pipeline output for the terminal."""

from datetime import datetime

from colorsensor.models import DECIDED_COLOR_RGB, DecidedColor, DisplaySnapshot


def timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S.%f")[:-3]


def format_color_change(index: int) -> str:
    """One line announcing an applied color, e.g. 'purple (3) #8C33BF'."""
    color = DecidedColor(index)
    return f"{color.display_name} ({index}) {DECIDED_COLOR_RGB[color].to_hex()}"


def format_snapshot(snapshot: DisplaySnapshot) -> str:
    """Render the four snapshot slots, one line per channel."""
    lines = []
    for ch, slot in enumerate(snapshot.channels):
        if slot.has_data:
            values = (
                f"R:{slot.r:>3} G:{slot.g:>3} B:{slot.b:>3} C:{slot.c:>3} {slot.raw_color.to_hex()}"
            )
        else:
            values = "-- no data --".ljust(31)
        lines.append(
            f"  CH {ch}  {values}  base:{slot.base_color_name:<6}  final:{slot.final_color_name}"
        )
    return "\n".join(lines)
