"""Sensor line parsing.

Two line schemas are accepted::

    <channel>,<r>,<g>,<b>,<c>    five fields
    <r>,<g>,<b>,<c>              four fields, channel 0 (single-sensor boards)

Fields are plain decimal integers, optionally signed, surrounded by
optional whitespace. Values are not range-checked here.
"""

import re
from typing import Optional

from colorsensor.exceptions import MalformedLineError
from colorsensor.models import Sample

_INT_FIELD = re.compile(r"[+-]?[0-9]+")

# Fields must fit a signed 32-bit integer, matching the firmware's int type
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _parse_field(line: str, text: str) -> int:
    text = text.strip()
    if not _INT_FIELD.fullmatch(text):
        raise MalformedLineError(line, f"field {text!r} is not an integer")
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise MalformedLineError(line, f"field {text!r} is out of range")
    return value


def parse_line(line: str) -> Sample:
    """
    Parse one protocol line into a Sample (without a receipt time).

    Args:
        line: A single line with the terminator already removed

    Returns:
        Parsed Sample

    Raises:
        MalformedLineError: Wrong field count or a non-integer field
    """
    parts = line.split(",")

    if len(parts) == 5:
        channel, r, g, b, c = (_parse_field(line, p) for p in parts)
    elif len(parts) == 4:
        channel = 0
        r, g, b, c = (_parse_field(line, p) for p in parts)
    else:
        raise MalformedLineError(line, f"expected 4 or 5 fields, got {len(parts)}")

    return Sample(channel=channel, r=r, g=g, b=b, c=c)


def try_parse_line(line: str) -> Optional[Sample]:
    """Parse a line, returning None instead of raising on malformed input."""
    try:
        return parse_line(line)
    except MalformedLineError:
        return None
