"""Serial device access: link, background line reader and line queue."""

from .line_queue import LineQueue
from .link import DeviceLink
from .reader import FrameReader

__all__ = ["DeviceLink", "FrameReader", "LineQueue"]
