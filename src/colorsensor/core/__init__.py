"""Core pipeline stages and the pipeline that wires them together."""

from .applier import Applier
from .classifier import ChannelClassifier, RatioClassifier, ThresholdClassifier, build_classifier
from .parser import parse_line, try_parse_line
from .pipeline import ColorPipeline, TickResult
from .resolver import resolve_mixed_color
from .stabilizer import Stabilizer
from .store import SampleStore

__all__ = [
    "Applier",
    "ChannelClassifier",
    "ColorPipeline",
    "RatioClassifier",
    "SampleStore",
    "Stabilizer",
    "ThresholdClassifier",
    "TickResult",
    "build_classifier",
    "parse_line",
    "resolve_mixed_color",
    "try_parse_line",
]
