"""
stripcutter - split tall comic strips at panel seams
====================================================

Detects horizontal seams (panel borders, gutters) in long scrolling pages
such as webtoons and cuts the page into independent segments.

Main modules:
- detector: row scoring and adaptive seam selection
- segmenter: slicing and per-segment encoding
- pipeline: batch processing of many images
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .config import DetectionParams, SliceConfig, PRESETS, load_config
from .cuts import normalize_cuts, toggle_cut
from .detector import SeamDetector, SeamAnalysis, detect_seams
from .segmenter import Segment, Segmenter, plan_slices, slice_image
from .pipeline import ProcessedImage, process_image, process_file, process_batch

__all__ = [
    "DetectionParams",
    "SliceConfig",
    "PRESETS",
    "load_config",
    "normalize_cuts",
    "toggle_cut",
    "SeamDetector",
    "SeamAnalysis",
    "detect_seams",
    "Segment",
    "Segmenter",
    "plan_slices",
    "slice_image",
    "ProcessedImage",
    "process_image",
    "process_file",
    "process_batch",
    "__version__",
]
