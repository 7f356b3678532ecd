"""Configuration dataclasses for stripcutter.

Two parameter groups:
- DetectionParams: seam detection (sensitivity, fast mode, spacing)
- SliceConfig: cutting and re-encoding of segments

Both can be loaded from a YAML file with ``detection:`` / ``slicing:`` sections.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

import yaml


SENSITIVITY_MIN = 1
SENSITIVITY_MAX = 100


@dataclass
class DetectionParams:
    """Parameters for the seam detector.

    ``min_segment_height`` is in original-image pixels; it is converted to
    analysis space by the detector.
    """

    sensitivity: int = 50          # 1..100, higher = more cuts
    fast_mode: bool = True         # Analyze a downscaled copy
    min_segment_height: int = 100  # Minimum distance between two cuts (px)

    # Empirically tuned, keep defaults for compatible results
    analysis_width: int = 200      # Analysis width used in fast mode
    column_stride: int = 2         # Sample every Nth column when scoring
    skip_rows: int = 10            # Debounce after an accepted cut (original px)

    debug: bool = False

    def copy(self) -> "DetectionParams":
        """Return a deep copy of this configuration."""
        return copy.deepcopy(self)

    def clamped_sensitivity(self) -> int:
        return max(SENSITIVITY_MIN, min(SENSITIVITY_MAX, int(self.sensitivity)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DetectionParams":
        """Create from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class SliceConfig:
    """Parameters for cutting the image and encoding each segment."""

    gap: float = 0.0            # Band discarded around each cut (px), split evenly
    image_format: str = ".jpg"  # Extension understood by cv2.imencode
    quality: int = 95           # JPEG/WebP quality, ignored for PNG
    max_workers: int = 4        # Encoder threads

    def copy(self) -> "SliceConfig":
        """Return a deep copy of this configuration."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SliceConfig":
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


def load_config(
    path: Union[str, Path],
    base: Optional[Tuple[DetectionParams, SliceConfig]] = None,
) -> Tuple[DetectionParams, SliceConfig]:
    """Load detection and slicing parameters from a YAML file.

    Args:
        path: YAML file with optional ``detection`` and ``slicing`` mappings
        base: Parameters to start from (defaults if None)

    Returns:
        Tuple of (DetectionParams, SliceConfig)
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level")

    detection, slicing = base if base is not None else (DetectionParams(), SliceConfig())
    det_dict = detection.to_dict()
    det_dict.update(data.get("detection") or {})
    slice_dict = slicing.to_dict()
    slice_dict.update(data.get("slicing") or {})
    return DetectionParams.from_dict(det_dict), SliceConfig.from_dict(slice_dict)


# Preset configurations for different strip styles
PRESETS: Dict[str, Tuple[DetectionParams, SliceConfig]] = {
    "Webtoon": (
        DetectionParams(sensitivity=50, fast_mode=True, min_segment_height=100),
        SliceConfig(gap=0, image_format=".jpg", quality=95),
    ),
    "Manga strip": (
        DetectionParams(sensitivity=65, fast_mode=True, min_segment_height=150),
        SliceConfig(gap=4, image_format=".png"),
    ),
    "Noisy scan": (
        DetectionParams(sensitivity=30, fast_mode=False, min_segment_height=200),
        SliceConfig(gap=10, image_format=".jpg", quality=90),
    ),
}
