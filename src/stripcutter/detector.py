"""Seam detection for tall strip images.

A seam is a row whose pixels differ sharply from the row above (panel border,
solid gutter). Rows are scored with a Manhattan RGB distance against the
previous row, thresholded relative to the image's own average score, and
accepted top to bottom with a minimum spacing and a short skip-ahead so a
thick border yields one cut.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from .config import DetectionParams
from .image_utils import ensure_rgba, resize_to_width

log = logging.getLogger("Seams")


@dataclass
class SeamAnalysis:
    """Intermediate values from one detection pass.

    ``scores[i]`` compares analysis row ``i + 1`` with row ``i``.
    """
    cuts: List[int]
    scale_factor: float = 1.0
    analysis_width: int = 0
    analysis_height: int = 0
    avg_score: float = 0.0
    threshold: float = 0.0
    scores: NDArray = field(default_factory=lambda: np.zeros(0, dtype=np.float64))

    @classmethod
    def empty(cls, scale_factor: float = 1.0) -> "SeamAnalysis":
        return cls(cuts=[], scale_factor=scale_factor)


def score_rows(rgba: NDArray, column_stride: int = 2) -> NDArray:
    """Mean Manhattan RGB distance between each row and the row above.

    Args:
        rgba: Pixel buffer (H, W, 4); alpha is ignored
        column_stride: Sample every Nth column

    Returns:
        Float array of length H - 1 (empty when H < 2 or W == 0)
    """
    h, w = rgba.shape[:2]
    if h < 2 or w == 0:
        return np.zeros(0, dtype=np.float64)

    cols = rgba[:, ::max(1, int(column_stride)), :3].astype(np.int16)
    diff = np.abs(cols[1:] - cols[:-1]).sum(axis=2)
    return diff.mean(axis=1, dtype=np.float64)


def sensitivity_threshold(avg_score: float, sensitivity: int) -> float:
    """Threshold a row score must exceed to count as a seam.

    sensitivity 100 -> 1.05 x average, sensitivity 1 -> 6.0 x average.
    """
    factor = (101 - sensitivity) / 20.0
    return avg_score * (1.0 + factor)


def select_cuts(
    scores: NDArray,
    threshold: float,
    min_dist: float,
    skip: int,
    scale_factor: float = 1.0,
) -> List[int]:
    """Scan row scores top to bottom and accept spaced-out seams.

    A row is accepted when its score exceeds ``threshold`` and it lies more
    than ``min_dist`` rows after the last accepted row (initially row 0).
    After an accepted row the scan jumps ``skip`` rows ahead.

    Args:
        scores: Output of :func:`score_rows` (analysis space)
        threshold: Score threshold
        min_dist: Minimum spacing in analysis rows
        skip: Rows to skip after an accepted cut
        scale_factor: Original / analysis size ratio

    Returns:
        Cut rows in original-image coordinates, ascending
    """
    cuts: List[int] = []
    last_cut_y = 0
    n_rows = len(scores) + 1
    y = 1
    while y < n_rows:
        if scores[y - 1] > threshold and y - last_cut_y > min_dist:
            cuts.append(int(math.floor(y * scale_factor)))
            last_cut_y = y
            y += skip
        y += 1
    return cuts


class SeamDetector:
    """Finds horizontal cut rows in a tall image.

    Stateless apart from its parameters: one instance can be shared between
    threads.
    """

    def __init__(self, params: Optional[DetectionParams] = None):
        self.params = params or DetectionParams()

    def _analysis_buffer(self, rgba: NDArray):
        """Return (buffer, scale_factor) for the scoring pass."""
        h, w = rgba.shape[:2]
        target_w = int(self.params.analysis_width)
        if not self.params.fast_mode or target_w <= 0 or w <= target_w:
            return rgba, 1.0

        scale_factor = w / float(target_w)
        target_h = int(math.floor(h / scale_factor))
        if target_h < 1:
            return None, scale_factor
        return resize_to_width(rgba, target_w, target_h), scale_factor

    def analyze(self, image: NDArray) -> SeamAnalysis:
        """Run a full detection pass and keep the intermediate values."""
        p = self.params
        rgba = ensure_rgba(image)
        h, w = rgba.shape[:2]

        sensitivity = p.clamped_sensitivity()
        if sensitivity != p.sensitivity:
            log.warning(f"[Seams] sensitivity {p.sensitivity} out of range, clamped to {sensitivity}")

        if h < 2 or w == 0:
            log.debug(f"[Seams] degenerate image {w}x{h} -> no cuts")
            return SeamAnalysis.empty()

        buf, scale_factor = self._analysis_buffer(rgba)
        if buf is None or buf.shape[0] < 2:
            log.debug(f"[Seams] fewer than 2 analysis rows (scale={scale_factor:.3f}) -> no cuts")
            return SeamAnalysis.empty(scale_factor)

        scores = score_rows(buf, p.column_stride)
        avg_score = float(scores.mean())
        threshold = sensitivity_threshold(avg_score, sensitivity)
        min_dist = p.min_segment_height / scale_factor
        skip = int(math.floor(p.skip_rows / scale_factor))

        if p.debug:
            log.debug(
                f"[Seams] analysis {buf.shape[1]}x{buf.shape[0]} scale={scale_factor:.3f} "
                f"avg={avg_score:.2f} threshold={threshold:.2f} min_dist={min_dist:.1f} skip={skip}"
            )

        cuts = select_cuts(scores, threshold, min_dist, skip, scale_factor)
        log.info(f"[Seams] {w}x{h}: {len(cuts)} cut(s) at sensitivity {sensitivity}")

        return SeamAnalysis(
            cuts=cuts,
            scale_factor=scale_factor,
            analysis_width=buf.shape[1],
            analysis_height=buf.shape[0],
            avg_score=avg_score,
            threshold=threshold,
            scores=scores,
        )

    def detect(self, image: NDArray) -> List[int]:
        """Return ascending cut rows in original-image coordinates."""
        return self.analyze(image).cuts


def detect_seams(image: NDArray, params: Optional[DetectionParams] = None) -> List[int]:
    """Convenience wrapper around :class:`SeamDetector`."""
    return SeamDetector(params).detect(image)
