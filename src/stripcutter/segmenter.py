"""Cut an image into independent horizontal segments.

Boundaries are the image top, each cut, and the image bottom. A symmetric
gap can be discarded around every cut; the last segment always runs to the
bottom of the image.
"""

from __future__ import annotations

import logging
import math
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import SliceConfig
from .cuts import normalize_cuts
from .image_utils import EncodeError, encode_image, ensure_rgba

log = logging.getLogger("Slices")


@dataclass
class Segment:
    """One output slice covering rows ``[start, end)`` of the source image."""
    index: int
    start: int
    end: int
    pixels: NDArray
    data: bytes = b""
    selected: bool = True
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:7])

    @property
    def height(self) -> int:
        return self.end - self.start


def plan_slices(height: int, cuts: Iterable[float], gap: float = 0) -> List[Tuple[int, int]]:
    """Compute the row ranges emitted for ``cuts``.

    Cuts are clamped to ``[0, height]``, de-duplicated and sorted. Each cut
    ``c`` ends the current segment at ``floor(c - gap/2)`` and starts the
    next one at ``floor(c + gap/2)``. Ranges that end up empty are dropped;
    the cursor still moves past them.

    Returns:
        List of (start, end) pairs, ``end > start``
    """
    height = int(height)
    half_gap = max(0.0, float(gap)) / 2.0
    ranges: List[Tuple[int, int]] = []

    current_y = 0
    for c in normalize_cuts(cuts, height):
        end_y = min(int(math.floor(c - half_gap)), height)
        if end_y - current_y > 0:
            ranges.append((current_y, end_y))
        current_y = int(math.floor(c + half_gap))

    if height - current_y > 0:
        ranges.append((current_y, height))
    return ranges


class Segmenter:
    """Slices a pixel buffer and encodes each slice.

    Encoding runs on a thread pool; a slice that fails to encode is logged
    and left out of the result.
    """

    def __init__(self, config: Optional[SliceConfig] = None):
        self.config = config or SliceConfig()

    def _encode(self, segment: Segment) -> Optional[Segment]:
        try:
            segment.data = encode_image(segment.pixels, self.config.image_format, self.config.quality)
        except EncodeError as e:
            log.warning(f"[Slices] segment {segment.index} rows {segment.start}-{segment.end} dropped: {e}")
            return None
        return segment

    def slice(
        self,
        image: NDArray,
        cuts: Iterable[float],
        gap: Optional[float] = None,
        encode: bool = True,
    ) -> List[Segment]:
        """Cut ``image`` at ``cuts``.

        Args:
            image: Pixel buffer (H, W, 4)
            cuts: Cut rows, any order, duplicates allowed
            gap: Band to discard around each cut (``config.gap`` if None)
            encode: Fill ``Segment.data`` with encoded bytes

        Returns:
            Segments top to bottom
        """
        rgba = ensure_rgba(image)
        gap = self.config.gap if gap is None else gap
        ranges = plan_slices(rgba.shape[0], cuts, gap)

        segments = [
            Segment(index=i, start=start, end=end, pixels=np.array(rgba[start:end], copy=True))
            for i, (start, end) in enumerate(ranges)
        ]

        if encode and segments:
            workers = max(1, min(int(self.config.max_workers), len(segments)))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="segment_encode") as pool:
                encoded = list(pool.map(self._encode, segments))
            segments = [s for s in encoded if s is not None]

        log.info(f"[Slices] {len(segments)} segment(s) from {len(ranges)} range(s), gap={gap}")
        return segments


def slice_image(
    image: NDArray,
    cuts: Iterable[float],
    gap: float = 0,
    config: Optional[SliceConfig] = None,
) -> List[Segment]:
    """Convenience wrapper around :class:`Segmenter`."""
    return Segmenter(config).slice(image, cuts, gap)
