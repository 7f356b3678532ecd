"""Batch processing: detect + slice for many images.

Each image is one unit of work. Images share no state, so a batch runs on a
thread pool; a failing image is marked ``error`` and the others continue.
"""

from __future__ import annotations

import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

import cv2
from numpy.typing import NDArray

from .config import DetectionParams, SliceConfig
from .cuts import normalize_cuts
from .detector import SeamDetector
from .image_utils import ImageLoadError, load_image
from .segmenter import Segment, Segmenter

log = logging.getLogger("Pipeline")

STATUS_IDLE = "idle"
STATUS_ANALYZING = "analyzing"
STATUS_DONE = "done"
STATUS_ERROR = "error"


@dataclass
class ProcessedImage:
    """State of one input image through the pipeline."""
    name: str
    width: int = 0
    height: int = 0
    split_points: List[int] = field(default_factory=list)
    segments: List[Segment] = field(default_factory=list)
    status: str = STATUS_IDLE
    error_message: Optional[str] = None
    elapsed_ms: float = 0.0
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:7])

    @property
    def selected_segments(self) -> List[Segment]:
        return [s for s in self.segments if s.selected]


def process_image(
    image: NDArray,
    name: str = "image",
    params: Optional[DetectionParams] = None,
    slice_config: Optional[SliceConfig] = None,
    cuts: Optional[Sequence[int]] = None,
    slice_segments: bool = True,
) -> ProcessedImage:
    """Detect cuts (unless ``cuts`` is given) and slice one decoded image."""
    start_time = time.time()
    record = ProcessedImage(name=name, height=int(image.shape[0]), width=int(image.shape[1]))
    record.status = STATUS_ANALYZING

    if cuts is None:
        record.split_points = SeamDetector(params).detect(image)
    else:
        record.split_points = [c for c in normalize_cuts(cuts, record.height) if c < record.height]

    if slice_segments:
        record.segments = Segmenter(slice_config).slice(image, record.split_points)

    record.status = STATUS_DONE
    record.elapsed_ms = (time.time() - start_time) * 1000
    log.info(
        f"[Pipeline] {name}: {len(record.split_points)} cut(s), "
        f"{len(record.segments)} segment(s) in {record.elapsed_ms:.0f}ms"
    )
    return record


def process_file(
    path: Union[str, Path],
    params: Optional[DetectionParams] = None,
    slice_config: Optional[SliceConfig] = None,
    cuts: Optional[Sequence[int]] = None,
    slice_segments: bool = True,
) -> ProcessedImage:
    """Load ``path`` and run :func:`process_image`; errors end up in the record."""
    name = Path(path).name
    try:
        image = load_image(path)
    except ImageLoadError as e:
        log.error(f"[Pipeline] {e}")
        return ProcessedImage(name=name, status=STATUS_ERROR, error_message=str(e))

    try:
        return process_image(image, name, params, slice_config, cuts, slice_segments)
    except (ValueError, MemoryError, cv2.error) as e:
        log.error(f"[Pipeline] {name}: {e}")
        return ProcessedImage(
            name=name,
            width=int(image.shape[1]),
            height=int(image.shape[0]),
            status=STATUS_ERROR,
            error_message=str(e),
        )


def process_batch(
    paths: Sequence[Union[str, Path]],
    params: Optional[DetectionParams] = None,
    slice_config: Optional[SliceConfig] = None,
    max_workers: int = 2,
    slice_segments: bool = True,
) -> List[ProcessedImage]:
    """Process many files concurrently, results in input order."""
    if not paths:
        return []
    workers = max(1, min(int(max_workers), len(paths)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="strip_batch") as pool:
        futures = [
            pool.submit(process_file, p, params, slice_config, None, slice_segments)
            for p in paths
        ]
        return [f.result() for f in futures]
