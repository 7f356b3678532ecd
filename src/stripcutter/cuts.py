"""Helpers for editing and sanitizing cut lists."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

log = logging.getLogger("Slices")

CLICK_TOLERANCE = 10


def normalize_cuts(cuts: Iterable[float], height: int) -> List[int]:
    """Round, clamp to ``[0, height]``, de-duplicate and sort."""
    out = set()
    for c in cuts:
        y = int(round(float(c)))
        if y < 0 or y > height:
            log.debug(f"[Slices] cut {c} outside [0, {height}], clamped")
            y = max(0, min(height, y))
        out.add(y)
    return sorted(out)


def toggle_cut(
    cuts: Iterable[int],
    y: float,
    tolerance: float = CLICK_TOLERANCE,
    height: Optional[int] = None,
) -> List[int]:
    """Remove the cut nearest to ``y`` or add a new one.

    The first existing cut closer than ``tolerance`` rows to ``y`` is
    removed; otherwise ``round(y)`` is inserted.

    Args:
        cuts: Current cut rows
        y: Row picked by the user (may be fractional, e.g. from a zoomed view)
        tolerance: Hit distance in rows
        height: Image height to clamp new cuts to

    Returns:
        New ascending cut list
    """
    points = sorted(int(c) for c in cuts)
    for i, p in enumerate(points):
        if abs(p - y) < tolerance:
            del points[i]
            return points

    new_y = int(round(y))
    if height is not None:
        new_y = max(0, min(int(height), new_y))
    if new_y not in points:
        points.append(new_y)
        points.sort()
    return points
