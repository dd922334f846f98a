"""Geometry helpers used across the game."""

from __future__ import annotations

from typing import Sequence

import numpy as np

Box = Sequence[float]  # (x, y, w, h)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def rects_overlap(a: Box, b: Box) -> bool:
    """True if two axis-aligned boxes overlap with positive area.

    Touching edges do not count; all four comparisons are strict.
    """
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def rects_overlap_with_margin(a: Box, b: Box, margin: float) -> bool:
    """True if box a comes within `margin` of box b on both axes.

    Scalar reference for any_overlap_with_margin, which it also serves for
    the single-box case.
    """
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return (
        ax + aw + margin > bx
        and ax < bx + bw + margin
        and ay + ah + margin > by
        and ay < by + bh + margin
    )


def any_overlap_with_margin(box: Box, others: Sequence[Box], margin: float) -> bool:
    """Vectorised margin test of one box against many."""
    if len(others) == 0:
        return False
    if len(others) == 1:
        return rects_overlap_with_margin(box, others[0], margin)
    arr = np.asarray(others, dtype=np.float64).reshape(-1, 4)
    x, y, w, h = box
    ox, oy, ow, oh = arr[:, 0], arr[:, 1], arr[:, 2], arr[:, 3]
    hits = (x + w + margin > ox) & (x < ox + ow + margin) & (y + h + margin > oy) & (y < oy + oh + margin)
    return bool(hits.any())
