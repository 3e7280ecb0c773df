"""Glyph render primitives: usage bars and sparklines."""

from __future__ import annotations

import math
from collections.abc import Sequence

from kmet.constants.values import BAR_EMPTY_GLYPH, BAR_FILL_GLYPH, SPARK_GLYPHS


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def clamp01(value: float) -> float:
    """Clamp to ``[0, 1]``; NaN and infinities map to 0."""
    if not math.isfinite(value):
        return 0.0
    return clamp(value, 0.0, 1.0)


def bar(ratio: float, width: int) -> str:
    """Render ``ratio`` as a left-filled bar exactly ``width`` cells wide.

    Any ratio above zero fills at least one cell so a small value never
    looks identical to an idle one.
    """
    if width <= 0:
        return ""
    ratio = clamp01(ratio)
    fill = int(round(ratio * width))
    if ratio > 0 and fill == 0:
        fill = 1
    fill = min(fill, width)
    return BAR_FILL_GLYPH * fill + BAR_EMPTY_GLYPH * (width - fill)


def sparkline(samples: Sequence[float], width: int) -> str:
    """Resample ``samples`` to ``width`` glyphs by nearest-earlier index."""
    if not samples or width <= 0:
        return ""
    count = len(samples)
    top = len(SPARK_GLYPHS) - 1
    step = count / width
    glyphs = []
    for i in range(width):
        idx = min(count - 1, int(math.floor(i * step)))
        level = int(round(clamp01(samples[idx]) * top))
        glyphs.append(SPARK_GLYPHS[level])
    return "".join(glyphs)


__all__ = [
    "bar",
    "clamp",
    "clamp01",
    "sparkline",
]
