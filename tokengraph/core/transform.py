# tokengraph/core/transform.py
"""
Pixel <-> normalized <-> percentage coordinate mapping for the chart.
The rect passed in must already reflect pan/zoom (it is the rendered bounds),
so nothing here knows about zoom levels.
"""

from __future__ import annotations

import math

from tokengraph.core.config import (
    DEGENERATE_AXIS_VALUE,
    MAX_INSET_FRACTION,
    NEAR_GRAPH_PAD_FRACTION,
)
from tokengraph.core.types import PixelRect, Position


def _normalize_axis(pixel: float, origin: float, extent: float, inset_px: float) -> float:
    """Relative position along one axis, clamped to [inset, 1 - inset]."""
    if extent <= 0 or not math.isfinite(extent) or not math.isfinite(pixel):
        return DEGENERATE_AXIS_VALUE
    rel = (pixel - origin) / extent
    inset = min(MAX_INSET_FRACTION, max(0.0, inset_px / extent))
    return max(inset, min(1.0 - inset, rel))


def pixel_to_normalized(
    pixel_x: float,
    pixel_y: float,
    rect: PixelRect,
    inset_px: float = 0.0,
) -> Position:
    """
    Convert a pointer position to normalized chart coordinates.
    Y is inverted so that 0 = bottom, 1 = top. inset_px (usually the on-screen
    dot radius) keeps the dot's edge rather than its center inside the chart.
    A zero-size axis maps to the midpoint.
    """
    x = _normalize_axis(pixel_x, rect.left, rect.width, inset_px)
    # Clamp-then-invert equals invert-then-clamp: the inset window is symmetric.
    rel_y = _normalize_axis(pixel_y, rect.top, rect.height, inset_px)
    return Position(x=x, y=1.0 - rel_y)


def normalized_to_percent(pos: Position) -> dict[str, str]:
    """CSS-style percentage offsets; top is inverted back (0% = top of container)."""
    return {
        "left": f"{pos.x * 100}%",
        "top": f"{(1 - pos.y) * 100}%",
    }


def _parse_percent(value: str) -> float:
    return float(value.strip().rstrip("%")) / 100.0


def percent_to_pixel(percent: dict[str, str], rect: PixelRect) -> tuple[float, float]:
    """Inverse of the percentage layout: return (pixel_x, pixel_y) inside rect."""
    fx = _parse_percent(percent["left"])
    fy = _parse_percent(percent["top"])
    return (rect.left + fx * rect.width, rect.top + fy * rect.height)


def normalized_to_pixel(pos: Position, rect: PixelRect) -> tuple[float, float]:
    """Pixel position of a normalized point inside rect."""
    return percent_to_pixel(normalized_to_percent(pos), rect)


def is_within_graph(pixel_x: float, pixel_y: float, rect: PixelRect) -> bool:
    """Inclusive bounds test against the rect's four edges."""
    return (
        rect.left <= pixel_x <= rect.right
        and rect.top <= pixel_y <= rect.bottom
    )


def is_near_graph(
    pixel_x: float,
    pixel_y: float,
    rect: PixelRect,
    pad_fraction: float = NEAR_GRAPH_PAD_FRACTION,
) -> bool:
    """
    True if a drop lands on the chart or within pad_fraction of its smaller
    side outside it. Such drops are placed (and clamped); farther drops remove
    the token.
    """
    pad = max(0.0, min(rect.width, rect.height)) * pad_fraction
    return (
        rect.left - pad <= pixel_x <= rect.right + pad
        and rect.top - pad <= pixel_y <= rect.bottom + pad
    )
