# tokengraph/core/geometry.py
"""
Geometry helpers in normalized chart space: label footprints per anchor,
dot discs, spill outside the chart and overlap areas.
"""

from __future__ import annotations

from shapely.geometry import Point, Polygon, box
from shapely.geometry.base import BaseGeometry

from tokengraph.core.config import DOT_DISC_RESOLUTION
from tokengraph.core.types import AnchorDirection, Position

CHART_BOUNDS: Polygon = box(0.0, 0.0, 1.0, 1.0)
"""The unit chart. Footprints should stay inside it."""

# Unit direction per anchor: (dx, dy) with y up.
ANCHOR_VECTORS: dict[str, tuple[int, int]] = {
    "n": (0, 1),
    "s": (0, -1),
    "e": (1, 0),
    "w": (-1, 0),
    "ne": (1, 1),
    "nw": (-1, 1),
    "se": (1, -1),
    "sw": (-1, -1),
}


def _span(center: float, direction: int, reach: float, length: float) -> tuple[float, float]:
    """Interval along one axis: past the dot in `direction`, or centered when 0."""
    if direction > 0:
        return (center + reach, center + reach + length)
    if direction < 0:
        return (center - reach - length, center - reach)
    return (center - length / 2.0, center + length / 2.0)


def label_footprint(
    pos: Position,
    anchor: AnchorDirection,
    width: float,
    height: float,
    reach: float,
) -> Polygon:
    """
    Axis-aligned label rectangle for a dot at pos. The label is pushed `reach`
    away from the dot center along each non-zero axis of the anchor and
    centered on the other axis.
    """
    dx, dy = ANCHOR_VECTORS[anchor]
    x1, x2 = _span(pos.x, dx, reach, max(0.0, width))
    y1, y2 = _span(pos.y, dy, reach, max(0.0, height))
    return box(x1, y1, x2, y2)


def dot_disc(pos: Position, radius: float) -> BaseGeometry:
    """Disc approximating a token dot; empty for a non-positive radius."""
    if radius <= 0:
        return Polygon()
    return Point(pos.x, pos.y).buffer(radius, quad_segs=DOT_DISC_RESOLUTION)


def is_inside_chart(footprint: BaseGeometry) -> bool:
    """True if the footprint lies within [0,1]x[0,1] (edges included)."""
    if footprint is None or footprint.is_empty:
        return True
    minx, miny, maxx, maxy = footprint.bounds
    return minx >= 0.0 and miny >= 0.0 and maxx <= 1.0 and maxy <= 1.0


def spill_area(footprint: BaseGeometry) -> float:
    """Area of the footprint outside the unit chart."""
    if footprint is None or footprint.is_empty:
        return 0.0
    return float(footprint.area - footprint.intersection(CHART_BOUNDS).area)


def overlap_area(a: BaseGeometry, b: BaseGeometry) -> float:
    """Intersection area of two geometries (0 when either is empty)."""
    if a is None or b is None or a.is_empty or b.is_empty:
        return 0.0
    if not a.intersects(b):
        return 0.0
    return float(a.intersection(b).area)
