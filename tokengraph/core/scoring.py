# tokengraph/core/scoring.py
"""
Penalty terms for a candidate label footprint. Lower is better.
Weights from config; combined in anchor_penalty.
"""

from __future__ import annotations

from typing import Iterable

from shapely.geometry.base import BaseGeometry

from tokengraph.core.config import (
    DOT_OVERLAP_WEIGHT,
    OUT_OF_BOUNDS_PENALTY,
    OVERLAP_WEIGHT,
    SPILL_WEIGHT,
)
from tokengraph.core.geometry import is_inside_chart, overlap_area, spill_area


def bounds_penalty(footprint: BaseGeometry) -> float:
    """Hard penalty when the footprint leaves the chart, plus a spill-area term."""
    if is_inside_chart(footprint):
        return 0.0
    return OUT_OF_BOUNDS_PENALTY + SPILL_WEIGHT * spill_area(footprint)


def label_overlap_penalty(footprint: BaseGeometry, placed: Iterable[BaseGeometry]) -> float:
    """Proportional to the area shared with each previously placed footprint."""
    return OVERLAP_WEIGHT * sum(overlap_area(footprint, other) for other in placed)


def dot_overlap_penalty(footprint: BaseGeometry, dots: Iterable[BaseGeometry]) -> float:
    """Proportional to the area covering other tokens' dots and obstacles."""
    return DOT_OVERLAP_WEIGHT * sum(overlap_area(footprint, d) for d in dots)


def anchor_penalty(
    footprint: BaseGeometry,
    placed: Iterable[BaseGeometry],
    dots: Iterable[BaseGeometry],
) -> float:
    """
    Combined penalty. The default-anchor bias is not a numeric term: it is
    the tie-break order applied by the planner on exactly equal penalties.
    """
    return (
        bounds_penalty(footprint)
        + label_overlap_penalty(footprint, placed)
        + dot_overlap_penalty(footprint, dots)
    )
