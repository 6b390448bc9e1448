# tokengraph/core/types.py
"""
Dataclasses for positions, chart rectangles, label candidates and layout results.
All positions are normalized: origin bottom-left, y up, both axes in [0, 1].
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

from shapely.geometry import Polygon


AnchorDirection = Literal["n", "s", "e", "w", "ne", "nw", "se", "sw"]

AnchorAssignment = dict[str, AnchorDirection]


def _clamp_unit(v: float) -> float:
    if not math.isfinite(v):
        return 0.5
    return max(0.0, min(1.0, v))


@dataclass(frozen=True)
class Position:
    """Normalized chart position."""
    x: float
    y: float

    @classmethod
    def clamped(cls, x: float, y: float) -> Position:
        """Build a position with both components clamped to [0, 1]; NaN/inf become 0.5."""
        return cls(_clamp_unit(float(x)), _clamp_unit(float(y)))


@dataclass(frozen=True)
class PixelRect:
    """Rendered chart bounds in pixels (already reflects any pan/zoom)."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class LabelCandidate:
    """
    A visible token whose label needs an anchor. label_height and reach
    (normalized) override the size profile for this label only, e.g. guess
    labels drawn smaller than self-placement labels in the same chart.
    """
    id: str
    position: Position
    label_pixel_width: float
    label_height: float | None = None
    reach: float | None = None


@dataclass(frozen=True)
class Obstacle:
    """Disc (normalized radius) that labels avoid but which has no label of its own."""
    position: Position
    radius: float


@dataclass
class LayoutPlan:
    """
    Full planner output. `anchors` is the AnchorAssignment consumers read;
    the rest is kept for reporting and debug rendering.
    """
    anchors: AnchorAssignment
    footprints: dict[str, Polygon]
    penalties: dict[str, float]
    n_labels: int
    out_of_bounds_count: int = 0
    overlaps_detected: int = 0
    warnings: list[str] = field(default_factory=list)
