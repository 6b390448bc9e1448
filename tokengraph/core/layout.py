# tokengraph/core/layout.py
"""
Label anchor planning for all visible tokens with collision avoidance.
Orders candidates by id, keeps placed footprints, picks one of eight anchors
per candidate. Greedy and deterministic: identical inputs in any order give
identical anchors, so re-running on every position change does not flicker.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Sequence

from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from tokengraph.core.config import ANCHOR_PRIORITY, OVERLAP_TOLERANCE_AREA
from tokengraph.core.geometry import dot_disc, is_inside_chart, label_footprint, overlap_area
from tokengraph.core.scoring import anchor_penalty
from tokengraph.core.sizes import SizeProfile
from tokengraph.core.types import (
    AnchorAssignment,
    AnchorDirection,
    LabelCandidate,
    LayoutPlan,
    Obstacle,
    Position,
)

logger = logging.getLogger(__name__)


def _order_candidates(candidates: Sequence[LabelCandidate]) -> list[LabelCandidate]:
    """Process in ascending id order, independent of caller iteration order."""
    return sorted(candidates, key=lambda c: c.id)


def _finite_nonneg(v: float | None) -> float | None:
    if v is None:
        return None
    return v if math.isfinite(v) and v > 0 else 0.0


def footprint_size(candidate: LabelCandidate, profile: SizeProfile) -> tuple[float, float]:
    """
    (width, height) in normalized units. Non-positive or non-finite widths
    leave padding only; text wider than the chart is capped at the chart side.
    A per-candidate label_height replaces the profile height.
    """
    text_w = min(1.0, profile.px_to_normalized(_finite_nonneg(candidate.label_pixel_width)))
    height = _finite_nonneg(candidate.label_height)
    return (text_w + profile.label_pad_width, profile.label_height if height is None else height)


def label_reach(candidate: LabelCandidate, profile: SizeProfile) -> float:
    """Distance from dot center to the near edge of its label."""
    reach = _finite_nonneg(candidate.reach)
    if reach is None:
        return profile.dot_radius + profile.label_pad_width
    return reach


def candidate_footprint(
    candidate: LabelCandidate,
    anchor: AnchorDirection,
    profile: SizeProfile,
) -> Polygon:
    """Footprint the candidate's label would occupy at the given anchor."""
    w, h = footprint_size(candidate, profile)
    return label_footprint(candidate.position, anchor, w, h, label_reach(candidate, profile))


def _choose_anchor(
    candidate: LabelCandidate,
    profile: SizeProfile,
    placed: list[BaseGeometry],
    dots: list[BaseGeometry],
) -> tuple[AnchorDirection, Polygon, float]:
    """Lowest penalty wins; exact ties keep the earliest anchor in priority order."""
    scored = []
    for anchor in ANCHOR_PRIORITY:
        fp = candidate_footprint(candidate, anchor, profile)  # type: ignore[arg-type]
        scored.append((anchor, fp, anchor_penalty(fp, placed, dots)))
    # min() returns the first minimum, i.e. the earliest anchor on exact ties.
    return min(scored, key=lambda s: s[2])  # type: ignore[return-value]


def plan_label_layout(
    candidates: Sequence[LabelCandidate],
    profile: SizeProfile,
    obstacles: Sequence[Obstacle] | None = None,
) -> LayoutPlan:
    """
    Assign one anchor per candidate. Total: every candidate gets an anchor,
    even under dense overlap. Positions are clamped into the chart first;
    non-finite components land on the midpoint. Repeated ids are a caller
    error; the later entry in id order overwrites the earlier one.
    """
    if not candidates:
        return LayoutPlan(anchors={}, footprints={}, penalties={}, n_labels=0)

    ordered = [
        replace(c, position=Position.clamped(c.position.x, c.position.y))
        for c in _order_candidates(candidates)
    ]
    dot_r = profile.dot_radius + profile.margin
    token_dots = [dot_disc(c.position, dot_r) for c in ordered]
    extra = [
        dot_disc(Position.clamped(o.position.x, o.position.y), _finite_nonneg(o.radius))
        for o in (obstacles or [])
    ]

    anchors: AnchorAssignment = {}
    footprints: dict[str, Polygon] = {}
    penalties: dict[str, float] = {}
    placed: list[BaseGeometry] = []
    out_of_bounds = 0
    overlaps = 0
    warnings: list[str] = []

    for i, cand in enumerate(ordered):
        dots = [d for j, d in enumerate(token_dots) if j != i] + extra
        anchor, fp, penalty = _choose_anchor(cand, profile, placed, dots)

        if not is_inside_chart(fp):
            out_of_bounds += 1
            warnings.append(f"Label for {cand.id!r} extends outside the chart.")
        if sum(overlap_area(fp, other) for other in placed) > OVERLAP_TOLERANCE_AREA:
            overlaps += 1
        logger.debug(f"Anchor {anchor} for {cand.id!r} (penalty={penalty:.6f})")

        if cand.id in anchors:
            warnings.append(f"Duplicate candidate id {cand.id!r}; earlier anchor overwritten.")
        anchors[cand.id] = anchor
        footprints[cand.id] = fp
        penalties[cand.id] = penalty
        placed.append(fp)

    logger.debug(
        f"Planned {len(ordered)} labels: {out_of_bounds} out of bounds, {overlaps} overlapping"
    )
    return LayoutPlan(
        anchors=anchors,
        footprints=footprints,
        penalties=penalties,
        n_labels=len(ordered),
        out_of_bounds_count=out_of_bounds,
        overlaps_detected=overlaps,
        warnings=warnings,
    )


def plan_label_anchors(
    candidates: Sequence[LabelCandidate],
    profile: SizeProfile,
    obstacles: Sequence[Obstacle] | None = None,
) -> AnchorAssignment:
    """Anchor direction per candidate id. See plan_label_layout."""
    return plan_label_layout(candidates, profile, obstacles).anchors
