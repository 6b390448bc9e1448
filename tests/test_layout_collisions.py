"""
Label anchor planning: default anchor, boundary avoidance, collision avoidance
between labels and dots, determinism and totality.
"""

from __future__ import annotations

import itertools
import json
import math
import random

import pytest

from tokengraph.core.config import ANCHOR_PRIORITY, OVERLAP_TOLERANCE_AREA
from tokengraph.core.geometry import is_inside_chart, overlap_area
from tokengraph.core.layout import candidate_footprint, plan_label_anchors, plan_label_layout
from tokengraph.core.reporting import plan_to_dict
from tokengraph.core.sizes import DESKTOP_SIZES, to_normalized_sizes
from tokengraph.core.types import LabelCandidate, Obstacle, Position

PROFILE = to_normalized_sizes(DESKTOP_SIZES, 280, 280)


def _cand(cid: str, x: float, y: float, width: float = 40.0) -> LabelCandidate:
    return LabelCandidate(id=cid, position=Position(x, y), label_pixel_width=width)


def _assert_no_pairwise_overlap(plan) -> None:
    for a, b in itertools.combinations(plan.footprints.values(), 2):
        assert overlap_area(a, b) <= OVERLAP_TOLERANCE_AREA


def test_empty_input() -> None:
    assert plan_label_anchors([], PROFILE) == {}


def test_single_centered_label_defaults_to_ne() -> None:
    assert plan_label_anchors([_cand("a", 0.5, 0.5)], PROFILE) == {"a": "ne"}


def test_three_tokens_scenario() -> None:
    cands = [_cand("A", 0.1, 0.1), _cand("B", 0.9, 0.9), _cand("C", 0.5, 0.5)]
    plan = plan_label_layout(cands, PROFILE)
    assert plan.anchors["A"] == "ne"
    assert plan.anchors["C"] == "ne"
    # ne would leave the chart at (0.9, 0.9); boundary avoidance wins.
    assert plan.anchors["B"] != "ne"
    assert all(is_inside_chart(fp) for fp in plan.footprints.values())
    assert plan.out_of_bounds_count == 0
    assert plan.overlaps_detected == 0
    _assert_no_pairwise_overlap(plan)


def test_top_right_corner_label_stays_inside() -> None:
    plan = plan_label_layout([_cand("corner", 0.95, 0.95)], PROFILE)
    assert plan.anchors["corner"] in ("w", "sw")
    assert is_inside_chart(plan.footprints["corner"])


def test_same_position_gets_distinct_non_overlapping_anchors() -> None:
    cands = [_cand("p1", 0.5, 0.5), _cand("p2", 0.5, 0.5)]
    plan = plan_label_layout(cands, PROFILE)
    assert set(plan.anchors) == {"p1", "p2"}
    assert plan.anchors["p1"] != plan.anchors["p2"]
    assert plan.overlaps_detected == 0
    _assert_no_pairwise_overlap(plan)


def test_crowded_neighbours_avoid_overlap() -> None:
    cands = [_cand(f"t{i}", 0.45 + 0.03 * i, 0.5) for i in range(3)]
    plan = plan_label_layout(cands, PROFILE)
    assert plan.overlaps_detected == 0
    _assert_no_pairwise_overlap(plan)


def test_obstacle_pushes_label_off_default() -> None:
    cand = _cand("a", 0.5, 0.5)
    fp_ne = plan_label_layout([cand], PROFILE).footprints["a"]
    minx, miny, maxx, maxy = fp_ne.bounds
    obstacle = Obstacle(position=Position((minx + maxx) / 2, (miny + maxy) / 2), radius=0.05)
    assert plan_label_anchors([cand], PROFILE, obstacles=[obstacle])["a"] != "ne"


def test_other_tokens_dot_is_avoided() -> None:
    # b's dot sits where a's ne label would go.
    cands = [_cand("a", 0.3, 0.3), _cand("b", 0.45, 0.42)]
    plan = plan_label_layout(cands, PROFILE)
    assert plan.anchors["a"] != "ne"


def test_determinism_independent_of_input_order() -> None:
    cands = [
        _cand("zed", 0.2, 0.8),
        _cand("amy", 0.25, 0.78),
        _cand("bob", 0.5, 0.5),
        _cand("cat", 0.52, 0.48),
        _cand("dan", 0.9, 0.1),
    ]
    expected = plan_label_anchors(cands, PROFILE)
    rng = random.Random(7)
    for _ in range(5):
        shuffled = list(cands)
        rng.shuffle(shuffled)
        out = plan_label_anchors(shuffled, PROFILE)
        assert json.dumps(out, sort_keys=True) == json.dumps(expected, sort_keys=True)


@pytest.mark.parametrize(
    "cands",
    [
        [_cand("a", 0.5, 0.5), _cand("b", 0.5, 0.5), _cand("c", 0.5, 0.5)],
        [_cand("a", 0.1, 0.9, 0.0), _cand("b", 0.2, 0.2, -15.0)],
        [_cand("wide", 0.5, 0.5, 1000.0), _cand("wider", 0.4, 0.4, 5000.0)],
        [_cand("edge", 0.0, 0.0), _cand("edge2", 1.0, 1.0)],
        [_cand("nan", math.nan, 0.5), _cand("far", 5.0, -3.0), _cand("inf", math.inf, -math.inf)],
        [_cand("nanw", 0.5, 0.5, math.nan), _cand("infw", 0.4, 0.4, math.inf)],
    ],
)
def test_totality(cands: list[LabelCandidate]) -> None:
    out = plan_label_anchors(cands, PROFILE)
    assert sorted(out) == sorted(c.id for c in cands)
    assert all(a in ANCHOR_PRIORITY for a in out.values())


def test_labels_wider_than_chart_are_counted_out_of_bounds() -> None:
    plan = plan_label_layout([_cand("wide", 0.5, 0.5, 1000.0)], PROFILE)
    assert plan.out_of_bounds_count == 1
    assert plan.warnings


def test_degenerate_profile_still_assigns() -> None:
    zero = to_normalized_sizes(DESKTOP_SIZES, 0, 0)
    out = plan_label_anchors([_cand("a", 0.5, 0.5), _cand("b", 0.5, 0.5)], zero)
    assert out == {"a": "ne", "b": "ne"}


def test_duplicate_ids_do_not_crash() -> None:
    plan = plan_label_layout([_cand("x", 0.2, 0.2), _cand("x", 0.7, 0.7)], PROFILE)
    assert list(plan.anchors) == ["x"]
    assert any("Duplicate" in w for w in plan.warnings)


def test_non_finite_positions_are_clamped_into_chart() -> None:
    plan = plan_label_layout([_cand("nan", math.nan, math.nan), _cand("far", 5.0, -3.0)], PROFILE)
    assert set(plan.anchors) == {"nan", "far"}
    # NaN lands on the midpoint, so it keeps the default anchor.
    assert plan.anchors["nan"] == "ne"
    assert all(math.isfinite(p) for p in plan.penalties.values())


def test_non_finite_obstacle_does_not_crash() -> None:
    obstacles = [
        Obstacle(position=Position(math.nan, 0.2), radius=0.05),
        Obstacle(position=Position(0.8, 0.8), radius=math.inf),
    ]
    out = plan_label_anchors([_cand("a", 0.2, 0.2)], PROFILE, obstacles=obstacles)
    assert out["a"] in ANCHOR_PRIORITY


def test_infinite_label_width_keeps_report_json_clean() -> None:
    cands = [_cand("a", 0.5, 0.5, math.inf), _cand("b", 0.3, 0.3, math.nan), _cand("c", 0.7, 0.2)]
    plan = plan_label_layout(cands, PROFILE)
    assert all(math.isfinite(p) for p in plan.penalties.values())
    json.dumps(plan_to_dict(plan), allow_nan=False)


def test_taller_label_pushes_neighbour_off_default() -> None:
    default = plan_label_anchors([_cand("a", 0.3, 0.3), _cand("b", 0.25, 0.62)], PROFILE)
    assert default == {"a": "ne", "b": "ne"}

    tall = LabelCandidate(id="a", position=Position(0.3, 0.3), label_pixel_width=40.0, label_height=0.4)
    plan = plan_label_layout([tall, _cand("b", 0.25, 0.62)], PROFILE)
    assert plan.anchors["a"] == "ne"
    assert plan.footprints["a"].bounds[3] == pytest.approx(0.3 + 0.075 + 0.4)
    assert plan.anchors["b"] != "ne"
    assert plan.overlaps_detected == 0
    _assert_no_pairwise_overlap(plan)


def test_reach_override_moves_footprint_and_anchor() -> None:
    near = _cand("a", 0.7, 0.5)
    far = LabelCandidate(id="a", position=Position(0.7, 0.5), label_pixel_width=40.0, reach=0.2)
    assert candidate_footprint(far, "ne", PROFILE).bounds[0] == pytest.approx(0.9)
    assert plan_label_anchors([near], PROFILE) == {"a": "ne"}
    # ne would now leave the chart on the right.
    assert plan_label_anchors([far], PROFILE)["a"] != "ne"
