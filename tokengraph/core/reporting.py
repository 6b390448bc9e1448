# tokengraph/core/reporting.py
"""
Create reports/<run_name>/ and write anchors.json and run_metadata.json.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from tokengraph.core.config import (
    ANCHOR_PRIORITY,
    DOT_OVERLAP_WEIGHT,
    OUT_OF_BOUNDS_PENALTY,
    OVERLAP_TOLERANCE_AREA,
    OVERLAP_WEIGHT,
    REPORTS_DIR,
    SPILL_WEIGHT,
)
from tokengraph.core.sizes import SizeProfile
from tokengraph.core.types import LayoutPlan

SCHEMA_VERSION = "1.0"


def plan_to_dict(plan: LayoutPlan) -> dict:
    """Exact structure for anchors.json. Labels listed in id order."""
    labels = []
    for label_id in sorted(plan.anchors):
        minx, miny, maxx, maxy = plan.footprints[label_id].bounds
        labels.append({
            "id": label_id,
            "anchor": plan.anchors[label_id],
            "footprint": {"x1": minx, "y1": miny, "x2": maxx, "y2": maxy},
            "penalty": plan.penalties[label_id],
        })
    return {
        "schema_version": SCHEMA_VERSION,
        "anchors": dict(sorted(plan.anchors.items())),
        "labels": labels,
        "summary": {
            "n_labels": plan.n_labels,
            "out_of_bounds_count": plan.out_of_bounds_count,
            "overlaps_detected": plan.overlaps_detected,
        },
        "warnings": plan.warnings,
    }


def run_metadata_dict(
    run_name: str,
    candidates_source: str,
    chart_px: float,
    compact: bool,
    profile: SizeProfile,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "candidates_source": candidates_source,
        "chart_px": chart_px,
        "compact": compact,
        "size_profile": {
            "dot_radius": profile.dot_radius,
            "label_char_width": profile.label_char_width,
            "label_pad_width": profile.label_pad_width,
            "label_height": profile.label_height,
            "label_offset": profile.label_offset,
            "margin": profile.margin,
            "side_px": profile.side_px,
        },
        "config": {
            "OUT_OF_BOUNDS_PENALTY": OUT_OF_BOUNDS_PENALTY,
            "SPILL_WEIGHT": SPILL_WEIGHT,
            "OVERLAP_WEIGHT": OVERLAP_WEIGHT,
            "DOT_OVERLAP_WEIGHT": DOT_OVERLAP_WEIGHT,
            "OVERLAP_TOLERANCE_AREA": OVERLAP_TOLERANCE_AREA,
            "ANCHOR_PRIORITY": list(ANCHOR_PRIORITY),
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_anchors_json(report_dir: Path, plan: LayoutPlan) -> Path:
    """Write anchors.json to report_dir. Returns path to file."""
    path = report_dir / "anchors.json"
    path.write_text(json.dumps(plan_to_dict(plan), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    candidates_source: str,
    chart_px: float,
    compact: bool,
    profile: SizeProfile,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, candidates_source, chart_px, compact, profile)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
