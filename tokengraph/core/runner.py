# tokengraph/core/runner.py
"""
CLI entrypoint: load candidates, derive the size profile, plan label anchors,
write anchors.json / run_metadata.json and a debug PNG.
Without --candidates the three-player sample preview is planned.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from tokengraph.core.config import LOG_LEVEL, REPORTS_DIR, SAMPLE_CHART_PX, SAMPLE_POSITIONS
from tokengraph.core.io import load_candidates
from tokengraph.core.layout import plan_label_layout
from tokengraph.core.reporting import (
    ensure_report_dir,
    write_anchors_json,
    write_run_metadata_json,
)
from tokengraph.core.sizes import (
    BasePixelSizes,
    estimate_label_pixel_width,
    select_base_sizes,
    to_normalized_sizes,
)
from tokengraph.core.types import LabelCandidate, Position

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Plan label anchors for tokens on a chart.")
    p.add_argument("--candidates", type=str, default=None, help="Candidates JSON path (repo-relative)")
    p.add_argument("--chart-px", type=float, default=SAMPLE_CHART_PX, dest="chart_px", help="Chart side (px)")
    p.add_argument("--compact", action="store_true", help="Use mobile base sizes")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--no-render", action="store_true", dest="no_render", help="Skip the debug PNG")
    return p.parse_args(argv)


def sample_candidates(base: BasePixelSizes) -> list[LabelCandidate]:
    """The homepage preview: Alex, Bob and Carol."""
    return [
        LabelCandidate(
            id=f"sample-{name}",
            position=Position.clamped(x, y),
            label_pixel_width=estimate_label_pixel_width(name, base),
        )
        for name, x, y in SAMPLE_POSITIONS
    ]


def run(argv: list[str] | None = None) -> list[Path]:
    """Plan and write reports; returns the written paths."""
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    base = select_base_sizes(args.compact)
    if args.candidates:
        candidates = load_candidates(args.candidates, repo_root=repo_root, base=base)
        source = args.candidates
    else:
        candidates = sample_candidates(base)
        source = "sample"
    profile = to_normalized_sizes(base, args.chart_px, args.chart_px)

    plan = plan_label_layout(candidates, profile)
    for w in plan.warnings:
        logger.warning(w)

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    written = [
        write_anchors_json(report_dir, plan),
        write_run_metadata_json(report_dir, args.run_name, source, args.chart_px, args.compact, profile),
    ]
    if not args.no_render:
        from tokengraph.core.render import render_layout
        layout_path = report_dir / "layout.png"
        render_layout(plan, candidates, profile, layout_path)
        written.append(layout_path)

    for p in written:
        print(p)
    for label_id, anchor in sorted(plan.anchors.items()):
        print(f"{label_id}: {anchor}")
    return written


def main(argv: list[str] | None = None) -> None:
    run(argv)


if __name__ == "__main__":
    main()
