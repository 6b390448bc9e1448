# tokengraph/core/render.py
"""
Matplotlib debug PNG of a planned layout: unit chart, token dots, label
footprints and chosen anchors. Geometry inspection only, not product rendering.
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from shapely.geometry.base import BaseGeometry

from tokengraph.core.config import RENDER_SIZE_PX
from tokengraph.core.geometry import CHART_BOUNDS, dot_disc
from tokengraph.core.sizes import SizeProfile
from tokengraph.core.types import LabelCandidate, LayoutPlan, Obstacle

_VIEW_PAD = 0.25
"""Margin (normalized) around the chart so spilled labels stay visible."""


def _new_fig(size_px: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(figsize=(size_px / 100.0, size_px / 100.0), dpi=100, constrained_layout=False)
    # Leave bottom margin so legend does not overlap the chart
    ax = fig.add_axes([0.05, 0.08, 0.9, 0.88])
    ax.axis("off")
    return fig, ax


def _outline(geom: BaseGeometry) -> np.ndarray:
    return np.array(geom.exterior.coords)


def render_layout(
    plan: LayoutPlan,
    candidates: Sequence[LabelCandidate],
    profile: SizeProfile,
    output_path: str | Path,
    obstacles: Sequence[Obstacle] | None = None,
    size_px: int = RENDER_SIZE_PX,
    scale: int = 1,
) -> None:
    """Render dots, footprints and anchors. scale multiplies output resolution (1x, 2x, 4x)."""
    fig, ax = _new_fig(size_px * scale)

    xy = _outline(CHART_BOUNDS)
    ax.fill(xy[:, 0], xy[:, 1], facecolor="whitesmoke", edgecolor="black", linewidth=1, label="chart")
    ax.plot([0.5, 0.5], [0.0, 1.0], color="lightgray", linewidth=0.8)
    ax.plot([0.0, 1.0], [0.5, 0.5], color="lightgray", linewidth=0.8)

    for i, obs in enumerate(obstacles or []):
        disc = dot_disc(obs.position, obs.radius)
        if disc.is_empty:
            continue
        oxy = _outline(disc)
        ax.fill(oxy[:, 0], oxy[:, 1], facecolor="none", edgecolor="orange", hatch="//",
                linewidth=1, label="obstacle" if i == 0 else None)

    if candidates:
        xs = [c.position.x for c in candidates]
        ys = [c.position.y for c in candidates]
        # Axes span 0.9 of the figure and (1 + 2 * pad) data units
        pt_per_unit = size_px * scale / 100.0 * 0.9 * 72 / (1 + 2 * _VIEW_PAD)
        dot_pt = max(1.0, profile.dot_radius * 2 * pt_per_unit)
        ax.scatter(xs, ys, s=dot_pt ** 2, color="navy", zorder=4, label="tokens")

    for i, label_id in enumerate(sorted(plan.footprints)):
        fp = plan.footprints[label_id]
        fxy = _outline(fp)
        ax.plot(fxy[:, 0], fxy[:, 1], color="crimson", linewidth=1.5, zorder=5,
                label="footprints" if i == 0 else None)
        minx, miny, maxx, maxy = fp.bounds
        ax.text((minx + maxx) / 2, (miny + maxy) / 2, f"{label_id} ({plan.anchors[label_id]})", fontsize=7 * scale,
                ha="center", va="center", zorder=6)

    ax.set_xlim(-_VIEW_PAD, 1 + _VIEW_PAD)
    ax.set_ylim(-_VIEW_PAD, 1 + _VIEW_PAD)
    ax.set_aspect("equal", adjustable="box")
    leg = ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.02), ncol=4, fontsize=8)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white", bbox_inches="tight", bbox_extra_artists=[leg])
    plt.close(fig)
