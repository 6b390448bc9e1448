# tokengraph/core/config.py
"""
Central configuration for the placement-graph geometry engine.
All tunable values live here; no magic numbers in other modules.
Pixel values describe what the user sees; everything the planner consumes
is normalized against the chart side (see sizes.py).
"""

from __future__ import annotations

import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Base pixel sizes (mobile / desktop) -----
MOBILE_DOT_SIZE_PX: float = 14.0
MOBILE_LABEL_OFFSET_PX: float = 8.0
MOBILE_LABEL_FONT_SIZE_PX: float = 16.0
MOBILE_LABEL_PAD_X_PX: float = 4.0
MOBILE_LABEL_PAD_Y_PX: float = 1.0

DESKTOP_DOT_SIZE_PX: float = 18.0
DESKTOP_LABEL_OFFSET_PX: float = 10.0
DESKTOP_LABEL_FONT_SIZE_PX: float = 18.0
DESKTOP_LABEL_PAD_X_PX: float = 6.0
DESKTOP_LABEL_PAD_Y_PX: float = 2.0

# ----- Normalisation -----
LABEL_LINE_HEIGHT: float = 1.25
"""Label line height as a multiple of font size ("leading-tight")."""

LABEL_CHAR_WIDTH_EM: float = 0.62
"""Average proportional character width as a fraction of font size."""

LABEL_MARGIN_PX: float = 3.0
"""Breathing room (px) added around dots for overlap detection."""

DEGENERATE_AXIS_VALUE: float = 0.5
"""Normalized value returned for an axis whose pixel extent is zero."""

MAX_INSET_FRACTION: float = 0.5
"""Inset can never exceed half the axis; larger insets collapse to the midpoint."""

# ----- Drop handling -----
NEAR_GRAPH_PAD_FRACTION: float = 0.5
"""A drop within this fraction of the chart's smaller side outside the rect still counts."""

# ----- Scoring. See layout.py -----
OUT_OF_BOUNDS_PENALTY: float = 1000.0
"""Hard penalty for a footprint that leaves the unit chart."""

SPILL_WEIGHT: float = 100.0
"""Penalty per unit of footprint area outside the chart (ranks out-of-bounds anchors)."""

OVERLAP_WEIGHT: float = 50.0
"""Penalty per unit of area shared with an already placed footprint."""

DOT_OVERLAP_WEIGHT: float = 25.0
"""Penalty per unit of area shared with another token's dot or an obstacle."""

OVERLAP_TOLERANCE_AREA: float = 1e-6
"""Overlap (normalized area) above which a chosen footprint counts as colliding."""

DOT_DISC_RESOLUTION: int = 8
"""Quarter-circle segments used to approximate dot discs."""

# ----- Anchors -----
ANCHOR_PRIORITY: tuple[str, ...] = ("ne", "n", "e", "nw", "se", "s", "w", "sw")
"""Evaluation and tie-break order. First entry is the default anchor."""

# ----- Sample preview (runner default input) -----
SAMPLE_CHART_PX: float = 280.0
SAMPLE_POSITIONS: tuple[tuple[str, float, float], ...] = (
    ("Alex", 0.22, 0.78),
    ("Bob", 0.55, 0.45),
    ("Carol", 0.8, 0.2),
)

# ----- Rendering (debug PNG) -----
RENDER_SIZE_PX: int = 600

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Log level for the CLI. Set env LOG_LEVEL=DEBUG to trace anchor choices."""
