# tokengraph/core/sizes.py
"""
Base pixel sizes for mobile / desktop and their normalized size profile.
The planner works purely in normalized units, so the same layout runs
identically on a small phone chart and a large desktop chart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tokengraph.core.config import (
    DESKTOP_DOT_SIZE_PX,
    DESKTOP_LABEL_FONT_SIZE_PX,
    DESKTOP_LABEL_OFFSET_PX,
    DESKTOP_LABEL_PAD_X_PX,
    DESKTOP_LABEL_PAD_Y_PX,
    LABEL_CHAR_WIDTH_EM,
    LABEL_LINE_HEIGHT,
    LABEL_MARGIN_PX,
    MOBILE_DOT_SIZE_PX,
    MOBILE_LABEL_FONT_SIZE_PX,
    MOBILE_LABEL_OFFSET_PX,
    MOBILE_LABEL_PAD_X_PX,
    MOBILE_LABEL_PAD_Y_PX,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BasePixelSizes:
    """Pixel constants for one device class."""
    dot_size: float
    label_offset: float
    label_font_size: float
    label_pad_x: float
    label_pad_y: float


@dataclass(frozen=True)
class SizeProfile:
    """Sizes as fractions of the chart side. Derived per viewport size; never mutated."""
    dot_radius: float
    label_char_width: float
    label_pad_width: float
    label_height: float
    label_offset: float
    margin: float
    side_px: float

    def px_to_normalized(self, px: float) -> float:
        """Convert a pixel length on this chart to normalized units (0 on a degenerate chart)."""
        if self.side_px <= 0:
            return 0.0
        return px / self.side_px


MOBILE_SIZES = BasePixelSizes(
    dot_size=MOBILE_DOT_SIZE_PX,
    label_offset=MOBILE_LABEL_OFFSET_PX,
    label_font_size=MOBILE_LABEL_FONT_SIZE_PX,
    label_pad_x=MOBILE_LABEL_PAD_X_PX,
    label_pad_y=MOBILE_LABEL_PAD_Y_PX,
)

DESKTOP_SIZES = BasePixelSizes(
    dot_size=DESKTOP_DOT_SIZE_PX,
    label_offset=DESKTOP_LABEL_OFFSET_PX,
    label_font_size=DESKTOP_LABEL_FONT_SIZE_PX,
    label_pad_x=DESKTOP_LABEL_PAD_X_PX,
    label_pad_y=DESKTOP_LABEL_PAD_Y_PX,
)


def select_base_sizes(compact: bool) -> BasePixelSizes:
    """Mobile profile for compact layouts, desktop otherwise."""
    return MOBILE_SIZES if compact else DESKTOP_SIZES


def _chart_side(width_px: float, height_px: float) -> float:
    """Charts are square; width is authoritative, height only if width is unusable."""
    if width_px > 0:
        return float(width_px)
    if height_px > 0:
        return float(height_px)
    return 0.0


def to_normalized_sizes(
    base: BasePixelSizes,
    container_width_px: float,
    container_height_px: float,
) -> SizeProfile:
    """
    Divide each base pixel constant by the chart side.
    Call whenever the chart resizes or the base sizes change.
    A zero-size chart yields an all-zero profile.
    """
    side = _chart_side(container_width_px, container_height_px)
    if side <= 0:
        logger.debug(
            f"Degenerate chart {container_width_px}x{container_height_px}; using zero size profile"
        )
        return SizeProfile(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, side_px=0.0)
    if container_width_px > 0 and container_height_px > 0 and container_height_px != container_width_px:
        logger.debug(f"Non-square chart {container_width_px}x{container_height_px}; width wins")

    label_h_px = base.label_font_size * LABEL_LINE_HEIGHT + 2 * base.label_pad_y
    return SizeProfile(
        dot_radius=base.dot_size / 2.0 / side,
        label_char_width=base.label_font_size * LABEL_CHAR_WIDTH_EM / side,
        label_pad_width=2 * base.label_pad_x / side,
        label_height=label_h_px / side,
        label_offset=base.label_offset / side,
        margin=LABEL_MARGIN_PX / side,
        side_px=side,
    )


def estimate_label_pixel_width(text: str, base: BasePixelSizes) -> float:
    """Text width estimate (px) from average character width; padding excluded."""
    return len(text or "") * base.label_font_size * LABEL_CHAR_WIDTH_EM
