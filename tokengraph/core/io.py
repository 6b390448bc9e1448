# tokengraph/core/io.py
"""
Load label candidates from JSON.
Accepts a list of entries or {"candidates": [...]}. Each entry has id, x, y and
either label_pixel_width or label (text, converted with the base sizes).
Optional label_height and reach (normalized) override the size profile.
Positions are clamped to [0, 1] on load.
"""

from __future__ import annotations

import json
from pathlib import Path

from tokengraph.core.sizes import BasePixelSizes, DESKTOP_SIZES, estimate_label_pixel_width
from tokengraph.core.types import LabelCandidate, Position


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def _optional_float(entry: dict, key: str) -> float | None:
    if entry.get(key) is None:
        return None
    try:
        return float(entry[key])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Candidate {entry['id']!r} has a non-numeric {key}") from e


def _entry_to_candidate(entry: object, index: int, base: BasePixelSizes) -> LabelCandidate:
    if not isinstance(entry, dict):
        raise ValueError(f"Candidate #{index} is not an object")
    if "id" not in entry:
        raise ValueError(f"Candidate #{index} has no id")
    try:
        x = float(entry["x"])
        y = float(entry["y"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Candidate {entry['id']!r} has no numeric x/y") from e
    if "label_pixel_width" in entry:
        try:
            width = float(entry["label_pixel_width"])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Candidate {entry['id']!r} has a non-numeric label_pixel_width") from e
    else:
        width = estimate_label_pixel_width(str(entry.get("label", "")), base)
    return LabelCandidate(
        id=str(entry["id"]),
        position=Position.clamped(x, y),
        label_pixel_width=width,
        label_height=_optional_float(entry, "label_height"),
        reach=_optional_float(entry, "reach"),
    )


def parse_candidates(data: object, base: BasePixelSizes = DESKTOP_SIZES) -> list[LabelCandidate]:
    """Build candidates from decoded JSON. Raises ValueError on malformed entries."""
    if isinstance(data, dict):
        data = data.get("candidates")
    if not isinstance(data, list):
        raise ValueError("Expected a list of candidates or {'candidates': [...]}")
    return [_entry_to_candidate(entry, i, base) for i, entry in enumerate(data)]


def load_candidates(
    path: str | Path,
    repo_root: Path | None = None,
    base: BasePixelSizes = DESKTOP_SIZES,
) -> list[LabelCandidate]:
    """
    Read candidates from a JSON file.
    Raises FileNotFoundError if path is missing, ValueError if content is malformed.
    """
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Candidates file not found: {resolved}")
    try:
        data = json.loads(resolved.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {resolved}: {e}") from e
    return parse_candidates(data, base)
