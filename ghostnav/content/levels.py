from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

import yaml


@dataclass(frozen=True)
class LevelTiming:
    scatter: Tuple[float, ...]
    chase: Tuple[float, ...]      # -1 = infinite
    frightened: float             # seconds
    frightened_flashes: int


DEFAULT_LEVELS_PATH = Path(__file__).resolve().parent / "levels.yaml"


def _build_timing(entry: dict, index: int) -> LevelTiming:
    if not isinstance(entry, dict):
        raise ValueError(f"Level {index + 1} entry is not a mapping: {entry!r}")
    scatter = tuple(float(s) for s in entry.get("scatter", ()) or ())
    chase = tuple(float(c) for c in entry.get("chase", ()) or ())
    if not scatter or len(scatter) != len(chase):
        raise ValueError(f"Level {index + 1}: scatter and chase lists must be non-empty and equal length")
    return LevelTiming(
        scatter=scatter,
        chase=chase,
        frightened=float(entry.get("frightened", 0)),
        frightened_flashes=int(entry.get("frightened_flashes", 0)),
    )


def parse_level_timings(data) -> List[LevelTiming]:
    if not isinstance(data, list) or not data:
        raise ValueError("Level timetable must be a non-empty list")
    return [_build_timing(entry, i) for i, entry in enumerate(data)]


def load_level_timings(path: Path | str | None = None, logger=None) -> List[LevelTiming]:
    """Load the per-level Scatter/Chase timetable from YAML."""
    if path is None:
        path = DEFAULT_LEVELS_PATH
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Level timing file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Level timing file malformed: {path}: {e}") from e
    timings = parse_level_timings(data)
    if logger:
        logger(f"[levels] loaded {len(timings)} level timings from {path}")
    return timings


def timing_for_level(timings: Sequence[LevelTiming], level: int) -> LevelTiming:
    """Levels are 1-based; out-of-range levels clamp to the table."""
    idx = max(0, min(len(timings) - 1, level - 1))
    return timings[idx]
