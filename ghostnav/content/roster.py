from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

import yaml

from ghostnav.state.direction import Tile
from ghostnav.systems.targeting import TargetRule, parse_rule


@dataclass(frozen=True)
class GhostSpec:
    name: str
    rule: TargetRule
    spawn: Tile
    corner: Tile
    starts_free: bool = False
    pellet_threshold: int = 0


DEFAULT_ROSTER_PATH = Path(__file__).resolve().parent / "ghosts.yaml"


def _tile(entry: dict, key: str) -> Tile:
    raw = entry.get(key)
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"Ghost '{entry.get('name', '?')}': '{key}' must be [tx, ty], got {raw!r}")
    return (int(raw[0]), int(raw[1]))


def _build_spec(entry: dict) -> GhostSpec:
    if not isinstance(entry, dict) or "name" not in entry:
        raise ValueError(f"Ghost roster entry malformed: {entry!r}")
    return GhostSpec(
        name=str(entry["name"]),
        rule=parse_rule(entry.get("rule", "direct")),
        spawn=_tile(entry, "spawn"),
        corner=_tile(entry, "corner"),
        starts_free=bool(entry.get("starts_free", False)),
        pellet_threshold=int(entry.get("pellet_threshold", 0)),
    )


def parse_roster(data) -> List[GhostSpec]:
    if not isinstance(data, list) or not data:
        raise ValueError("Ghost roster must be a non-empty list")
    specs = [_build_spec(entry) for entry in data]
    seen: Dict[str, GhostSpec] = {}
    for spec in specs:
        if spec.name in seen:
            raise ValueError(f"Duplicate ghost name in roster: {spec.name}")
        seen[spec.name] = spec
    return specs


def load_roster(path: Path | str | None = None, logger=None) -> List[GhostSpec]:
    """Load the ghost roster from YAML, in update order."""
    if path is None:
        path = DEFAULT_ROSTER_PATH
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Ghost roster file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Ghost roster file malformed: {path}: {e}") from e
    specs = parse_roster(data)
    if logger:
        logger(f"[ghosts] loaded {len(specs)} ghosts from {path}")
        logger(f"[ghosts] order: {[s.name for s in specs]}")
    return specs
