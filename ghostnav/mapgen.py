"""Maze text -> Grid.

Legend: ``#`` wall, ``-`` pen gate, anything else (``.``, ``o``, space) is an
empty corridor cell.  The gate rectangle is the bounding box of all gate
cells, in world pixels.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pygame import Rect

from ghostnav.state.grid import CellKind, Grid

WALL_CHARS = "#"
GATE_CHARS = "-"

DEFAULT_MAZE_PATH = Path(__file__).resolve().parent / "content" / "maze.txt"


def _cell_for(ch: str) -> CellKind:
    if ch in WALL_CHARS:
        return CellKind.WALL
    if ch in GATE_CHARS:
        return CellKind.GATE
    return CellKind.EMPTY


def parse_maze(text: str, tile_size: int = 16, width: Optional[int] = None) -> Grid:
    lines = text.splitlines()
    # drop leading/trailing blank lines, keep interior spacing intact
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise ValueError("Maze text is empty")

    if width is None:
        width = max(len(line) for line in lines)
    rows: List[List[CellKind]] = []
    for y, line in enumerate(lines):
        if len(line.rstrip()) > width:
            raise ValueError(f"Maze row {y} is wider than {width} cells")
        # trailing spaces are often stripped by editors; pad them back as corridor
        padded = line.ljust(width)[:width]
        rows.append([_cell_for(ch) for ch in padded])

    gates = [(x, y) for y, row in enumerate(rows) for x, k in enumerate(row) if k is CellKind.GATE]
    if not gates:
        raise ValueError("Maze has no gate cells ('-')")
    min_x = min(x for x, _ in gates)
    max_x = max(x for x, _ in gates)
    min_y = min(y for _, y in gates)
    max_y = max(y for _, y in gates)
    gate = Rect(
        min_x * tile_size,
        min_y * tile_size,
        (max_x - min_x + 1) * tile_size,
        (max_y - min_y + 1) * tile_size,
    )
    return Grid.from_rows(rows, gate, tile_size)


def load_maze(path: Path | str, tile_size: int = 16) -> Grid:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Maze file not found: {path}")
    return parse_maze(path.read_text(encoding="utf-8"), tile_size)


def load_default_maze(tile_size: int = 16) -> Grid:
    return load_maze(DEFAULT_MAZE_PATH, tile_size)
