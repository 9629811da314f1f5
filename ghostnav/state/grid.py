from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from pygame import Rect

from ghostnav.state.direction import Direction, Tile
from ghostnav.state.modes import Mode, passes_gate


class CellKind(Enum):
    EMPTY = 0
    WALL = 1
    GATE = 2


@dataclass(frozen=True)
class Grid:
    """Static maze: cell kinds plus the pen gate rectangle (world pixels)."""

    cells: Tuple[Tuple[CellKind, ...], ...]
    gate: Rect
    tile_size: int = 16
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "height", len(self.cells))
        object.__setattr__(self, "width", len(self.cells[0]) if self.cells else 0)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[CellKind]], gate: Rect, tile_size: int = 16) -> "Grid":
        return cls(tuple(tuple(r) for r in rows), Rect(gate), tile_size)

    def in_bounds(self, tx: int, ty: int) -> bool:
        return 0 <= tx < self.width and 0 <= ty < self.height

    def kind_at(self, tx: int, ty: int) -> Optional[CellKind]:
        if not self.in_bounds(tx, ty):
            return None
        return self.cells[ty][tx]

    def is_enterable(self, tx: int, ty: int, mode: Mode) -> bool:
        kind = self.kind_at(tx, ty)
        if kind is None or kind is CellKind.WALL:
            return False
        if kind is CellKind.GATE:
            return passes_gate(mode)
        return True

    def tile_center_world(self, tx: int, ty: int) -> Tuple[float, float]:
        half = self.tile_size / 2
        return (tx * self.tile_size + half, ty * self.tile_size + half)

    def world_to_tile(self, x: float, y: float) -> Tile:
        return (math.floor(x / self.tile_size), math.floor(y / self.tile_size))

    def is_blocked_at(self, world_x: float, world_y: float, mode: Mode) -> bool:
        tx, ty = self.world_to_tile(world_x, world_y)
        return not self.is_enterable(tx, ty, mode)

    # --- gate region ---

    def gate_contains(self, x: float, y: float) -> bool:
        # Edges count as inside on every side.
        g = self.gate
        return g.left <= x <= g.right and g.top <= y <= g.bottom

    @property
    def gate_center_y(self) -> float:
        return self.gate.top + self.gate.height / 2

    def gate_tile(self) -> Tile:
        return self.world_to_tile(self.gate.left + self.gate.width / 2, self.gate_center_y)

    def gate_cells(self) -> List[Tile]:
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.cells[y][x] is CellKind.GATE
        ]

    def pen_side(self) -> Direction:
        """Which vertical side of the gate the holding area is on.

        Each side is flood-filled with the gate closed; the pen is the smaller
        of the two open regions.  A side with no open cell never wins, and
        DOWN breaks ties.
        """
        cells = self.gate_cells()
        up = self._open_region_size([Direction.UP.step(c) for c in cells])
        down = self._open_region_size([Direction.DOWN.step(c) for c in cells])
        if up and (not down or up < down):
            return Direction.UP
        return Direction.DOWN

    def _open_region_size(self, starts: List[Tile]) -> int:
        seen = {t for t in starts if self.kind_at(*t) is CellKind.EMPTY}
        q = deque(seen)
        while q:
            cur = q.popleft()
            for d in Direction:
                nb = d.step(cur)
                if nb in seen or self.kind_at(*nb) is not CellKind.EMPTY:
                    continue
                seen.add(nb)
                q.append(nb)
        return len(seen)


def block_reason(grid: Grid, tx: int, ty: int, mode: Mode) -> str:
    kind = grid.kind_at(tx, ty)
    if kind is None:
        return "OOB"
    if kind is CellKind.WALL:
        return "wall"
    if kind is CellKind.GATE:
        return "gate pass" if passes_gate(mode) else "gate blocked"
    return "open"


# --- movement environment -------------------------------------------------


class GridEnv(Protocol):
    """What GridMover needs to know about the world; nothing ghost-specific."""

    tile_size: int

    def world_to_tile(self, x: float, y: float) -> Tile: ...

    def tile_center_world(self, tx: int, ty: int) -> Tuple[float, float]: ...

    def is_blocked(self, world_x: float, world_y: float) -> bool: ...

    def can_enter_tile(self, tx: int, ty: int) -> bool: ...


class GhostGridEnv:
    """Bridges one ghost's live mode to the generic GridEnv (gate passability)."""

    def __init__(self, grid: Grid, mode_fn: Callable[[], Mode]) -> None:
        self.grid = grid
        self.mode_fn = mode_fn
        self.tile_size = grid.tile_size

    def world_to_tile(self, x: float, y: float) -> Tile:
        return self.grid.world_to_tile(x, y)

    def tile_center_world(self, tx: int, ty: int) -> Tuple[float, float]:
        return self.grid.tile_center_world(tx, ty)

    def is_blocked(self, world_x: float, world_y: float) -> bool:
        return self.grid.is_blocked_at(world_x, world_y, self.mode_fn())

    def can_enter_tile(self, tx: int, ty: int) -> bool:
        return self.grid.is_enterable(tx, ty, self.mode_fn())
