from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

Tile = Tuple[int, int]


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Tile:
        return VECTORS[self]

    @property
    def opposite(self) -> "Direction":
        return OPPOSITES[self]

    @property
    def horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    def step(self, tile: Tile) -> Tile:
        dx, dy = VECTORS[self]
        return (tile[0] + dx, tile[1] + dy)


VECTORS: Dict[Direction, Tile] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

OPPOSITES: Dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Fixed neighbor order; every tie-break in the package follows it.
DIRS: List[Direction] = [Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT]


def dir_name(d: Optional[Direction]) -> str:
    return d.value if d is not None else "-"
