from __future__ import annotations

from typing import List

import pytest

from ghostnav.config import GameConfig
from ghostnav.mapgen import load_default_maze, parse_maze
from ghostnav.state.grid import Grid

# 7x6 room with one gate cell at (3, 3)
OPEN_ROWS: List[str] = [
    "#######",
    "#.....#",
    "#.....#",
    "#..-..#",
    "#.....#",
    "#######",
]


def make_grid(rows: List[str], tile_size: int = 16) -> Grid:
    return parse_maze("\n".join(rows), tile_size)


@pytest.fixture
def open_grid() -> Grid:
    return make_grid(OPEN_ROWS)


@pytest.fixture(scope="session")
def classic_grid() -> Grid:
    return load_default_maze()


@pytest.fixture
def cfg() -> GameConfig:
    return GameConfig()


@pytest.fixture
def grid_from_rows():
    return make_grid
