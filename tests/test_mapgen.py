"""Tests for ghostnav.mapgen maze parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from ghostnav.mapgen import load_default_maze, load_maze, parse_maze
from ghostnav.state.grid import CellKind


class TestParseMaze:
    def test_legend(self) -> None:
        grid = parse_maze("#.o \n#--#")
        assert [grid.kind_at(x, 0) for x in range(4)] == [
            CellKind.WALL, CellKind.EMPTY, CellKind.EMPTY, CellKind.EMPTY,
        ]
        assert grid.kind_at(1, 1) is CellKind.GATE
        assert grid.kind_at(2, 1) is CellKind.GATE

    def test_gate_rect_is_bounding_box(self) -> None:
        grid = parse_maze("####\n#--#\n####", tile_size=10)
        assert (grid.gate.x, grid.gate.y, grid.gate.w, grid.gate.h) == (10, 10, 20, 10)

    def test_short_rows_are_padded(self) -> None:
        grid = parse_maze("#####\n#-\n#####")
        assert grid.width == 5
        assert grid.kind_at(4, 1) is CellKind.EMPTY

    def test_surrounding_blank_lines_ignored(self) -> None:
        grid = parse_maze("\n\n#-#\n\n")
        assert (grid.width, grid.height) == (3, 1)

    def test_empty_text(self) -> None:
        with pytest.raises(ValueError):
            parse_maze("  \n\n")

    def test_missing_gate(self) -> None:
        with pytest.raises(ValueError):
            parse_maze("###\n#.#\n###")

    def test_row_wider_than_declared_width(self) -> None:
        with pytest.raises(ValueError):
            parse_maze("#####\n#-#", width=3)


class TestLoadMaze:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_maze(tmp_path / "nope.txt")

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "tiny.txt"
        path.write_text("#.#\n#-#\n", encoding="utf-8")
        grid = load_maze(path)
        assert (grid.width, grid.height) == (3, 2)

    def test_default_maze(self) -> None:
        grid = load_default_maze()
        assert (grid.width, grid.height) == (28, 31)
        assert grid.gate_cells() == [(13, 12), (14, 12)]
        # pen interior and the row above the gate are open
        for x in range(11, 17):
            for y in range(13, 16):
                assert grid.kind_at(x, y) is CellKind.EMPTY
        assert grid.kind_at(13, 11) is CellKind.EMPTY
        # tunnel row reaches both edges
        assert grid.kind_at(0, 14) is CellKind.EMPTY
        assert grid.kind_at(27, 14) is CellKind.EMPTY
