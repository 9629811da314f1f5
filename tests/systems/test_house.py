"""Tests for ghostnav.systems.house.HouseController."""

from __future__ import annotations

from random import Random
from typing import List

from ghostnav.config import GameConfig
from ghostnav.state.ghost import Ghost
from ghostnav.state.grid import Grid
from ghostnav.state.modes import Captured, Confined, Mode
from ghostnav.systems.house import HouseController


def _pen_ghosts(grid: Grid, names=("a", "b", "c")) -> List[Ghost]:
    spawns = [(13, 14), (11, 14), (16, 14)]
    return [
        Ghost(name, grid, spawn, (0, 0), rng=Random(i))
        for i, (name, spawn) in enumerate(zip(names, spawns))
    ]


class TestPelletThresholds:
    def test_zero_threshold_releases_immediately(self, classic_grid: Grid) -> None:
        ghosts = _pen_ghosts(classic_grid)
        house = HouseController(ghosts, {"a": 0, "b": 2})
        house.update(16)
        assert ghosts[0].current_mode() is Mode.RELEASING
        assert ghosts[1].current_mode() is Mode.CONFINED

    def test_release_when_count_reached(self, classic_grid: Grid) -> None:
        ghosts = _pen_ghosts(classic_grid)
        logs: List[str] = []
        house = HouseController(ghosts, {"b": 2}, logger=logs.append)
        house.pellet_eaten()
        assert ghosts[1].current_mode() is Mode.CONFINED
        house.pellet_eaten()
        assert ghosts[1].current_mode() is Mode.RELEASING
        assert any("releasing b" in line for line in logs)

    def test_ghost_without_threshold_waits(self, classic_grid: Grid) -> None:
        ghosts = _pen_ghosts(classic_grid)
        house = HouseController(ghosts, {"a": 0})
        for _ in range(100):
            house.pellet_eaten()
        assert ghosts[2].current_mode() is Mode.CONFINED


class TestIdleTimer:
    def test_releases_next_in_roster_order(self, classic_grid: Grid) -> None:
        ghosts = _pen_ghosts(classic_grid)
        house = HouseController(ghosts, {}, GameConfig(idle_release_ms=1000))
        house.update(999)
        assert all(g.current_mode() is Mode.CONFINED for g in ghosts)
        house.update(1)
        assert [g.current_mode() for g in ghosts] == [Mode.RELEASING, Mode.CONFINED, Mode.CONFINED]
        house.update(1000)
        assert ghosts[1].current_mode() is Mode.RELEASING

    def test_pellet_resets_idle_clock(self, classic_grid: Grid) -> None:
        ghosts = _pen_ghosts(classic_grid)
        house = HouseController(ghosts, {}, GameConfig(idle_release_ms=1000))
        house.update(900)
        house.pellet_eaten()
        house.update(900)
        assert all(g.current_mode() is Mode.CONFINED for g in ghosts)


class TestReturnRelease:
    def test_rereleased_after_delay(self, classic_grid: Grid) -> None:
        ghosts = _pen_ghosts(classic_grid)
        cfg = GameConfig(idle_release_ms=10**9, return_release_delay_ms=1200)
        house = HouseController(ghosts, {}, cfg)
        ghost = ghosts[0]
        ghost.state = Captured()
        house.update(16)
        ghost.state = Confined()
        house.update(16)
        assert house.timers.pending("a")
        house.update(1100)
        assert ghost.current_mode() is Mode.CONFINED
        house.update(100)
        assert ghost.current_mode() is Mode.RELEASING
        assert not house.timers.pending("a")

    def test_reset_drops_pending_releases(self, classic_grid: Grid) -> None:
        ghosts = _pen_ghosts(classic_grid)
        cfg = GameConfig(idle_release_ms=10**9)
        house = HouseController(ghosts, {}, cfg)
        ghosts[0].state = Captured()
        house.update(16)
        ghosts[0].state = Confined()
        house.update(16)
        house.reset()
        house.update(5000)
        assert ghosts[0].current_mode() is Mode.CONFINED
