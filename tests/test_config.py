"""Tests for configuration defaults and seeded RNG helpers."""

from __future__ import annotations

import pytest

from ghostnav.config import GameConfig, default_seed
from ghostnav.rng import derive_rng, new_rng
from ghostnav.state.modes import Mode


class TestGameConfig:
    def test_defaults(self) -> None:
        cfg = GameConfig()
        assert cfg.tile_size == 16
        assert cfg.base_speed == 70.0
        assert cfg.seed == default_seed
        assert cfg.tick_ms == pytest.approx(1000.0 / 60.0)

    def test_speed_multipliers(self) -> None:
        cfg = GameConfig()
        assert cfg.speed_multiplier(Mode.FRIGHTENED) == 0.6
        assert cfg.speed_multiplier(Mode.CAPTURED) == 1.6
        for mode in (Mode.CONFINED, Mode.RELEASING, Mode.SCATTER, Mode.CHASE):
            assert cfg.speed_multiplier(mode) == 1.0


class TestRng:
    def test_new_rng_is_seeded(self) -> None:
        assert new_rng(3).random() == new_rng(3).random()

    def test_derived_streams_are_stable_and_distinct(self) -> None:
        a1 = derive_rng(new_rng(10), "lead")
        a2 = derive_rng(new_rng(10), "lead")
        b = derive_rng(new_rng(10), "shy")
        first = [a1.random() for _ in range(5)]
        assert first == [a2.random() for _ in range(5)]
        assert first != [b.random() for _ in range(5)]
