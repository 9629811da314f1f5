"""Tests for the YAML content loaders."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from ghostnav.content.levels import load_level_timings, parse_level_timings, timing_for_level
from ghostnav.content.roster import load_roster, parse_roster
from ghostnav.systems.targeting import TargetRule


class TestLevelTimings:
    def test_packaged_table(self) -> None:
        timings = load_level_timings()
        assert len(timings) == 4
        first = timings[0]
        assert first.scatter == (7, 7, 5, 5)
        assert first.chase == (20, 20, 20, -1)
        assert [t.frightened for t in timings] == [6, 5, 4, 3]
        assert [t.frightened_flashes for t in timings] == [3, 4, 5, 6]

    def test_logger_called(self) -> None:
        logs: List[str] = []
        load_level_timings(logger=logs.append)
        assert logs and logs[0].startswith("[levels] loaded 4")

    def test_clamping(self) -> None:
        timings = load_level_timings()
        assert timing_for_level(timings, 0) is timings[0]
        assert timing_for_level(timings, 7) is timings[-1]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_level_timings(tmp_path / "levels.yaml")

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "levels.yaml"
        path.write_text("- scatter: [7, 7\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_level_timings(path)

    def test_mismatched_lists(self) -> None:
        with pytest.raises(ValueError):
            parse_level_timings([{"scatter": [7, 7], "chase": [20]}])

    def test_not_a_list(self) -> None:
        with pytest.raises(ValueError):
            parse_level_timings({"scatter": [7]})


class TestRoster:
    def test_packaged_roster(self) -> None:
        specs = load_roster()
        assert [s.name for s in specs] == ["lead", "ambush", "flank", "shy"]
        assert [s.rule for s in specs] == [
            TargetRule.DIRECT, TargetRule.AMBUSH, TargetRule.FLANK, TargetRule.SHY,
        ]
        assert specs[0].starts_free
        assert not any(s.starts_free for s in specs[1:])
        assert specs[0].spawn == (13, 11)

    def test_defaults(self) -> None:
        (spec,) = parse_roster([{"name": "x", "spawn": [1, 2], "corner": [3, 4]}])
        assert spec.rule is TargetRule.DIRECT
        assert not spec.starts_free
        assert spec.pellet_threshold == 0
        assert (spec.spawn, spec.corner) == ((1, 2), (3, 4))

    def test_unknown_rule(self) -> None:
        with pytest.raises(KeyError):
            parse_roster([{"name": "x", "rule": "psychic", "spawn": [1, 2], "corner": [3, 4]}])

    def test_bad_tile(self) -> None:
        with pytest.raises(ValueError):
            parse_roster([{"name": "x", "spawn": [1], "corner": [3, 4]}])

    def test_duplicate_names(self) -> None:
        entry = {"name": "x", "spawn": [1, 2], "corner": [3, 4]}
        with pytest.raises(ValueError):
            parse_roster([entry, dict(entry)])

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_roster(tmp_path / "ghosts.yaml")

    def test_load_custom_file(self, tmp_path: Path) -> None:
        path = tmp_path / "ghosts.yaml"
        path.write_text(
            "- name: solo\n  rule: shy\n  spawn: [1, 1]\n  corner: [0, 0]\n  starts_free: true\n",
            encoding="utf-8",
        )
        logs: List[str] = []
        specs = load_roster(path, logger=logs.append)
        assert specs[0].name == "solo" and specs[0].rule is TargetRule.SHY
        assert any("solo" in line for line in logs)
