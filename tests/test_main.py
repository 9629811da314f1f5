"""Smoke tests for the headless runner."""

from __future__ import annotations

from pathlib import Path

from ghostnav.main import main, parse_args


class TestMain:
    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.seconds == 30.0
        assert args.level == 1
        assert tuple(args.player) == (13, 23)

    def test_prints_once_per_second(self, capsys) -> None:
        main(["--seconds", "2"])
        out = capsys.readouterr().out
        assert "t=  1s phase=scatter" in out
        assert "t=  2s phase=scatter" in out
        assert out.count("lead") == 2

    def test_debug_log_and_power_pellet(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "debug.log"
        main(["--seconds", "3", "--power-at", "1", "--debug-log", str(path)])
        capsys.readouterr()
        text = path.read_text(encoding="utf-8")
        assert "[ambush] MODE confined -> releasing (release)" in text
        assert "[lead] MODE scatter -> frightened" in text
