"""Tests for tracing observers and the message log."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ghostnav.debug import (
    DebugFileObserver,
    LoggerObserver,
    MessageLog,
    MessageLogObserver,
    format_stall,
    format_transition,
)
from ghostnav.state.modes import Mode


class TestMessageLog:
    def test_bounded(self) -> None:
        log = MessageLog(capacity=3)
        for i in range(5):
            log.add(str(i))
        assert len(log) == 3
        assert log.tail(2) == ["3", "4"]
        assert log.tail(0) == []


class TestFormatting:
    def test_transition_line(self) -> None:
        line = format_transition("lead", Mode.SCATTER, Mode.FRIGHTENED, "frighten(6s)")
        assert line == "[lead] MODE scatter -> frightened (frighten(6s))"

    def test_stall_line(self) -> None:
        line = format_stall("shy", (3, 4), Mode.CHASE, ["up -> wall", "left -> open"])
        assert line == "[shy] STALL at 3,4 mode=chase | up -> wall | left -> open"


class TestLoggerObserver:
    def test_repeated_stalls_collapse(self) -> None:
        lines: List[str] = []
        obs = LoggerObserver(lines.append)
        for _ in range(5):
            obs.on_stall("a", (1, 1), Mode.SCATTER, ["up -> wall"])
        assert len(lines) == 1
        obs.on_stall("a", (1, 2), Mode.SCATTER, ["up -> wall"])
        assert len(lines) == 2
        # another ghost has its own memory
        obs.on_stall("b", (1, 2), Mode.SCATTER, ["up -> wall"])
        assert len(lines) == 3

    def test_transition_rearms_stall_reports(self) -> None:
        lines: List[str] = []
        obs = LoggerObserver(lines.append)
        obs.on_stall("a", (1, 1), Mode.SCATTER, [])
        obs.on_transition("a", Mode.SCATTER, Mode.CHASE, "scheduler tick")
        obs.on_stall("a", (1, 1), Mode.SCATTER, [])
        assert len(lines) == 3

    def test_message_log_observer(self) -> None:
        obs = MessageLogObserver(capacity=10)
        obs.on_transition("a", Mode.CONFINED, Mode.RELEASING, "release")
        assert obs.log.tail(1) == ["[a] MODE confined -> releasing (release)"]


class TestDebugFileObserver:
    def test_appends_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "debug.log"
        path.write_text("old run\n", encoding="utf-8")
        obs = DebugFileObserver(path)
        obs.on_transition("a", Mode.CHASE, Mode.CAPTURED, "captured")
        obs.on_transition("a", Mode.CAPTURED, Mode.CONFINED, "reached inner pen tile")
        assert path.read_text(encoding="utf-8").splitlines() == [
            "[a] MODE chase -> captured (captured)",
            "[a] MODE captured -> confined (reached inner pen tile)",
        ]

    def test_keeps_existing_log_when_asked(self, tmp_path: Path) -> None:
        path = tmp_path / "debug.log"
        path.write_text("old run\n", encoding="utf-8")
        DebugFileObserver(path, clear=False).on_transition("a", Mode.CHASE, Mode.SCATTER, "x")
        assert path.read_text(encoding="utf-8").splitlines()[0] == "old run"

    def test_unwritable_path_is_ignored(self, tmp_path: Path) -> None:
        obs = DebugFileObserver(tmp_path / "missing" / "debug.log")
        obs.on_transition("a", Mode.CHASE, Mode.SCATTER, "x")
