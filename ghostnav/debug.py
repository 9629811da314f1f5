"""Tracing hooks for ghost transitions and stalls.

The core never prints.  It reports to a ``GhostObserver``; the default is a
no-op, tests use the in-memory ``MessageLogObserver`` and the headless runner
can append to a debug log file.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Deque, Dict, List, Optional, Protocol, Sequence, Tuple

from ghostnav.state.direction import Tile
from ghostnav.state.modes import Mode

Logger = Callable[[str], None]


class GhostObserver(Protocol):
    def on_transition(self, name: str, old: Mode, new: Mode, reason: str) -> None: ...

    def on_stall(self, name: str, tile: Tile, mode: Mode, reasons: Sequence[str]) -> None: ...


class NullObserver:
    def on_transition(self, name: str, old: Mode, new: Mode, reason: str) -> None:
        pass

    def on_stall(self, name: str, tile: Tile, mode: Mode, reasons: Sequence[str]) -> None:
        pass


@dataclass
class MessageLog:
    capacity: int = 1000
    messages: Optional[Deque[str]] = None

    def __post_init__(self) -> None:
        # deque for O(1) append/pop with bounded history
        self.messages = deque(self.messages or (), maxlen=self.capacity)

    def add(self, text: str) -> None:
        self.messages.append(text)

    def tail(self, n: int) -> List[str]:
        if n <= 0:
            return []
        return list(self.messages)[-n:]

    def __len__(self) -> int:
        return len(self.messages)


def format_transition(name: str, old: Mode, new: Mode, reason: str) -> str:
    return f"[{name}] MODE {old.value} -> {new.value} ({reason})"


def format_stall(name: str, tile: Tile, mode: Mode, reasons: Sequence[str]) -> str:
    return f"[{name}] STALL at {tile[0]},{tile[1]} mode={mode.value} | " + " | ".join(reasons)


class LoggerObserver:
    """Forwards formatted lines to any ``logger(msg)`` callable.

    Stalls repeat every tick while a ghost is stuck; only the first report
    for a given (ghost, tile, mode) is forwarded until something changes.
    """

    def __init__(self, logger: Logger) -> None:
        self.logger = logger
        self._last_stall: Dict[str, Tuple[Tile, Mode]] = {}

    def on_transition(self, name: str, old: Mode, new: Mode, reason: str) -> None:
        self._last_stall.pop(name, None)
        self.logger(format_transition(name, old, new, reason))

    def on_stall(self, name: str, tile: Tile, mode: Mode, reasons: Sequence[str]) -> None:
        key = (tile, mode)
        if self._last_stall.get(name) == key:
            return
        self._last_stall[name] = key
        self.logger(format_stall(name, tile, mode, reasons))


class MessageLogObserver(LoggerObserver):
    def __init__(self, capacity: int = 1000) -> None:
        self.log = MessageLog(capacity=capacity)
        super().__init__(self.log.add)


class DebugFileObserver(LoggerObserver):
    def __init__(self, path: Path | str, clear: bool = True) -> None:
        self.path = Path(path)
        if clear:
            # clear debug log each run
            try:
                self.path.write_text("", encoding="utf-8")
            except OSError:
                pass
        super().__init__(self._write)

    def _write(self, msg: str) -> None:
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(msg + "\n")
        except OSError:
            pass
