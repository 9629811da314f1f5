"""Per-round Scatter/Chase clock with a frightened override."""

from __future__ import annotations

from typing import Optional, Sequence

from ghostnav.content.levels import LevelTiming, load_level_timings, timing_for_level
from ghostnav.state.modes import Phase


class ModeScheduler:
    """Tracks which Scatter/Chase phase the level is in.

    While a frightened override is running the clock does not advance, so
    ghosts come back from Frightened into the phase they left.  ``pause``
    freezes the clock entirely (ready screen, death animation).
    """

    def __init__(self, level: int = 1, timings: Optional[Sequence[LevelTiming]] = None) -> None:
        self.timings = list(timings) if timings is not None else load_level_timings()
        self.level = level
        self.elapsed_ms = 0.0
        self.override_ms = 0.0
        self.paused = False
        self._index = 0

    # --- properties ---

    @property
    def timing(self) -> LevelTiming:
        return timing_for_level(self.timings, self.level)

    @property
    def phase_index(self) -> int:
        return self._index

    @property
    def frightened_active(self) -> bool:
        return self.override_ms > 0

    @property
    def phase(self) -> Phase:
        scatter = self.timing.scatter[self._index]
        if scatter > 0 and self.elapsed_ms < scatter * 1000.0:
            return Phase.SCATTER
        return Phase.CHASE

    # --- clock ---

    def tick(self, dt_ms: float) -> Phase:
        if self.paused:
            return self.phase

        if self.override_ms > 0:
            self.override_ms = max(0.0, self.override_ms - dt_ms)
            return self.phase

        self.elapsed_ms += dt_ms
        cfg = self.timing
        last = len(cfg.scatter) - 1
        while self._index < last:
            cycle = max(cfg.scatter[self._index], 0) + max(cfg.chase[self._index], 0)
            if self.elapsed_ms < cycle * 1000.0:
                break
            self._index += 1
            self.elapsed_ms = 0.0
        return self.phase

    def start_frightened_override(self, seconds: float) -> None:
        self.override_ms = max(self.override_ms, seconds * 1000.0)

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def reset(self, level: Optional[int] = None) -> None:
        if level is not None:
            self.level = level
        self._index = 0
        self.elapsed_ms = 0.0
        self.override_ms = 0.0
        self.paused = False

    # --- timetable lookups ---

    def frightened_seconds(self, level: Optional[int] = None) -> float:
        return timing_for_level(self.timings, self.level if level is None else level).frightened

    def frightened_flashes(self, level: Optional[int] = None) -> int:
        return timing_for_level(self.timings, self.level if level is None else level).frightened_flashes
