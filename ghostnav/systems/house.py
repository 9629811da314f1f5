"""Decides when confined ghosts leave the pen.

Three triggers, all on the round clock:

* pellet thresholds: a ghost leaves once the round's pellet count reaches its
  threshold (once per life);
* idle timer: if no pellet is eaten for ``idle_release_ms`` the next confined
  ghost in roster order is let out;
* returns: a captured ghost that made it back into the pen is re-released
  ``return_release_delay_ms`` later.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set

from ghostnav.config import GameConfig
from ghostnav.debug import Logger
from ghostnav.state.ghost import Ghost
from ghostnav.state.modes import Mode
from ghostnav.systems.timers import TickScheduler


class HouseController:
    def __init__(
        self,
        ghosts: Sequence[Ghost],
        thresholds: Optional[Dict[str, int]] = None,
        cfg: Optional[GameConfig] = None,
        timers: Optional[TickScheduler] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self.ghosts: List[Ghost] = list(ghosts)
        self.thresholds: Dict[str, int] = dict(thresholds or {})
        self.cfg = cfg or GameConfig()
        self.timers = timers or TickScheduler()
        self.logger = logger
        self.pellets = 0
        self.idle_ms = 0.0
        self._threshold_done: Set[str] = set()
        self._last_mode: Dict[str, Mode] = {g.name: g.current_mode() for g in self.ghosts}

    def _log(self, msg: str) -> None:
        if self.logger:
            self.logger(msg)

    # --- triggers ---

    def pellet_eaten(self) -> None:
        self.pellets += 1
        self.idle_ms = 0.0
        self._check_thresholds()

    def update(self, dt_ms: float) -> None:
        self.timers.advance(dt_ms)
        self._watch_returns()
        self._check_thresholds()

        self.idle_ms += dt_ms
        if self.idle_ms >= self.cfg.idle_release_ms:
            self.idle_ms = 0.0
            ghost = self._next_waiting()
            if ghost is not None:
                self._release(ghost, "idle timer")

    def reset(self, clear_pellets: bool = False) -> None:
        self.timers.clear()
        self.idle_ms = 0.0
        self._threshold_done.clear()
        if clear_pellets:
            self.pellets = 0
        self._last_mode = {g.name: g.current_mode() for g in self.ghosts}

    # --- internals ---

    def _release(self, ghost: Ghost, reason: str) -> None:
        if ghost.current_mode() is not Mode.CONFINED:
            return
        self.timers.cancel(ghost.name)
        self._threshold_done.add(ghost.name)
        self._log(f"[house] releasing {ghost.name} ({reason})")
        ghost.release()

    def _next_waiting(self) -> Optional[Ghost]:
        for ghost in self.ghosts:
            if ghost.current_mode() is Mode.CONFINED and not self.timers.pending(ghost.name):
                return ghost
        return None

    def _check_thresholds(self) -> None:
        for ghost in self.ghosts:
            if ghost.name in self._threshold_done or ghost.name not in self.thresholds:
                continue
            if self.pellets >= self.thresholds[ghost.name]:
                self._release(ghost, f"pellets {self.pellets} >= {self.thresholds[ghost.name]}")

    def _watch_returns(self) -> None:
        for ghost in self.ghosts:
            mode = ghost.current_mode()
            prev = self._last_mode.get(ghost.name)
            self._last_mode[ghost.name] = mode
            if prev is Mode.CAPTURED and mode is Mode.CONFINED and not self.timers.pending(ghost.name):
                self._log(f"[house] {ghost.name} back in pen; release in {self.cfg.return_release_delay_ms} ms")
                self.timers.schedule(
                    self.cfg.return_release_delay_ms,
                    ghost.name,
                    lambda g=ghost: self._release(g, "returned to pen"),
                )
