"""One round of play: scheduler, pen controller and the ghost roster."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ghostnav import mapgen
from ghostnav.config import GameConfig
from ghostnav.content.levels import LevelTiming
from ghostnav.content.roster import GhostSpec, load_roster
from ghostnav.debug import GhostObserver, Logger, NullObserver
from ghostnav.rng import derive_rng, new_rng
from ghostnav.state.direction import Tile
from ghostnav.state.ghost import Ghost
from ghostnav.state.grid import Grid
from ghostnav.state.modes import Mode, Phase
from ghostnav.systems.house import HouseController
from ghostnav.systems.scheduler import ModeScheduler
from ghostnav.systems.targeting import Facing


class Round:
    def __init__(
        self,
        grid: Optional[Grid] = None,
        cfg: Optional[GameConfig] = None,
        level: int = 1,
        roster: Optional[Sequence[GhostSpec]] = None,
        timings: Optional[Sequence[LevelTiming]] = None,
        observer: Optional[GhostObserver] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self.cfg = cfg or GameConfig()
        self.grid = grid or mapgen.load_default_maze(self.cfg.tile_size)
        self.level = level
        self.observer: GhostObserver = observer or NullObserver()
        self.logger = logger
        self.specs: List[GhostSpec] = list(roster) if roster is not None else load_roster(logger=logger)
        if not self.specs:
            raise ValueError("Round needs at least one ghost")

        self.rng = new_rng(self.cfg.seed)
        self.scheduler = ModeScheduler(level, timings)
        self.ghosts: List[Ghost] = [
            Ghost(
                spec.name,
                self.grid,
                spec.spawn,
                spec.corner,
                spec.rule,
                cfg=self.cfg,
                starts_free=spec.starts_free,
                rng=derive_rng(self.rng, spec.name),
                observer=self.observer,
            )
            for spec in self.specs
        ]
        self._by_name: Dict[str, Ghost] = {g.name: g for g in self.ghosts}
        thresholds = {s.name: s.pellet_threshold for s in self.specs if not s.starts_free}
        self.house = HouseController(self.ghosts, thresholds, self.cfg, logger=logger)
        self.phase: Phase = self.scheduler.phase
        self.elapsed_ms = 0.0

    def _log(self, msg: str) -> None:
        if self.logger:
            self.logger(msg)

    @property
    def lead(self) -> Ghost:
        return self.ghosts[0]

    # --- per tick ---

    def tick(self, dt_ms: float, target_tile: Tile, target_facing: Facing = (0, 0)) -> Phase:
        self.phase = self.scheduler.tick(dt_ms)
        if self.scheduler.paused:
            return self.phase

        self.elapsed_ms += dt_ms
        self.house.update(dt_ms)
        for ghost in self.ghosts:
            # later ghosts see where the lead ended up this tick
            ghost.update(dt_ms, self.phase, target_tile, target_facing, self.lead.current_tile())
        return self.phase

    # --- game events ---

    def power_pellet(self) -> float:
        seconds = self.scheduler.frightened_seconds()
        self._log(f"[round] power pellet: frightened for {seconds}s")
        self.scheduler.start_frightened_override(seconds)
        for ghost in self.ghosts:
            ghost.frighten(seconds)
        return seconds

    def pellet_eaten(self) -> None:
        self.house.pellet_eaten()

    def capture(self, name: str) -> bool:
        ghost = self.ghost(name)
        ghost.capture()
        return ghost.current_mode() is Mode.CAPTURED

    def ghosts_at(self, tile: Tile) -> List[Ghost]:
        return [g for g in self.ghosts if g.current_tile() == tile]

    def lose_life(self) -> None:
        self._log("[round] life lost; ghosts back to spawn")
        for ghost in self.ghosts:
            ghost.reset()
        self.house.reset()
        self.scheduler.pause()

    def resume(self) -> None:
        self.scheduler.resume()

    def start_level(self, level: int) -> None:
        self._log(f"[round] starting level {level}")
        self.level = level
        self.scheduler.reset(level)
        for ghost in self.ghosts:
            ghost.reset()
        self.house.reset(clear_pellets=True)
        self.phase = self.scheduler.phase
        self.elapsed_ms = 0.0

    # --- queries ---

    def ghost(self, name: str) -> Ghost:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown ghost '{name}'") from None

    def modes(self) -> Dict[str, Mode]:
        return {g.name: g.current_mode() for g in self.ghosts}
