from __future__ import annotations

import random
from typing import Optional, Tuple

from pygame.math import Vector2

from ghostnav.config import GameConfig
from ghostnav.debug import GhostObserver, NullObserver
from ghostnav.rng import new_rng
from ghostnav.state.direction import DIRS, Direction, Tile
from ghostnav.state.grid import GhostGridEnv, Grid, block_reason
from ghostnav.state.modes import (
    Capture,
    Captured,
    Confined,
    Elapsed,
    EnteredGate,
    Event,
    Frighten,
    Frightened,
    GhostState,
    LeftGate,
    Mode,
    Phase,
    PhaseTick,
    ReachedPen,
    Release,
    Releasing,
    initial_state,
    reverse_allowed,
    transition,
)
from ghostnav.systems.motion import GridMover
from ghostnav.systems.pathing import choose_direction
from ghostnav.systems.targeting import (
    Facing,
    RuleParams,
    TargetInputs,
    TargetRule,
    chase_target,
    wander_target,
)


class Ghost:
    """One ghost: mode state machine + targeting + a GridMover.

    The owning loop calls ``update`` once per tick; everything else is either
    a command (release / frighten / capture / freeze) that takes effect from
    the next tick, or a read-only query.
    """

    def __init__(
        self,
        name: str,
        grid: Grid,
        spawn: Tile,
        scatter_corner: Tile,
        rule: TargetRule = TargetRule.DIRECT,
        *,
        cfg: Optional[GameConfig] = None,
        base_speed: Optional[float] = None,
        starts_free: bool = False,
        rng: Optional[random.Random] = None,
        observer: Optional[GhostObserver] = None,
    ) -> None:
        self.cfg = cfg or GameConfig()
        self.name = name
        self.grid = grid
        self.spawn = spawn
        self.scatter_corner = scatter_corner
        self.rule = rule
        self.starts_free = starts_free
        self.base_speed = base_speed if base_speed is not None else self.cfg.base_speed
        self.rule_params = RuleParams(
            ambush_lead=self.cfg.ambush_lead,
            flank_lead=self.cfg.flank_lead,
            shy_radius=self.cfg.shy_radius,
        )
        self.rng = rng if rng is not None else new_rng(self.cfg.seed)
        self.observer: GhostObserver = observer or NullObserver()

        self.state: GhostState = initial_state(starts_free)
        self.env = GhostGridEnv(grid, self.current_mode)
        self.mover = GridMover(
            self.env,
            self.base_speed,
            snap_tolerance=self.cfg.center_tolerance,
            perpendicular_snap=self.cfg.perpendicular_snap,
        )
        self.pos = Vector2(grid.tile_center_world(*spawn))
        self.frozen = False
        # last committed direction; the no-reversal rule still applies after a stop
        self.heading: Optional[Direction] = None
        self.goal: Optional[Tile] = None
        # captured ghosts always latch toward the holding area
        self._inward = grid.pen_side()

        self._reverse_pending = False
        self._decided_at: Optional[Tile] = None
        # per-tick inputs, read by the center callback
        self._phase = Phase.SCATTER
        self._target_tile: Tile = spawn
        self._target_facing: Facing = (0, 0)
        self._reference_tile: Tile = spawn

    # --- queries ---

    def current_mode(self) -> Mode:
        return self.state.mode

    def current_tile(self) -> Tile:
        return self.grid.world_to_tile(self.pos.x, self.pos.y)

    def world_position(self) -> Tuple[float, float]:
        return (self.pos.x, self.pos.y)

    @property
    def direction(self) -> Optional[Direction]:
        return self.mover.direction

    def frightened_remaining_ms(self) -> float:
        if isinstance(self.state, Frightened):
            return self.state.remaining_ms
        return 0.0

    def is_in_pen(self) -> bool:
        return isinstance(self.state, (Confined, Releasing))

    # --- commands ---

    def release(self) -> None:
        self._apply(Release(), "release")

    def frighten(self, seconds: float) -> None:
        self._apply(Frighten(seconds * 1000.0), f"frighten({seconds}s)")

    def capture(self) -> None:
        self._apply(Capture(), "captured")

    def freeze(self, frozen: bool) -> None:
        self.frozen = frozen

    def reset(self) -> None:
        """Back to spawn and initial mode (round restart / life lost)."""
        old = self.state.mode
        self.state = initial_state(self.starts_free)
        self.pos.update(self.grid.tile_center_world(*self.spawn))
        self.mover.halt()
        self.heading = None
        self.goal = None
        self.frozen = False
        self._reverse_pending = False
        self._decided_at = None
        if old is not self.state.mode:
            self.observer.on_transition(self.name, old, self.state.mode, "reset")

    # --- tick ---

    def update(
        self,
        dt_ms: float,
        phase: Phase,
        target_tile: Tile,
        target_facing: Facing,
        reference_tile: Tile,
    ) -> None:
        if self.frozen:
            return

        self._phase = phase
        self._target_tile = target_tile
        self._target_facing = target_facing
        self._reference_tile = reference_tile

        if isinstance(self.state, Frightened):
            self._apply(Elapsed(dt_ms, phase), "frightened timeout")
        else:
            self._apply(PhaseTick(phase), "scheduler tick")

        self._track_gate()
        self.mover.set_speed(self.base_speed * self.cfg.speed_multiplier(self.state.mode))

        if self._reverse_pending and not self.mover.at_tile_center(self.pos):
            self._reverse_pending = False
            if self.mover.direction is not None:
                self.mover.queue(self.mover.direction.opposite)
                self._decided_at = None

        self.mover.step(dt_ms, self.pos, decide=self._on_tile_center)
        if self.mover.direction is not None:
            self.heading = self.mover.direction
        self._track_gate()

    # --- state machine plumbing ---

    def _apply(self, event: Event, reason: str) -> None:
        old = self.state
        new = transition(old, event)
        if new is old:
            return
        self.state = new
        if new.mode is old.mode:
            # latch update inside the same mode
            return
        self._decided_at = None
        if isinstance(new, (Frightened, Captured)):
            self._reverse_pending = True
        elif isinstance(new, Confined):
            self._reverse_pending = False
            self.mover.halt()
        self.observer.on_transition(self.name, old.mode, new.mode, reason)

    def _in_gate(self) -> bool:
        return self.grid.gate_contains(self.pos.x, self.pos.y)

    def _through_direction(self) -> Direction:
        """Which way a ghost in the gate keeps going: away from the side it came from."""
        cy = self.grid.gate_center_y
        if self.pos.y < cy:
            return Direction.DOWN
        if self.pos.y > cy:
            return Direction.UP
        if self.heading in (Direction.UP, Direction.DOWN):
            return self.heading
        return Direction.DOWN

    def _track_gate(self) -> None:
        if not self._in_gate():
            return
        if isinstance(self.state, Releasing):
            self._apply(EnteredGate(self._through_direction()), "gate latch")
        elif isinstance(self.state, Captured):
            self._apply(EnteredGate(self._inward), "gate latch")

    def _pen_tile(self, state: Captured) -> Tile:
        gate = self.grid.gate_tile()
        return state.entry_dir.step(gate) if state.entry_dir is not None else gate

    # --- decisions ---

    def _on_tile_center(self) -> Optional[Direction]:
        tile = self.current_tile()
        self._track_gate()

        state = self.state
        if isinstance(state, Releasing) and state.gate_entered and not self._in_gate():
            self._apply(LeftGate(self._phase), "exited gate after entering it")
        elif isinstance(state, Captured) and state.gate_entered and tile == self._pen_tile(state):
            self._apply(ReachedPen(), "reached inner pen tile")

        if isinstance(self.state, Confined):
            self.mover.halt()
            self.goal = tile
            return None

        if self.mover.direction is not None and tile == self._decided_at:
            return None
        self._decided_at = tile
        return self._decide(tile)

    def _can_enter(self, tile: Tile) -> bool:
        return self.grid.is_enterable(tile[0], tile[1], self.state.mode)

    def _goal(self, tile: Tile) -> Tile:
        state = self.state
        if isinstance(state, Releasing):
            gate = self.grid.gate_tile()
            if self._in_gate() and state.exit_dir is not None:
                return state.exit_dir.step(gate)
            return gate
        if isinstance(state, Captured):
            if state.gate_entered:
                return self._pen_tile(state)
            return self.grid.gate_tile()
        if isinstance(state, Frightened):
            return wander_target(self._target_tile, self.rng, self.cfg.wander_radius)
        mode = state.mode
        if mode is Mode.SCATTER:
            return self.scatter_corner
        if mode is Mode.CHASE:
            inputs = TargetInputs(
                target_tile=self._target_tile,
                target_facing=self._target_facing,
                reference_tile=self._reference_tile,
                own_tile=tile,
                scatter_corner=self.scatter_corner,
            )
            return chase_target(self.rule, inputs, self.rule_params)
        return tile

    def _decide(self, tile: Tile) -> Optional[Direction]:
        if self._reverse_pending:
            self._reverse_pending = False
            if self.heading is not None:
                rev = self.heading.opposite
                if self._can_enter(rev.step(tile)):
                    return rev

        goal = self._goal(tile)
        self.goal = goal
        mode = self.state.mode

        state = self.state
        if isinstance(state, Releasing) and state.exit_dir is not None and self._in_gate():
            if self._can_enter(state.exit_dir.step(tile)):
                return state.exit_dir

        d = choose_direction(
            tile,
            goal,
            self._can_enter,
            self.heading,
            reverse_allowed(mode),
            use_bfs=self.cfg.use_bfs,
            max_nodes=self.cfg.bfs_max_nodes,
        )
        if d is None:
            reasons = []
            for nd in DIRS:
                nx, ny = nd.step(tile)
                reasons.append(f"{nd.value} -> {block_reason(self.grid, nx, ny, mode)}")
            self.observer.on_stall(self.name, tile, mode, reasons)
        return d

    def __repr__(self) -> str:
        tx, ty = self.current_tile()
        return f"Ghost({self.name!r}, mode={self.state.mode.value}, tile=({tx},{ty}))"
