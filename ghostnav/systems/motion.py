from __future__ import annotations

from typing import Callable, Optional

from pygame.math import Vector2

from ghostnav.state.direction import Direction
from ghostnav.state.grid import GridEnv

# Called when the mover lands on a tile center mid-step.  Returns a direction
# to queue (or None to keep going); may also halt() the mover.
DecideFn = Callable[[], Optional[Direction]]

_EPS = 1e-6


class GridMover:
    """Moves a point along grid corridors at a fixed speed.

    Agent-agnostic: anything with a world position and a GridEnv can use it.
    Direction changes are queued and only applied at legal decision points
    (tile centers, or immediately for a straight reversal).  Illegal requests
    are silently kept pending / dropped, and running into a wall clears the
    committed direction so the owner has to decide again.
    """

    def __init__(
        self,
        env: GridEnv,
        speed_px_per_sec: float,
        *,
        snap_tolerance: float = 0.25,
        perpendicular_snap: float = 1.5,
    ) -> None:
        self.env = env
        self.speed = speed_px_per_sec
        self.snap_tol = snap_tolerance
        self.perp_snap = perpendicular_snap
        self.dir: Optional[Direction] = None
        self.queued: Optional[Direction] = None

    # --- public API ---

    @property
    def direction(self) -> Optional[Direction]:
        return self.dir

    def queue(self, d: Direction) -> None:
        self.queued = d

    def force(self, d: Optional[Direction]) -> None:
        self.dir = d
        if d is not None:
            self.queued = None

    def halt(self) -> None:
        self.dir = None
        self.queued = None

    def set_speed(self, px_per_sec: float) -> None:
        self.speed = px_per_sec

    def at_tile_center(self, pos: Vector2) -> bool:
        cx, cy = self._center_of(pos)
        return abs(pos.x - cx) <= self.snap_tol and abs(pos.y - cy) <= self.snap_tol

    def align_to_tile_center(self, pos: Vector2) -> None:
        cx, cy = self._center_of(pos)
        pos.x = cx
        pos.y = cy

    def step(self, dt_ms: float, pos: Vector2, decide: Optional[DecideFn] = None) -> None:
        """Advance ``pos`` by dt.

        Without ``decide`` this is a single integration step.  With it, travel
        is cut at every tile center reached so the owner gets to pick a new
        direction there before the remaining distance is spent.
        """
        remaining = self.speed * dt_ms / 1000.0
        if decide is None:
            self._apply_queued(pos)
            if self.dir is not None:
                self._advance(pos, remaining, land=False)
            return

        guard = int(remaining / self.env.tile_size) * 2 + 4
        while guard > 0:
            guard -= 1
            if self.at_tile_center(pos):
                choice = decide()
                if choice is not None:
                    self.queued = choice
            self._apply_queued(pos)
            if self.dir is None or remaining <= _EPS:
                return
            to_center = self._distance_to_next_center(pos)
            travel = min(remaining, to_center)
            if not self._advance(pos, travel, land=travel >= to_center - _EPS):
                return
            remaining -= travel
            if remaining <= _EPS:
                return

    # --- internals ---

    def _center_of(self, pos: Vector2):
        tx, ty = self.env.world_to_tile(pos.x, pos.y)
        return self.env.tile_center_world(tx, ty)

    def _can_move(self, pos: Vector2, d: Direction, require_center: bool = True) -> bool:
        if require_center and not self.at_tile_center(pos):
            return False
        tx, ty = self.env.world_to_tile(pos.x, pos.y)
        nx, ny = d.step((tx, ty))
        return self.env.can_enter_tile(nx, ny)

    def _apply_queued(self, pos: Vector2) -> None:
        queued = self.queued
        if queued is None:
            return

        if self.dir is None:
            # starting from rest: ok to align
            if self._can_move(pos, queued, require_center=False):
                self.dir = queued
                self.queued = None
                self.align_to_tile_center(pos)
            return

        if queued is self.dir.opposite:
            # reversal is always instantaneous; no realignment mid-corridor
            self.dir = queued
            self.queued = None
            return

        if self._can_move(pos, queued):
            if queued is not self.dir:
                self.dir = queued
                self.align_to_tile_center(pos)
            self.queued = None

    def _distance_to_next_center(self, pos: Vector2) -> float:
        assert self.dir is not None
        ts = self.env.tile_size
        cx, cy = self._center_of(pos)
        dx, dy = self.dir.vector
        if self.dir.horizontal:
            offset = (cx - pos.x) * dx
        else:
            offset = (cy - pos.y) * dy
        # offset > 0: center still ahead of us in this tile
        if offset > self.snap_tol:
            return offset
        return offset + ts

    def _will_collide(self, next_x: float, next_y: float) -> bool:
        half = self.env.tile_size * 0.5 - 1
        assert self.dir is not None
        dx, dy = self.dir.vector
        if self.dir.horizontal:
            front_x = next_x + half * dx
            return self.env.is_blocked(front_x, next_y - half) or self.env.is_blocked(front_x, next_y + half)
        front_y = next_y + half * dy
        return self.env.is_blocked(next_x - half, front_y) or self.env.is_blocked(next_x + half, front_y)

    def _advance(self, pos: Vector2, distance: float, land: bool) -> bool:
        """Translate along dir; False when blocked (snapped + direction cleared)."""
        assert self.dir is not None
        dx, dy = self.dir.vector
        next_x = pos.x + dx * distance
        next_y = pos.y + dy * distance

        if self._will_collide(next_x, next_y):
            self.align_to_tile_center(pos)
            self.dir = None
            return False

        pos.x = next_x
        pos.y = next_y
        if land:
            # floating error must not leave us a hair short of the center
            self.align_to_tile_center(pos)
        else:
            self._snap_perpendicular(pos)
        return True

    def _snap_perpendicular(self, pos: Vector2) -> None:
        cx, cy = self._center_of(pos)
        if self.dir is None:
            return
        if self.dir.horizontal:
            if abs(pos.y - cy) < self.perp_snap:
                pos.y = cy
        elif abs(pos.x - cx) < self.perp_snap:
            pos.x = cx
