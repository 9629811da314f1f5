"""Ghost mode state machine.

Each mode is its own frozen dataclass carrying only the data that mode needs
(the latched gate direction only exists while Releasing or Captured, the
countdown only while Frightened).  ``transition`` is a pure function from
(state, event) to the next state; an event that does not apply to the current
state returns the very same object, so callers can detect no-ops with ``is``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar, Dict, FrozenSet, Optional, Union

from ghostnav.state.direction import Direction


class Mode(Enum):
    CONFINED = "confined"
    RELEASING = "releasing"
    SCATTER = "scatter"
    CHASE = "chase"
    FRIGHTENED = "frightened"
    CAPTURED = "captured"


class Phase(Enum):
    SCATTER = "scatter"
    CHASE = "chase"

    @property
    def mode(self) -> Mode:
        return Mode.SCATTER if self is Phase.SCATTER else Mode.CHASE


# Modes allowed through gate cells.
GATE_MODES: FrozenSet[Mode] = frozenset({Mode.RELEASING, Mode.CAPTURED})

# Modes that may turn straight back at any tile center.
REVERSIBLE_MODES: FrozenSet[Mode] = frozenset({Mode.RELEASING, Mode.FRIGHTENED, Mode.CAPTURED})


# --- states ---------------------------------------------------------------


@dataclass(frozen=True)
class Confined:
    mode: ClassVar[Mode] = Mode.CONFINED


@dataclass(frozen=True)
class Releasing:
    gate_entered: bool = False
    exit_dir: Optional[Direction] = None
    mode: ClassVar[Mode] = Mode.RELEASING


@dataclass(frozen=True)
class Scatter:
    mode: ClassVar[Mode] = Mode.SCATTER


@dataclass(frozen=True)
class Chase:
    mode: ClassVar[Mode] = Mode.CHASE


@dataclass(frozen=True)
class Frightened:
    remaining_ms: float
    mode: ClassVar[Mode] = Mode.FRIGHTENED


@dataclass(frozen=True)
class Captured:
    gate_entered: bool = False
    entry_dir: Optional[Direction] = None
    mode: ClassVar[Mode] = Mode.CAPTURED


GhostState = Union[Confined, Releasing, Scatter, Chase, Frightened, Captured]


# --- events ---------------------------------------------------------------


@dataclass(frozen=True)
class Release:
    pass


@dataclass(frozen=True)
class Frighten:
    duration_ms: float


@dataclass(frozen=True)
class Capture:
    pass


@dataclass(frozen=True)
class PhaseTick:
    """The scheduler's phase for this tick; Scatter/Chase follow it."""
    phase: Phase


@dataclass(frozen=True)
class Elapsed:
    """Time passing; drives the frightened countdown."""
    dt_ms: float
    phase: Phase


@dataclass(frozen=True)
class EnteredGate:
    direction: Direction


@dataclass(frozen=True)
class LeftGate:
    phase: Phase


@dataclass(frozen=True)
class ReachedPen:
    pass


Event = Union[Release, Frighten, Capture, PhaseTick, Elapsed, EnteredGate, LeftGate, ReachedPen]


def state_for_phase(phase: Phase) -> GhostState:
    return Scatter() if phase is Phase.SCATTER else Chase()


def initial_state(starts_free: bool, phase: Phase = Phase.SCATTER) -> GhostState:
    return state_for_phase(phase) if starts_free else Confined()


def transition(state: GhostState, event: Event) -> GhostState:
    if isinstance(event, Release):
        if isinstance(state, Confined):
            return Releasing()
        return state

    if isinstance(event, Frighten):
        if isinstance(state, (Scatter, Chase)):
            return Frightened(remaining_ms=event.duration_ms)
        return state

    if isinstance(event, Capture):
        if isinstance(state, (Captured, Confined)):
            return state
        return Captured()

    if isinstance(event, PhaseTick):
        if isinstance(state, (Scatter, Chase)) and state.mode is not event.phase.mode:
            return state_for_phase(event.phase)
        return state

    if isinstance(event, Elapsed):
        if isinstance(state, Frightened):
            remaining = state.remaining_ms - event.dt_ms
            if remaining <= 0:
                return state_for_phase(event.phase)
            return replace(state, remaining_ms=remaining)
        return state

    if isinstance(event, EnteredGate):
        if isinstance(state, Releasing):
            if state.exit_dir is not None:
                return state
            return Releasing(gate_entered=True, exit_dir=event.direction)
        if isinstance(state, Captured):
            if state.entry_dir is not None:
                return state
            return Captured(gate_entered=True, entry_dir=event.direction)
        return state

    if isinstance(event, LeftGate):
        if isinstance(state, Releasing) and state.gate_entered:
            return state_for_phase(event.phase)
        return state

    if isinstance(event, ReachedPen):
        if isinstance(state, Captured):
            return Confined()
        return state

    return state


# Per-mode policy lookups, kept in one place so ghost code never branches on
# ad-hoc flags.
def passes_gate(mode: Mode) -> bool:
    return mode in GATE_MODES


def reverse_allowed(mode: Mode) -> bool:
    return mode in REVERSIBLE_MODES


MODE_LABELS: Dict[Mode, str] = {
    Mode.CONFINED: "in pen",
    Mode.RELEASING: "leaving pen",
    Mode.SCATTER: "scatter",
    Mode.CHASE: "chase",
    Mode.FRIGHTENED: "frightened",
    Mode.CAPTURED: "returning",
}
