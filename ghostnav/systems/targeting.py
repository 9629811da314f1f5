"""Chase-target rules and the frightened wander target.

Each rule is a plain function of the same inputs; ``chase_target`` dispatches
on the ghost's ``TargetRule`` tag, so ghosts differ only by data.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple

from ghostnav.state.direction import Tile

Facing = Tuple[int, int]


class TargetRule(Enum):
    DIRECT = "direct"    # straight at the player
    AMBUSH = "ambush"    # aim ahead of the player
    FLANK = "flank"      # mirror the lead ghost through a point ahead of the player
    SHY = "shy"          # chase from afar, retreat to corner when close


@dataclass(frozen=True)
class TargetInputs:
    target_tile: Tile
    target_facing: Facing
    reference_tile: Tile
    own_tile: Tile
    scatter_corner: Tile


@dataclass(frozen=True)
class RuleParams:
    ambush_lead: int = 4
    flank_lead: int = 2
    shy_radius: int = 8


def _direct(inp: TargetInputs, params: RuleParams) -> Tile:
    return inp.target_tile


def _ambush(inp: TargetInputs, params: RuleParams) -> Tile:
    fx, fy = inp.target_facing
    off_x = fx * params.ambush_lead
    off_y = fy * params.ambush_lead
    # Arcade quirk: facing up also shifts the aim the same distance left.
    if fy < 0 and fx == 0:
        off_x -= params.ambush_lead
    return (inp.target_tile[0] + off_x, inp.target_tile[1] + off_y)


def _flank(inp: TargetInputs, params: RuleParams) -> Tile:
    fx, fy = inp.target_facing
    ahead = (inp.target_tile[0] + fx * params.flank_lead, inp.target_tile[1] + fy * params.flank_lead)
    rx, ry = inp.reference_tile
    return (rx + (ahead[0] - rx) * 2, ry + (ahead[1] - ry) * 2)


def _shy(inp: TargetInputs, params: RuleParams) -> Tile:
    dx = inp.own_tile[0] - inp.target_tile[0]
    dy = inp.own_tile[1] - inp.target_tile[1]
    if dx * dx + dy * dy >= params.shy_radius * params.shy_radius:
        return inp.target_tile
    return inp.scatter_corner


RULES: Dict[TargetRule, Callable[[TargetInputs, RuleParams], Tile]] = {
    TargetRule.DIRECT: _direct,
    TargetRule.AMBUSH: _ambush,
    TargetRule.FLANK: _flank,
    TargetRule.SHY: _shy,
}


def chase_target(rule: TargetRule, inp: TargetInputs, params: RuleParams = RuleParams()) -> Tile:
    return RULES[rule](inp, params)


def parse_rule(name: str) -> TargetRule:
    try:
        return TargetRule(str(name).lower())
    except ValueError:
        raise KeyError(f"Unknown targeting rule '{name}'") from None


def wander_target(target_tile: Tile, rng: random.Random, radius: int = 7) -> Tile:
    """Random tile within +/- radius of the player (frightened mode)."""
    span = radius * 2
    return (
        target_tile[0] + int(round((rng.random() - 0.5) * span)),
        target_tile[1] + int(round((rng.random() - 0.5) * span)),
    )
