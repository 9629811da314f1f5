"""Next-move selection on the tile graph."""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, List, Optional, Sequence, Set, Tuple

from ghostnav.state.direction import DIRS, Direction, Tile

CanEnter = Callable[[Tile], bool]

DEFAULT_MAX_NODES = 2048


def distance2(a: Tile, b: Tile) -> int:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def legal_moves(start: Tile, can_enter: CanEnter) -> List[Direction]:
    return [d for d in DIRS if can_enter(d.step(start))]


def bfs_first_move(
    start: Tile,
    goal: Tile,
    can_enter: CanEnter,
    forbidden: Optional[Direction] = None,
    max_nodes: int = DEFAULT_MAX_NODES,
) -> Optional[Direction]:
    """First direction of a shortest 4-neighbor path from start to goal.

    ``forbidden`` only applies to the very first step; later steps may pass
    through the tile behind us.  Returns None when start == goal or when the
    goal is not found within ``max_nodes`` expansions.
    """
    if start == goal:
        return None

    seen: Set[Tile] = {start}
    frontier: Deque[Tuple[Tile, Direction]] = deque()
    for d in DIRS:
        if d is forbidden:
            continue
        nxt = d.step(start)
        if not can_enter(nxt):
            continue
        if nxt == goal:
            return d
        seen.add(nxt)
        frontier.append((nxt, d))

    expanded = 0
    while frontier:
        tile, first = frontier.popleft()
        expanded += 1
        if expanded > max_nodes:
            return None
        for d in DIRS:
            nxt = d.step(tile)
            if nxt in seen or not can_enter(nxt):
                continue
            if nxt == goal:
                return first
            seen.add(nxt)
            frontier.append((nxt, first))
    return None


def greedy_move(start: Tile, goal: Tile, candidates: Sequence[Direction]) -> Optional[Direction]:
    """Candidate whose neighbor tile is closest (squared Euclidean) to goal."""
    best: Optional[Direction] = None
    best_dist = None
    # iterate in the fixed neighbor order so ties resolve the same way every time
    for d in DIRS:
        if d not in candidates:
            continue
        dist = distance2(d.step(start), goal)
        if best_dist is None or dist < best_dist:
            best = d
            best_dist = dist
    return best


def choose_direction(
    start: Tile,
    goal: Tile,
    can_enter: CanEnter,
    heading: Optional[Direction],
    allow_reverse: bool,
    *,
    use_bfs: bool = True,
    max_nodes: int = DEFAULT_MAX_NODES,
) -> Optional[Direction]:
    """Pick the next move from ``start`` toward ``goal``.

    The reverse of ``heading`` is ruled out unless reversal is allowed or it
    is the only legal move (dead end).  BFS is tried first; when it cannot
    reach the goal (walls, off-grid corner targets) the greedy heuristic
    decides among the legal candidates.  None only when nothing is legal.
    """
    legal = legal_moves(start, can_enter)
    if not legal:
        return None

    forbidden: Optional[Direction] = None
    if heading is not None and not allow_reverse:
        rev = heading.opposite
        if any(d is not rev for d in legal):
            forbidden = rev
    candidates = [d for d in legal if d is not forbidden]

    if use_bfs:
        d = bfs_first_move(start, goal, can_enter, forbidden=forbidden, max_nodes=max_nodes)
        if d is not None:
            return d
    return greedy_move(start, goal, candidates)
