from __future__ import annotations

from typing import Optional, Sequence

from .layout import Color, HintMove, Layout, clone_layout, is_powered
from .moves import apply_move, legal_moves

EMPTY_CONDUIT_REWARD = 4
RUN_WEIGHT = 3
POWERED_BONUS = 100
DEAD_END_PENALTY = 25


def evaluate_layout(conduits: Sequence[Sequence[Color]], max_cores: int) -> int:
    """Static heuristic: rewards free conduits, same-color runs and solved conduits.

    Not a distance estimate; higher is merely more promising.
    """
    score = 0
    for conduit in conduits:
        if not conduit:
            score += EMPTY_CONDUIT_REWARD
            continue
        base = conduit[0]
        score += RUN_WEIGHT * sum(1 for core in conduit if core == base)
        if is_powered(conduit, max_cores):
            score += POWERED_BONUS
    return score


def search_score(conduits: Layout, max_cores: int, depth: int) -> int:
    """Best score reachable within `depth` further moves (single agent, max only)."""
    current = evaluate_layout(conduits, max_cores)
    if depth <= 0:
        return current
    moves = legal_moves(conduits, max_cores)
    if not moves:
        return current - DEAD_END_PENALTY
    best = None
    for move in moves:
        child = clone_layout(conduits)
        apply_move(child, move)
        score = search_score(child, max_cores, depth - 1)
        if best is None or score > best:
            best = score
    return best


def find_best_hint_move(conduits: Sequence[Sequence[Color]], max_cores: int, depth: int = 2) -> Optional[HintMove]:
    """
    Recommends the move whose resulting position scores highest. The
    candidate move itself counts as the first of `depth` plies, so depths 0
    and 1 both judge a candidate by the static evaluation of the position it
    produces. Ties go to the first move enumerated. Returns None when no
    legal move exists.

    Cost grows as (legal moves) ** depth; depths of 2-3 are practical.
    """
    if depth < 0:
        raise ValueError('depth must be >= 0')
    root = clone_layout(conduits)
    best: Optional[HintMove] = None
    for move in legal_moves(root, max_cores):
        child = clone_layout(root)
        apply_move(child, move)
        score = search_score(child, max_cores, max(depth - 1, 0))
        if best is None or score > best.score:
            best = HintMove(move.source, move.target, float(score))
    return best
