from __future__ import annotations

from typing import List, Sequence

from .layout import Color, Layout, Move, is_uniform


def in_range(conduits: Sequence[Sequence[Color]], index: int) -> bool:
    """Rejects out-of-range and negative indices so they never wrap around."""
    return 0 <= index < len(conduits)


def can_move_on(conduits: Sequence[Sequence[Color]], max_cores: int, source: int, target: int) -> bool:
    """Determines whether the top core of `source` may be placed on `target`."""
    if source == target:
        return False
    if not in_range(conduits, source) or not in_range(conduits, target):
        return False
    src = conduits[source]
    dst = conduits[target]
    if not src:
        return False
    if len(dst) >= max_cores:
        return False
    if dst and dst[-1] != src[-1]:
        return False
    # A solved conduit is never emptied into free space.
    if not dst and len(src) == max_cores and is_uniform(src):
        return False
    return True


def legal_moves(conduits: Sequence[Sequence[Color]], max_cores: int) -> List[Move]:
    """Enumerates every legal move, source-major then target order."""
    count = len(conduits)
    return [
        Move(source, target)
        for source in range(count)
        for target in range(count)
        if can_move_on(conduits, max_cores, source, target)
    ]


def apply_move(conduits: Layout, move: Move) -> None:
    """Applies a move in place. Callers work on clones and validate first."""
    conduits[move.target].append(conduits[move.source].pop())
