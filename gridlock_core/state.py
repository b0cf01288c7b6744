from __future__ import annotations

from typing import List, Optional

from .layout import Color, Layout, LevelDefinition, Move, clone_layout, is_uniform, top_core
from .moves import apply_move, can_move_on, in_range


class ConduitState:
    """Owns the live stacks of one play session and is the only code that mutates them.

    Accessors hand out copies; nothing outside this class can alias the
    internal lists.
    """

    def __init__(self) -> None:
        self._level: Optional[LevelDefinition] = None
        self._conduits: Layout = []
        self._initial: Layout = []
        self._max_cores = 0
        self._history: List[Move] = []
        self._move_count = 0

    def init_level(self, level: LevelDefinition) -> None:
        self._level = level
        self._max_cores = level.max_cores
        self._conduits = clone_layout(level.conduits)
        self._initial = clone_layout(level.conduits)
        self._history = []
        self._move_count = 0

    @property
    def current_level(self) -> Optional[LevelDefinition]:
        return self._level

    @property
    def max_cores(self) -> int:
        return self._max_cores

    @property
    def move_count(self) -> int:
        return self._move_count

    def get_conduits(self) -> Layout:
        return clone_layout(self._conduits)

    def get_initial_layout(self) -> Layout:
        return clone_layout(self._initial)

    def get_history(self) -> List[Move]:
        return list(self._history)

    def can_undo(self) -> bool:
        return len(self._history) > 0

    def get_top_core(self, index: int) -> Optional[Color]:
        if not in_range(self._conduits, index):
            return None
        return top_core(self._conduits[index])

    # Out-of-range indices name no conduit, so every query below answers False.

    def is_conduit_full(self, index: int) -> bool:
        if not in_range(self._conduits, index):
            return False
        return len(self._conduits[index]) >= self._max_cores

    def is_conduit_empty(self, index: int) -> bool:
        if not in_range(self._conduits, index):
            return False
        return len(self._conduits[index]) == 0

    def is_conduit_uniform(self, index: int) -> bool:
        if not in_range(self._conduits, index):
            return False
        return is_uniform(self._conduits[index])

    def can_move(self, source: int, target: int) -> bool:
        return can_move_on(self._conduits, self._max_cores, source, target)

    def move_core(self, source: int, target: int) -> bool:
        """Moves the top core of `source` onto `target`. All-or-nothing."""
        if not self.can_move(source, target):
            return False
        move = Move(source, target)
        apply_move(self._conduits, move)
        self._history.append(move)
        self._move_count += 1
        return True

    def undo(self) -> bool:
        """Reverses the most recent move. The reverse transfer is not re-validated."""
        if not self._history:
            return False
        last = self._history.pop()
        apply_move(self._conduits, Move(last.target, last.source))
        self._move_count -= 1
        return True

    def restart(self) -> None:
        self._conduits = clone_layout(self._initial)
        self._history = []
        self._move_count = 0
