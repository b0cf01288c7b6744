from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .hint import find_best_hint_move
from .layout import Color, HintMove, Layout, LevelDefinition, is_powered
from .levels import get_level, get_total_levels
from .rules import is_level_complete
from .state import ConduitState

logger = logging.getLogger(__name__)


class EngineNotInitializedError(RuntimeError):
    """Raised when the engine state is read before any level has been loaded."""


@dataclass(frozen=True)
class GameSnapshot:
    """A copy of everything a renderer needs. Mutating it never touches the engine."""
    level_id: int
    level: LevelDefinition
    conduits: Layout
    moves: int
    can_undo: bool
    is_complete: bool
    progress: float
    powered_conduits: List[bool]


@dataclass(frozen=True)
class LevelCompleteData:
    level_id: int
    moves: int
    is_last_level: bool


StateChangeCallback = Callable[[GameSnapshot], None]
LevelCompleteCallback = Callable[[LevelCompleteData], None]


def calculate_progress(conduits: Layout, max_cores: int) -> float:
    """Share of non-empty conduits that are powered, clamped to [0, 1]."""
    filled = [conduit for conduit in conduits if conduit]
    if not filled:
        return 0.0
    solved = sum(1 for conduit in filled if is_powered(conduit, max_cores))
    return min(1.0, max(0.0, solved / len(filled)))


class PuzzleEngine:
    """Session orchestration: level loading, moves, undo/restart, snapshots and hints.

    Callbacks are single-slot; registering a new one replaces the old one.
    Both fire synchronously, after the mutation, before the call returns.
    Not thread-safe: concurrent callers must serialize access themselves.
    """

    def __init__(self) -> None:
        self.state = ConduitState()
        self.current_level_id = 1
        self._on_state_change: Optional[StateChangeCallback] = None
        self._on_level_complete: Optional[LevelCompleteCallback] = None

    # ---------- Load ----------

    def init(self, level_id: int = 1) -> bool:
        return self.load_level(level_id)

    def load_level(self, level_id: int) -> bool:
        level = get_level(level_id)
        if level is None:
            logger.warning("Level %s not found", level_id)
            return False
        self.current_level_id = level_id
        self.state.init_level(level)
        logger.debug("Loaded level %d (%s)", level_id, level.name)
        self._notify_state_change()
        if self._check_completion():
            self._handle_level_complete()
        return True

    def next_level(self) -> bool:
        return self.load_level(self.current_level_id + 1)

    # ---------- Mutate ----------

    def move(self, source: int, target: int) -> bool:
        if not self.state.move_core(source, target):
            return False
        self._notify_state_change()
        if self._check_completion():
            self._handle_level_complete()
        return True

    def undo(self) -> bool:
        success = self.state.undo()
        if success:
            self._notify_state_change()
        return success

    def restart(self) -> None:
        self.state.restart()
        if self.state.current_level is not None:
            self._notify_state_change()

    # ---------- Query ----------

    def peek_top_core(self, index: int) -> Optional[Color]:
        return self.state.get_top_core(index)

    def is_valid_move(self, source: int, target: int) -> bool:
        return self.state.can_move(source, target)

    def is_last_level(self) -> bool:
        return self.current_level_id >= get_total_levels()

    def find_best_hint_move(self, depth: int = 2) -> Optional[HintMove]:
        level = self.state.current_level
        if level is None:
            return None
        return find_best_hint_move(self.state.get_conduits(), level.max_cores, depth)

    def get_state(self) -> GameSnapshot:
        level = self.state.current_level
        if level is None:
            raise EngineNotInitializedError('Game state accessed before initialization.')
        conduits = self.state.get_conduits()
        return GameSnapshot(
            level_id=self.current_level_id,
            level=level,
            conduits=conduits,
            moves=self.state.move_count,
            can_undo=self.state.can_undo(),
            is_complete=is_level_complete(conduits),
            progress=calculate_progress(conduits, level.max_cores),
            powered_conduits=[is_powered(conduit, level.max_cores) for conduit in conduits],
        )

    # ---------- Notifications ----------

    def on_state_change(self, callback: Optional[StateChangeCallback]) -> None:
        self._on_state_change = callback

    def on_level_complete(self, callback: Optional[LevelCompleteCallback]) -> None:
        self._on_level_complete = callback

    def _check_completion(self) -> bool:
        return is_level_complete(self.state.get_conduits())

    def _handle_level_complete(self) -> None:
        data = LevelCompleteData(
            level_id=self.current_level_id,
            moves=self.state.move_count,
            is_last_level=self.is_last_level(),
        )
        logger.info("Level %d complete in %d moves", data.level_id, data.moves)
        if self._on_level_complete is not None:
            self._on_level_complete(data)

    def _notify_state_change(self) -> None:
        if self._on_state_change is not None:
            self._on_state_change(self.get_state())
