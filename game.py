from __future__ import annotations

# Facade module that re-exports Gridlock core functionality.
# Used by the Flask app and tests; single-responsibility modules live under gridlock_core/*.

from gridlock_core.layout import (  # noqa: F401
    COLOR_MAP,
    DIFFICULTIES,
    PALETTE,
    Color,
    Conduit,
    HintMove,
    Layout,
    LevelDefinition,
    Move,
    clone_layout,
    freeze_layout,
    is_powered,
    is_uniform,
    pretty_layout,
)
from gridlock_core.moves import apply_move, can_move_on, legal_moves  # noqa: F401
from gridlock_core.rules import is_level_complete  # noqa: F401
from gridlock_core.state import ConduitState  # noqa: F401
from gridlock_core.deal import (  # noqa: F401
    Mulberry32,
    color_count_for,
    difficulty_for,
    generate_level,
    max_cores_for,
    shuffle,
)
from gridlock_core.levels import BASE_LEVELS, LEVELS, get_level, get_total_levels  # noqa: F401
from gridlock_core.hint import (  # noqa: F401
    DEAD_END_PENALTY,
    evaluate_layout,
    find_best_hint_move,
    search_score,
)
from gridlock_core.engine import (  # noqa: F401
    EngineNotInitializedError,
    GameSnapshot,
    LevelCompleteData,
    PuzzleEngine,
    calculate_progress,
)


def main() -> None:
    # CLI driver delegated to gridlock_core.cli
    from gridlock_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
