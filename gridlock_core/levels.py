from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .deal import generate_level
from .layout import LevelDefinition, freeze_layout

GENERATED_LEVEL_COUNT = 95


def _authored(level_id: int, name: str, conduits, max_cores: int, difficulty: str) -> LevelDefinition:
    return LevelDefinition(
        id=level_id,
        name=name,
        conduits=freeze_layout(conduits),
        max_cores=max_cores,
        difficulty=difficulty,
    )


# Hand-authored opening levels. These need not hold max_cores of every color.
BASE_LEVELS: Tuple[LevelDefinition, ...] = (
    _authored(1, 'Getting Started', [
        ['red', 'red'],
        ['blue', 'blue'],
        [],
        [],
    ], 2, 'easy'),
    _authored(2, 'Color Separation', [
        ['red', 'blue'],
        ['blue', 'red'],
        [],
        [],
    ], 2, 'easy'),
    _authored(3, 'Triple Threat', [
        ['red', 'blue', 'green'],
        ['green', 'red', 'blue'],
        [],
        [],
    ], 3, 'easy'),
    _authored(4, 'Careful Planning', [
        ['red', 'blue', 'red'],
        ['green', 'blue', 'green'],
        ['blue', 'red', 'green'],
        [],
        [],
    ], 3, 'medium'),
    _authored(5, 'No Room for Error', [
        ['red', 'red', 'blue', 'blue'],
        ['green', 'green', 'yellow', 'yellow'],
        ['blue', 'blue', 'red', 'red'],
        ['yellow', 'yellow', 'green', 'green'],
        [],
        [],
    ], 4, 'medium'),
)

GENERATED_LEVELS: Tuple[LevelDefinition, ...] = tuple(
    generate_level(len(BASE_LEVELS) + 1 + i) for i in range(GENERATED_LEVEL_COUNT)
)

LEVELS: Tuple[LevelDefinition, ...] = BASE_LEVELS + GENERATED_LEVELS

_BY_ID: Mapping[int, LevelDefinition] = MappingProxyType({level.id: level for level in LEVELS})


def get_level(level_id: int) -> Optional[LevelDefinition]:
    """Looks up a level by id, or None when the id is out of range."""
    return _BY_ID.get(level_id)


def get_total_levels() -> int:
    return len(LEVELS)
