from __future__ import annotations

from typing import List, Sequence, TypeVar

from .layout import PALETTE, Color, Conduit, Difficulty, LevelDefinition, freeze_layout

T = TypeVar('T')

_MASK32 = 0xFFFFFFFF
SEED_MULTIPLIER = 1013
EXTRA_CONDUITS = 2


class Mulberry32:
    """Small 32-bit PRNG. Same seed, same stream, on any platform."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK32

    def next_uint32(self) -> int:
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & _MASK32
        t ^= (t + ((t ^ (t >> 7)) * (t | 61))) & _MASK32
        return (t ^ (t >> 14)) & _MASK32

    def random(self) -> float:
        """Returns a float in [0, 1)."""
        return self.next_uint32() / 4294967296


def shuffle(values: Sequence[T], rng: Mulberry32) -> List[T]:
    """Fisher-Yates shuffle into a new list, walking from the last index down."""
    out = list(values)
    for i in range(len(out) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def color_count_for(level_id: int) -> int:
    return min(3 + level_id // 10, 6)


def max_cores_for(level_id: int) -> int:
    return 4 if level_id < 30 else 5


def difficulty_for(level_id: int) -> Difficulty:
    if level_id < 25:
        return 'medium'
    if level_id < 60:
        return 'hard'
    return 'expert'


def generate_level(level_id: int) -> LevelDefinition:
    """Deals a level as a pure function of its id.

    Exactly `max_cores` cores of each of the first `color_count` palette
    colors are shuffled into `color_count` full conduits, followed by two
    empty ones.
    """
    rng = Mulberry32(level_id * SEED_MULTIPLIER)
    color_count = color_count_for(level_id)
    max_cores = max_cores_for(level_id)
    colors = PALETTE[:color_count]

    pool: List[Color] = [color for color in colors for _ in range(max_cores)]
    shuffled = shuffle(pool, rng)

    conduits: List[Conduit] = [
        shuffled[i * max_cores:(i + 1) * max_cores] for i in range(color_count)
    ]
    while len(conduits) < color_count + EXTRA_CONDUITS:
        conduits.append([])

    return LevelDefinition(
        id=level_id,
        name=f"Gridlock {level_id}",
        conduits=freeze_layout(conduits),
        max_cores=max_cores,
        difficulty=difficulty_for(level_id),
    )
