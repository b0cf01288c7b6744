from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

Color = str  # 'red', 'blue', ... drawn from PALETTE
Conduit = List[Color]  # bottom first, top last
Layout = List[Conduit]
FrozenLayout = Tuple[Tuple[Color, ...], ...]
Difficulty = str  # 'easy', 'medium', 'hard', 'expert'

DIFFICULTIES: Tuple[Difficulty, ...] = ('easy', 'medium', 'hard', 'expert')

COLOR_MAP: Dict[Color, str] = {
    'red': '#ff4757',
    'blue': '#3742fa',
    'green': '#2ed573',
    'yellow': '#ffa502',
    'purple': '#a55eea',
    'orange': '#ff6348',
    'pink': '#ff6b9d',
    'cyan': '#00d9ff',
}

PALETTE: Tuple[Color, ...] = tuple(COLOR_MAP)


@dataclass(frozen=True)
class LevelDefinition:
    """A puzzle as authored or generated: the initial layout plus its capacity."""
    id: int
    name: str
    conduits: FrozenLayout
    max_cores: int
    difficulty: Difficulty

    def __post_init__(self) -> None:
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(f"unknown difficulty: {self.difficulty!r}")
        if self.max_cores <= 0:
            raise ValueError("max_cores must be positive")


@dataclass(frozen=True)
class Move:
    source: int
    target: int


@dataclass(frozen=True)
class HintMove:
    source: int
    target: int
    score: float


def clone_layout(conduits: Sequence[Sequence[Color]]) -> Layout:
    """Returns a structurally independent, mutable copy of the stacks."""
    return [list(conduit) for conduit in conduits]


def freeze_layout(conduits: Sequence[Sequence[Color]]) -> FrozenLayout:
    return tuple(tuple(conduit) for conduit in conduits)


def is_uniform(conduit: Sequence[Color]) -> bool:
    """True when every core matches the bottom one. Empty conduits are uniform."""
    if not conduit:
        return True
    base = conduit[0]
    return all(core == base for core in conduit)


def is_powered(conduit: Sequence[Color], max_cores: int) -> bool:
    """A conduit is powered when it is full of a single color."""
    return len(conduit) > 0 and len(conduit) == max_cores and is_uniform(conduit)


def top_core(conduit: Sequence[Color]) -> Optional[Color]:
    return conduit[-1] if conduit else None


def pretty_layout(conduits: Sequence[Sequence[Color]], max_cores: int, powered: Optional[Sequence[bool]] = None) -> str:
    """Generates a human-readable rendering, one conduit per line, bottom core on the left."""
    lines: List[str] = []
    for i, conduit in enumerate(conduits):
        cells = [core[:3].ljust(3) for core in conduit]
        cells.extend(['.'.ljust(3)] * (max_cores - len(conduit)))
        mark = '*' if powered is not None and powered[i] else ' '
        lines.append(f"{i:>2}{mark}| " + " ".join(cells))
    return "\n".join(lines)
