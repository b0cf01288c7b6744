from __future__ import annotations

from typing import Sequence

from .layout import Color, is_uniform


def is_level_complete(conduits: Sequence[Sequence[Color]]) -> bool:
    """A puzzle is solved when every non-empty conduit holds a single color."""
    return all(is_uniform(conduit) for conduit in conduits if conduit)
