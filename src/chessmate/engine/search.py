"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessmate.core.move import Move
    from chessmate.core.position import Position

DEFAULT_DEPTH = 3


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    Depth is the only limit: a search always runs to completion.
    """

    max_depth: int = DEFAULT_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {self.max_depth}")


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``best_move`` is ``None`` when the side to move has no legal move.
    """

    best_move: Move | None
    score: int
    nodes: int


class IEngine(Protocol):
    """Protocol for engines used by the game layer and the Qt worker."""

    def search(self, position: Position, limits: SearchLimits) -> SearchResult: ...
