"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessmate.core.enums import GameStatus
from chessmate.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessmate.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Stalemate is the only draw the engine recognises; repetition and
    move-count rules are not tracked.
    """

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.compute_status(position) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.compute_status(position) == GameStatus.STALEMATE

    @staticmethod
    def compute_status(position: Position) -> GameStatus:
        """Status of the side to move, derived from the board alone."""
        gen = MoveGenerator(position)
        side = position.side_to_move
        if gen.has_any_legal_move(side):
            return GameStatus.ACTIVE
        if gen.is_in_check(side):
            return GameStatus.CHECKMATE
        return GameStatus.STALEMATE
