"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class GameStatus(IntEnum):
    """Status of the side to move after the last committed move."""

    ACTIVE = 0
    CHECKMATE = 1
    STALEMATE = 2

    @property
    def is_terminal(self) -> bool:
        return self != GameStatus.ACTIVE


class RejectReason(IntEnum):
    """Why a move attempt left the position unchanged."""

    GAME_OVER = auto()
    OFF_BOARD = auto()
    NO_PIECE = auto()
    WRONG_TURN = auto()
    ILLEGAL_DESTINATION = auto()
    LEAVES_KING_IN_CHECK = auto()
    # Controller-level: the move never reached the game.
    NOT_STARTED = auto()
    AWAITING_ENGINE = auto()
    STALE_ENGINE_MOVE = auto()
