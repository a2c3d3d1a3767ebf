"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chessmate.core import MoveGenerator, Position

    pos = Position()
    gen = MoveGenerator(pos)
    for move in gen.legal_moves():
        record = pos.make_move(move)
        ...
        pos.unmake_move(move, record)
"""

from chessmate.core.board import Board
from chessmate.core.enums import Color, GameStatus, PieceKind, RejectReason
from chessmate.core.layout import (
    STARTING_LAYOUT,
    board_from_layout,
    position_from_layout,
    starting_position,
)
from chessmate.core.move import Move, MoveRecord
from chessmate.core.move_generator import MoveGenerator
from chessmate.core.piece import Piece
from chessmate.core.position import Position
from chessmate.core.rules import Rules
from chessmate.core.types import (
    Square,
    file_of,
    is_on_board,
    make_square,
    parse_square,
    rank_of,
    square_name,
    to_xy,
)

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceKind",
    "RejectReason",
    # Types / helpers
    "Square",
    "file_of",
    "is_on_board",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    "to_xy",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Position",
    "Rules",
    # Setup
    "STARTING_LAYOUT",
    "board_from_layout",
    "position_from_layout",
    "starting_position",
]
