"""Build positions from a compact board diagram.

The diagram uses the familiar rank-by-rank placement grammar
(``"rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"``): ranks 8 to 1 separated by
``/``, letters for pieces (uppercase white), digits for runs of empty squares.
It exists to set up positions for tests and puzzles; games themselves are
never saved or loaded.
"""

from __future__ import annotations

from chessmate.core.board import Board
from chessmate.core.enums import Color, PieceKind
from chessmate.core.piece import Piece
from chessmate.core.position import Position
from chessmate.core.types import Square, make_square

STARTING_LAYOUT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

# Squares on which a king or rook counts as never having moved.
_HOME_SQUARES: dict[PieceKind, frozenset[Square]] = {
    PieceKind.KING: frozenset((make_square(4, 0), make_square(4, 7))),
    PieceKind.ROOK: frozenset(
        (make_square(0, 0), make_square(7, 0), make_square(0, 7), make_square(7, 7))
    ),
}


def _infer_has_moved(piece: Piece, sq: Square) -> Piece:
    home = _HOME_SQUARES.get(piece.kind)
    if home is None:
        return piece
    home_rank = 0 if piece.color == Color.WHITE else 7
    if sq in home and sq >> 3 == home_rank:
        return piece
    return piece.moved()


def board_from_layout(placement: str) -> Board:
    """Parse a placement diagram into a :class:`Board`."""
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid layout (must contain 8 ranks): {placement!r}")

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid layout digit {ch!r}: {placement!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid layout rank width: {placement!r}")
                sq = make_square(file, rank)
                board[sq] = _infer_has_moved(Piece.from_char(ch), sq)
                file += 1
            if file > 8:
                raise ValueError(f"Invalid layout rank width: {placement!r}")
        if file != 8:
            raise ValueError(f"Invalid layout rank width: {placement!r}")
    return board


def position_from_layout(
    placement: str,
    side_to_move: Color = Color.WHITE,
    en_passant: Square | None = None,
) -> Position:
    """Build a :class:`Position` from a placement diagram.

    Kings on e1/e8 and rooks on their corner squares are taken as unmoved, so
    castling is available whenever the pieces stand at home.
    """
    return Position(board_from_layout(placement), side_to_move, en_passant)


def starting_position() -> Position:
    return Position()
