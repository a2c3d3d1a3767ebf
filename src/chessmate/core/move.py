"""Move and undo-record value objects."""

from __future__ import annotations

from dataclasses import dataclass

from chessmate.core.piece import Piece
from chessmate.core.types import Square, make_square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A from/to square pair.

    Special moves carry no flag: en passant, castling and promotion are all
    implied by the moving piece and the geometry of the move.
    """

    from_sq: Square
    to_sq: Square

    @classmethod
    def from_xy(cls, start_x: int, start_y: int, end_x: int, end_y: int) -> Move:
        return cls(make_square(start_x, start_y), make_square(end_x, end_y))

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Everything :meth:`Position.unmake_move` needs to reverse one move.

    ``captured_sq`` is where the captured piece stood, which differs from the
    move's destination only for en passant.
    """

    moved: Piece
    captured: Piece | None
    captured_sq: Square
    prev_en_passant: Square | None
