"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from chessmate.core.enums import Color, PieceKind
from chessmate.core.piece import Piece
from chessmate.core.types import Square, is_on_board, make_square

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


class Board:
    """Mutable 64-square grid with incremental occupancy indexes.

    The grid is the single source of truth for where a piece stands; the
    per-color occupancy masks and king squares are caches kept in lockstep by
    :meth:`__setitem__`.
    """

    __slots__ = ("_squares", "_occupancy", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> bitmask of squares holding that color's pieces.
        self._occupancy: list[int] = [0, 0]
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if old_piece is piece:
            return

        mask = 1 << sq
        if old_piece is not None:
            old_idx = int(old_piece.color)
            self._occupancy[old_idx] &= ~mask
            if old_piece.kind == PieceKind.KING and self._king_squares[old_idx] == sq:
                self._king_squares[old_idx] = None

        self._squares[sq] = piece
        if piece is None:
            return

        idx = int(piece.color)
        self._occupancy[idx] |= mask
        if piece.kind == PieceKind.KING:
            self._king_squares[idx] = sq

    def at(self, file: int, rank: int) -> Piece | None:
        """Bounds-checked lookup; off-board coordinates hold no piece."""
        if not is_on_board(file, rank):
            return None
        return self._squares[make_square(file, rank)]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied_by(self, color: Color) -> list[Square]:
        """Squares holding *color*'s pieces, in ascending order."""
        squares: list[Square] = []
        bitboard = self._occupancy[int(color)]
        while bitboard:
            lsb = bitboard & -bitboard
            squares.append(lsb.bit_length() - 1)
            bitboard ^= lsb
        return squares

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it is not on the board."""
        return self._king_squares[int(color)]

    def pieces(self) -> list[tuple[Square, Piece]]:
        """Every occupied square with its piece."""
        return [(sq, p) for sq, p in enumerate(self._squares) if p is not None]

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._occupancy = self._occupancy.copy()
        b._king_squares = self._king_squares.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, every piece unmoved."""
        b = cls()
        for f, kind in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, kind)
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceKind.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceKind.PAWN)
            b[make_square(f, 7)] = Piece(Color.BLACK, kind)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
