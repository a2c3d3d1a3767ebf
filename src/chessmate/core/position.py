"""Position: complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from dataclasses import replace

from chessmate.core.board import Board
from chessmate.core.enums import Color, GameStatus, PieceKind
from chessmate.core.move import Move, MoveRecord
from chessmate.core.piece import Piece
from chessmate.core.types import Square, file_of, make_square, rank_of, square_name


def castle_rook_squares(king_from: Square, king_to: Square) -> tuple[Square, Square]:
    """Rook origin and destination for a king moving two files."""
    rank = rank_of(king_from)
    if file_of(king_to) > file_of(king_from):
        return make_square(7, rank), make_square(5, rank)
    return make_square(0, rank), make_square(3, rank)


def is_castling(piece: Piece, move: Move) -> bool:
    return (
        piece.kind == PieceKind.KING
        and abs(file_of(move.to_sq) - file_of(move.from_sq)) == 2
    )


class Position:
    """Full chess position: board + side to move + en passant target + status.

    :meth:`make_move` mutates in place and hands back a :class:`MoveRecord`;
    :meth:`unmake_move` consumes that record and restores the exact prior
    position.  Nothing else is kept between the two calls, so any number of
    nested make/unmake pairs may run as long as they are unwound in order.

    ``status`` is only refreshed when a move is committed through the game
    layer; simulated moves leave it untouched.
    """

    __slots__ = ("board", "side_to_move", "en_passant", "status")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        en_passant: Square | None = None,
        status: GameStatus = GameStatus.ACTIVE,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.en_passant = en_passant
        self.status = status

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> MoveRecord:
        """Apply *move* and return the record needed to undo it."""
        board = self.board
        from_sq = move.from_sq
        to_sq = move.to_sq

        piece = board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(from_sq)}")

        prev_en_passant = self.en_passant
        self.en_passant = None

        captured = board[to_sq]
        captured_sq = to_sq

        # A pawn moving diagonally onto an empty square captures en passant;
        # the victim sits beside the mover's origin, one rank behind the target.
        if (
            piece.kind == PieceKind.PAWN
            and captured is None
            and file_of(from_sq) != file_of(to_sq)
        ):
            captured_sq = make_square(file_of(to_sq), rank_of(from_sq))
            captured = board[captured_sq]
            board[captured_sq] = None

        board[from_sq] = None
        placed = piece

        if piece.kind == PieceKind.KING:
            placed = piece.moved()
            if is_castling(piece, move):
                rook_from, rook_to = castle_rook_squares(from_sq, to_sq)
                rook = board[rook_from]
                board[rook_from] = None
                board[rook_to] = rook.moved() if rook is not None else None
        elif piece.kind == PieceKind.ROOK:
            placed = piece.moved()
        elif piece.kind == PieceKind.PAWN:
            to_rank = rank_of(to_sq)
            if to_rank in (0, 7):
                placed = Piece(piece.color, PieceKind.QUEEN)
            elif abs(to_rank - rank_of(from_sq)) == 2:
                self.en_passant = make_square(
                    file_of(from_sq), (rank_of(from_sq) + to_rank) // 2
                )

        board[to_sq] = placed
        self.side_to_move = self.side_to_move.opposite
        return MoveRecord(
            moved=piece,
            captured=captured,
            captured_sq=captured_sq,
            prev_en_passant=prev_en_passant,
        )

    def unmake_move(self, move: Move, record: MoveRecord) -> None:
        """Reverse a :meth:`make_move` of *move* that produced *record*."""
        board = self.board
        self.side_to_move = self.side_to_move.opposite

        # The record holds the pre-move piece, which also undoes promotion
        # and any has_moved flag raised by the move.
        board[move.from_sq] = record.moved

        if record.captured_sq != move.to_sq:
            board[move.to_sq] = None
            board[record.captured_sq] = record.captured
        else:
            board[move.to_sq] = record.captured

        if is_castling(record.moved, move):
            rook_from, rook_to = castle_rook_squares(move.from_sq, move.to_sq)
            rook = board[rook_to]
            board[rook_to] = None
            # Castling requires an unmoved rook.
            board[rook_from] = replace(rook, has_moved=False) if rook else None

        self.en_passant = record.prev_en_passant

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, x: int, y: int) -> Piece | None:
        """Piece at file *x*, rank *y*; ``None`` when empty or off the board."""
        return self.board.at(x, y)

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy sharing no mutable state."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            en_passant=self.en_passant,
            status=self.status,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.side_to_move == other.side_to_move
            and self.en_passant == other.en_passant
            and self.status == other.status
            and self.board == other.board
        )

    def __repr__(self) -> str:
        ep = square_name(self.en_passant) if self.en_passant is not None else "-"
        return (
            f"{self.board!r}\n"
            f"{self.side_to_move} to move, en passant {ep}, {self.status.name}"
        )
