"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessmate.core.enums import Color, PieceKind
from chessmate.core.move import Move
from chessmate.core.types import Square, make_square

if TYPE_CHECKING:
    from chessmate.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

# (rook file, files that must be empty, files the king stands on/crosses/lands on)
_CASTLING_SIDES: tuple[tuple[int, tuple[int, ...], tuple[int, ...]], ...] = (
    (7, (5, 6), (4, 5, 6)),
    (0, (1, 2, 3), (4, 3, 2)),
)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
# A queen moves exactly like a rook and a bishop from the same square.
_QUEEN_RAYS = tuple(r + b for r, b in zip(_ROOK_RAYS, _BISHOP_RAYS))

_DIAGONAL_ATTACKERS = frozenset((PieceKind.BISHOP, PieceKind.QUEEN))
_STRAIGHT_ATTACKERS = frozenset((PieceKind.ROOK, PieceKind.QUEEN))


class MoveGenerator:
    """Generates moves for a given :class:`Position`.

    Legality is decided by simulation: every pseudo-legal move is applied
    with ``make_move``, the mover's king is tested, and the move is undone.
    The generator therefore mutates the position internally but always
    restores it before returning.

    Attack detection never calls back into move generation.  Pawn and king
    threats are plain geometric tests and knight/slider threats walk the same
    precomputed tables the generators use, so generating castling moves
    (which asks whether squares are attacked) cannot recurse.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Legal moves --------------------------------------------------------

    def legal_moves(self, color: Color | None = None) -> list[Move]:
        """All strictly legal moves for *color* (default: side to move)."""
        if color is None:
            color = self._pos.side_to_move
        return [
            move
            for move in self.pseudo_legal_moves(color)
            if self.keeps_king_safe(move, color)
        ]

    def legal_targets(self, sq: Square) -> list[Square]:
        """Legal destinations for the piece on *sq* (empty if none)."""
        piece = self._board[sq]
        if piece is None:
            return []
        return [
            to_sq
            for to_sq in self.pseudo_legal_targets(sq)
            if self.keeps_king_safe(Move(sq, to_sq), piece.color)
        ]

    def has_any_legal_move(self, color: Color | None = None) -> bool:
        """Whether *color* has at least one legal move; stops at the first."""
        if color is None:
            color = self._pos.side_to_move
        for sq in self._board.occupied_by(color):
            for to_sq in self.pseudo_legal_targets(sq):
                if self.keeps_king_safe(Move(sq, to_sq), color):
                    return True
        return False

    def keeps_king_safe(self, move: Move, color: Color) -> bool:
        """Apply *move*, test *color*'s king, undo. True if not in check."""
        pos = self._pos
        record = pos.make_move(move)
        safe = not self.is_in_check(color)
        pos.unmake_move(move, record)
        return safe

    # -- Pseudo-legal moves -------------------------------------------------

    def pseudo_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        if color is None:
            color = self._pos.side_to_move
        moves: list[Move] = []
        for sq in self._board.occupied_by(color):
            moves.extend(Move(sq, to_sq) for to_sq in self.pseudo_legal_targets(sq))
        return moves

    def pseudo_legal_targets(self, sq: Square) -> list[Square]:
        """Destinations allowed by the movement pattern of the piece on *sq*."""
        piece = self._board[sq]
        if piece is None:
            return []
        targets: list[Square] = []
        self._GENERATORS[piece.kind](self, sq, piece.color, targets)
        return targets

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked?  ``False`` when there is no king."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board
        file_idx = sq & 7
        rank_idx = sq >> 3

        # A pawn attacks diagonally forward, so it sits one rank "behind" sq.
        pawn_rank = rank_idx - 1 if by_color == Color.WHITE else rank_idx + 1
        if 0 <= pawn_rank < 8:
            for pawn_file in (file_idx - 1, file_idx + 1):
                if 0 <= pawn_file < 8:
                    piece = board[make_square(pawn_file, pawn_rank)]
                    if (
                        piece is not None
                        and piece.color == by_color
                        and piece.kind == PieceKind.PAWN
                    ):
                        return True

        for from_sq in _KING_TARGETS[sq]:
            piece = board[from_sq]
            if (
                piece is not None
                and piece.color == by_color
                and piece.kind == PieceKind.KING
            ):
                return True

        for from_sq in _KNIGHT_TARGETS[sq]:
            piece = board[from_sq]
            if (
                piece is not None
                and piece.color == by_color
                and piece.kind == PieceKind.KNIGHT
            ):
                return True

        if self._ray_hits(_BISHOP_RAYS[sq], by_color, _DIAGONAL_ATTACKERS):
            return True
        return self._ray_hits(_ROOK_RAYS[sq], by_color, _STRAIGHT_ATTACKERS)

    def _ray_hits(
        self,
        rays: tuple[tuple[Square, ...], ...],
        by_color: Color,
        kinds: frozenset[PieceKind],
    ) -> bool:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.kind in kinds:
                    return True
                break
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, targets: list[Square]) -> None:
        board = self._board
        file_idx = sq & 7
        rank_idx = sq >> 3

        if color == Color.WHITE:
            step, start_rank, ep_rank = 1, 1, 5
        else:
            step, start_rank, ep_rank = -1, 6, 2

        fwd_rank = rank_idx + step
        if not 0 <= fwd_rank < 8:
            return

        one_step = make_square(file_idx, fwd_rank)
        if board.is_empty(one_step):
            targets.append(one_step)
            if rank_idx == start_rank:
                two_step = make_square(file_idx, rank_idx + 2 * step)
                if board.is_empty(two_step):
                    targets.append(two_step)

        en_passant = self._pos.en_passant
        for cap_file in (file_idx - 1, file_idx + 1):
            if not 0 <= cap_file < 8:
                continue
            cap_sq = make_square(cap_file, fwd_rank)
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    targets.append(cap_sq)
            elif cap_sq == en_passant and fwd_rank == ep_rank:
                targets.append(cap_sq)

    def _gen_knight(self, sq: Square, color: Color, targets: list[Square]) -> None:
        self._gen_steps(_KNIGHT_TARGETS[sq], color, targets)

    def _gen_bishop(self, sq: Square, color: Color, targets: list[Square]) -> None:
        self._gen_sliding(_BISHOP_RAYS[sq], color, targets)

    def _gen_rook(self, sq: Square, color: Color, targets: list[Square]) -> None:
        self._gen_sliding(_ROOK_RAYS[sq], color, targets)

    def _gen_queen(self, sq: Square, color: Color, targets: list[Square]) -> None:
        self._gen_sliding(_QUEEN_RAYS[sq], color, targets)

    def _gen_king(self, sq: Square, color: Color, targets: list[Square]) -> None:
        self._gen_steps(_KING_TARGETS[sq], color, targets)
        self._gen_castling(sq, color, targets)

    def _gen_steps(
        self,
        candidates: tuple[Square, ...],
        color: Color,
        targets: list[Square],
    ) -> None:
        board = self._board
        for to_sq in candidates:
            target = board[to_sq]
            if target is None or target.color != color:
                targets.append(to_sq)

    def _gen_sliding(
        self,
        rays: tuple[tuple[Square, ...], ...],
        color: Color,
        targets: list[Square],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    targets.append(to_sq)
                    continue
                if target.color != color:
                    targets.append(to_sq)
                break

    def _gen_castling(self, king_sq: Square, color: Color, targets: list[Square]) -> None:
        board = self._board
        king = board[king_sq]
        rank = 0 if color == Color.WHITE else 7
        if king is None or king.has_moved or king_sq != make_square(4, rank):
            return

        opponent = color.opposite
        for rook_file, between, king_path in _CASTLING_SIDES:
            rook = board[make_square(rook_file, rank)]
            if (
                rook is None
                or rook.kind != PieceKind.ROOK
                or rook.color != color
                or rook.has_moved
            ):
                continue
            if any(not board.is_empty(make_square(f, rank)) for f in between):
                continue
            if any(
                self.is_square_attacked(make_square(f, rank), opponent)
                for f in king_path
            ):
                continue
            targets.append(make_square(king_path[-1], rank))

    _GENERATORS: dict[
        PieceKind, Callable[[MoveGenerator, Square, Color, list[Square]], None]
    ] = {
        PieceKind.PAWN: _gen_pawn,
        PieceKind.KNIGHT: _gen_knight,
        PieceKind.BISHOP: _gen_bishop,
        PieceKind.ROOK: _gen_rook,
        PieceKind.QUEEN: _gen_queen,
        PieceKind.KING: _gen_king,
    }
