"""Game facade that owns one position and commits validated moves."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessmate.core.enums import Color, GameStatus, RejectReason
from chessmate.core.move import Move, MoveRecord
from chessmate.core.move_generator import MoveGenerator
from chessmate.core.piece import Piece
from chessmate.core.position import Position
from chessmate.core.rules import Rules
from chessmate.core.types import is_on_board, make_square, to_xy

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of a move attempt: accepted, or rejected with a reason.

    Truthy exactly when the move was committed.  ``status`` is the game
    status after the attempt.
    """

    move: Move | None
    status: GameStatus
    reason: RejectReason | None = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def accept(cls, move: Move, status: GameStatus) -> MoveOutcome:
        return cls(move, status)

    @classmethod
    def reject(
        cls,
        reason: RejectReason,
        status: GameStatus,
        move: Move | None = None,
    ) -> MoveOutcome:
        return cls(move, status, reason)


class Game:
    """Single-game facade used by the presentation layer and the engine.

    Validation runs through the same legality filter the search uses, then
    the move is applied and the status recomputed.  Nothing here raises for
    bad input: off-board coordinates read as empty squares and rejected
    moves leave the position untouched.

    The game exclusively owns its :class:`Position`.  Callers must not keep
    :class:`Piece` values across a move; re-read them with :meth:`piece_at`.
    """

    __slots__ = ("_position", "_history")

    def __init__(self, position: Position | None = None) -> None:
        self._position = position if position is not None else Position()
        self._history: list[tuple[Move, MoveRecord]] = []
        self._position.status = Rules.compute_status(self._position)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def current_player(self) -> Color:
        return self._position.side_to_move

    @property
    def status(self) -> GameStatus:
        return self._position.status

    @property
    def is_game_over(self) -> bool:
        return self._position.status.is_terminal

    @property
    def history(self) -> list[Move]:
        """Committed moves, oldest first."""
        return [move for move, _ in self._history]

    def piece_at(self, x: int, y: int) -> Piece | None:
        return self._position.piece_at(x, y)

    def legal_moves(self, x: int, y: int) -> list[tuple[int, int]]:
        """Legal destinations ``(x, y)`` for the piece on ``(x, y)``.

        Empty once the game is over, like :meth:`all_legal_moves`.
        """
        if self.is_game_over or not is_on_board(x, y):
            return []
        gen = MoveGenerator(self._position)
        return [to_xy(sq) for sq in gen.legal_targets(make_square(x, y))]

    def all_legal_moves(self) -> list[Move]:
        """Legal moves for the side to move (empty once the game is over)."""
        if self.is_game_over:
            return []
        return MoveGenerator(self._position).legal_moves()

    # ── Commands ─────────────────────────────────────────────────────────

    def attempt_move(
        self,
        start_x: int,
        start_y: int,
        end_x: int,
        end_y: int,
    ) -> MoveOutcome:
        """Validate and commit the move ``(start) -> (end)`` if legal."""
        if not (is_on_board(start_x, start_y) and is_on_board(end_x, end_y)):
            return self._reject(RejectReason.OFF_BOARD, None)
        return self.commit(Move.from_xy(start_x, start_y, end_x, end_y))

    def commit(self, move: Move) -> MoveOutcome:
        """Validate and commit *move* for the side to move."""
        pos = self._position
        if pos.status.is_terminal:
            return self._reject(RejectReason.GAME_OVER, move)
        if not (0 <= move.from_sq < 64 and 0 <= move.to_sq < 64):
            return self._reject(RejectReason.OFF_BOARD, move)

        piece = pos.board[move.from_sq]
        if piece is None:
            return self._reject(RejectReason.NO_PIECE, move)
        if piece.color != pos.side_to_move:
            return self._reject(RejectReason.WRONG_TURN, move)

        gen = MoveGenerator(pos)
        if move.to_sq not in gen.pseudo_legal_targets(move.from_sq):
            return self._reject(RejectReason.ILLEGAL_DESTINATION, move)
        if not gen.keeps_king_safe(move, piece.color):
            return self._reject(RejectReason.LEAVES_KING_IN_CHECK, move)

        record = pos.make_move(move)
        self._history.append((move, record))
        pos.status = Rules.compute_status(pos)
        if pos.status.is_terminal:
            _LOGGER.info(
                "Game over after %s: %s, %s to move",
                move,
                pos.status.name,
                pos.side_to_move,
            )
        return MoveOutcome.accept(move, pos.status)

    def undo_last_move(self) -> Move | None:
        """Take back the last committed move. Returns it, or ``None``."""
        if not self._history:
            return None
        move, record = self._history.pop()
        self._position.unmake_move(move, record)
        # Moves are only committed while the game is active.
        self._position.status = GameStatus.ACTIVE
        return move

    def restart(self) -> None:
        """Reset to the standard starting position."""
        self._position = Position()
        self._history.clear()

    # ── Internal ─────────────────────────────────────────────────────────

    def _reject(self, reason: RejectReason, move: Move | None) -> MoveOutcome:
        _LOGGER.debug("Rejected move %s: %s", move, reason.name)
        return MoveOutcome.reject(reason, self._position.status, move)
