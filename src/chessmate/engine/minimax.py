"""Pure-Python minimax search with alpha-beta pruning."""

from __future__ import annotations

import logging

from chessmate.core.enums import Color, PieceKind
from chessmate.core.move import Move
from chessmate.core.move_generator import MoveGenerator
from chessmate.core.position import Position
from chessmate.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

INF_SCORE = 1_000_000
MATE_SCORE = 20_000

PIECE_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN: 100,
    PieceKind.KNIGHT: 320,
    PieceKind.BISHOP: 330,
    PieceKind.ROOK: 500,
    PieceKind.QUEEN: 900,
    PieceKind.KING: 0,
}


def evaluate(position: Position, perspective: Color) -> int:
    """Material balance from *perspective*'s point of view.

    Kings carry no material; losing one is scored by :data:`MATE_SCORE`.
    """
    score = 0
    for _, piece in position.board.pieces():
        value = PIECE_VALUES[piece.kind]
        if piece.color == perspective:
            score += value
        else:
            score -= value
    return score


class MinimaxEngine(IEngine):
    """Fixed-depth minimax over ``make_move`` / ``unmake_move``.

    Every node asks :class:`MoveGenerator` for legal moves, so the search and
    the interactive commit path always agree on legality.  The position is
    mutated during the search and restored exactly before returning.

    Args:
        prune: Cut off siblings once ``alpha >= beta``.  Disabling it gives
            plain minimax, which returns the same scores while visiting more
            nodes.
    """

    __slots__ = ("_prune", "_nodes")

    def __init__(self, *, prune: bool = True) -> None:
        self._prune = prune
        self._nodes = 0

    @property
    def nodes(self) -> int:
        """Nodes visited by the most recent search."""
        return self._nodes

    def search(self, position: Position, limits: SearchLimits) -> SearchResult:
        best_move, score = self._search_root(
            position, position.side_to_move, limits.max_depth
        )
        _LOGGER.debug(
            "Searched depth %d: best=%s score=%d nodes=%d",
            limits.max_depth,
            best_move,
            score,
            self._nodes,
        )
        return SearchResult(best_move=best_move, score=score, nodes=self._nodes)

    def find_best_move(
        self,
        position: Position,
        color: Color,
        depth: int = DEFAULT_DEPTH,
    ) -> Move | None:
        """Best legal move for *color*, or ``None`` if it has none."""
        if depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {depth}")
        best_move, _ = self._search_root(position, color, depth)
        return best_move

    def _search_root(
        self,
        position: Position,
        color: Color,
        depth: int,
    ) -> tuple[Move | None, int]:
        self._nodes = 0
        best_move: Move | None = None
        best_score = -INF_SCORE

        for move in MoveGenerator(position).legal_moves(color):
            record = position.make_move(move)
            score = self.minimax(position, depth - 1, -INF_SCORE, INF_SCORE, False, color)
            position.unmake_move(move, record)

            # Strict comparison keeps the first of equally scored moves.
            if best_move is None or score > best_score:
                best_score = score
                best_move = move

        if best_move is None:
            return None, 0
        return best_move, best_score

    def minimax(
        self,
        position: Position,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
        perspective: Color,
    ) -> int:
        """Score *position* for *perspective*, searching *depth* more plies."""
        self._nodes += 1
        if depth <= 0:
            return evaluate(position, perspective)

        gen = MoveGenerator(position)
        side = position.side_to_move
        moves = gen.legal_moves(side)
        if not moves:
            if gen.is_in_check(side):
                return -MATE_SCORE if maximizing else MATE_SCORE
            return 0

        if maximizing:
            value = -INF_SCORE
            for move in moves:
                record = position.make_move(move)
                value = max(
                    value,
                    self.minimax(position, depth - 1, alpha, beta, False, perspective),
                )
                position.unmake_move(move, record)
                alpha = max(alpha, value)
                if self._prune and alpha >= beta:
                    break
            return value

        value = INF_SCORE
        for move in moves:
            record = position.make_move(move)
            value = min(
                value,
                self.minimax(position, depth - 1, alpha, beta, True, perspective),
            )
            position.unmake_move(move, record)
            beta = min(beta, value)
            if self._prune and alpha >= beta:
                break
        return value


def find_best_move(
    position: Position,
    color: Color,
    depth: int = DEFAULT_DEPTH,
) -> Move | None:
    """Module-level shortcut for :meth:`MinimaxEngine.find_best_move`."""
    return MinimaxEngine().find_best_move(position, color, depth)
