"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessmate.core.position import Position
from chessmate.engine.minimax import MinimaxEngine
from chessmate.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and connect ``request_move`` to a queued signal.
    Each request searches a private copy of the position, so the interactive
    side may keep reading the live position while the search runs.  A search
    cannot be interrupted; callers that lose interest simply ignore the
    result for that ``request_id``.
    """

    best_move_ready = pyqtSignal(int, object, int, int)  # id, move, score, nodes
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    def __init__(
        self,
        *,
        max_depth: int = DEFAULT_DEPTH,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._limits = SearchLimits(max_depth=max_depth)

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Search for the best move in *position_obj* and emit result."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        try:
            result = self._engine.search(position_obj.copy(), self._limits)
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.nodes,
        )

    @pyqtSlot(int)
    def set_depth(self, max_depth: int) -> None:
        """Update the search depth (takes effect on the next search)."""
        self._limits = SearchLimits(max_depth=max_depth)
