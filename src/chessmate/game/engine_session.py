"""Engine search session: runs AI turns on a worker thread."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from chessmate.core.enums import Color
from chessmate.core.move import Move
from chessmate.engine.qt_bridge import EngineWorker
from chessmate.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits
from chessmate.game.interfaces import MoveSink
from chessmate.game.player import AIPlayer

if TYPE_CHECKING:
    from chessmate.core.position import Position

_LOGGER = logging.getLogger(__name__)


class _EngineCommandBus(QObject):
    """Signal bridge for issuing worker commands with queued delivery."""

    search_requested = pyqtSignal(object, int)
    depth_requested = pyqtSignal(int)


class EngineSession:
    """Owns the worker-thread search lifecycle and hands moves back.

    Each request gets a fresh id; only the latest one is pending, and
    results for any other id are dropped.  The accepted move goes through
    the ``deliver`` callback of the turn that asked for it, so the
    controller still has the final say.

    With ``threaded=False`` the worker stays on the calling thread and every
    request completes before :meth:`request` returns.
    """

    __slots__ = (
        "__weakref__",
        "_bus",
        "_thread",
        "_worker",
        "_depth",
        "_request_id",
        "_pending_request",
        "_pending_deliver",
        "_is_started",
    )

    def __init__(
        self,
        *,
        max_depth: int = DEFAULT_DEPTH,
        engine: IEngine | None = None,
        threaded: bool = True,
        parent: QObject | None = None,
    ) -> None:
        self._bus = _EngineCommandBus(parent)
        self._thread = QThread(parent) if threaded else None
        self._worker = EngineWorker(max_depth=max_depth, engine=engine)
        self._depth = max_depth
        self._request_id = 0
        self._pending_request: int | None = None
        self._pending_deliver: MoveSink | None = None
        self._is_started = False

    @property
    def is_started(self) -> bool:
        return self._is_started

    @property
    def has_pending_request(self) -> bool:
        return self._pending_request is not None

    def setup(self) -> None:
        """Move the worker to its thread and connect callbacks."""
        if self._is_started:
            return
        if self._thread is not None:
            self._worker.moveToThread(self._thread)
        self._bus.search_requested.connect(self._worker.request_move)
        self._bus.depth_requested.connect(self._worker.set_depth)
        self._worker.best_move_ready.connect(self._on_best_move)
        self._worker.search_no_move.connect(self._on_no_move)
        self._worker.search_error.connect(self._on_error)
        if self._thread is not None:
            self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Forget the pending request and stop the worker thread."""
        if not self._is_started:
            return
        self.cancel()
        if self._thread is not None:
            self._thread.quit()
            self._thread.wait(2000)
        self._is_started = False

    def create_ai_player(self, color: Color, name: str = "Minimax") -> AIPlayer:
        """Create an AI player whose searches run through this session."""
        return AIPlayer(color, depth=self._depth, name=name, dispatch=self.request)

    def request(
        self,
        position: Position,
        limits: SearchLimits,
        deliver: MoveSink,
    ) -> None:
        """Queue a best-move search for *position* (already a private copy)."""
        if not self._is_started:
            _LOGGER.warning("Engine session not started; search request dropped")
            return
        if limits.max_depth != self._depth:
            self._depth = limits.max_depth
            self._bus.depth_requested.emit(limits.max_depth)

        self._request_id += 1
        self._pending_request = self._request_id
        self._pending_deliver = deliver
        self._bus.search_requested.emit(position, self._request_id)

    def cancel(self) -> None:
        """Ignore the result of the pending search, if any."""
        self._pending_request = None
        self._pending_deliver = None

    # ── Worker callbacks ─────────────────────────────────────────────────

    def _take_pending(self, request_id: int) -> MoveSink | None:
        if request_id != self._pending_request:
            return None
        deliver = self._pending_deliver
        self.cancel()
        return deliver

    def _on_best_move(
        self,
        request_id: int,
        move_obj: object,
        score: int,
        nodes: int,
    ) -> None:
        deliver = self._take_pending(request_id)
        if deliver is None or not isinstance(move_obj, Move):
            return
        outcome = deliver(move_obj)
        _LOGGER.debug(
            "Engine move %s (score=%d nodes=%d): %s",
            move_obj,
            score,
            nodes,
            "accepted" if outcome else outcome.reason,
        )

    def _on_no_move(self, request_id: int) -> None:
        if self._take_pending(request_id) is not None:
            _LOGGER.warning("Engine produced no move for request %d", request_id)

    def _on_error(self, request_id: int, message: str) -> None:
        if self._take_pending(request_id) is not None:
            _LOGGER.error("Engine search %d failed: %s", request_id, message)
