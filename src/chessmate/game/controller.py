"""GameController, the central orchestrator of a game.

Coordinates: Players, Game, phase transitions.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessmate.core.enums import Color, GameStatus, RejectReason
from chessmate.core.move import Move
from chessmate.core.position import Position
from chessmate.game.interfaces import GamePhase, IPlayer, MoveSink
from chessmate.game.state import Game, MoveOutcome

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, Game], None]
GameOverCallback = Callable[[GameStatus, Color], None]  # status, side to move
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Orchestrates a full game: validates moves, switches turns, prompts
    players, notifies listeners.

    Human moves enter through :meth:`submit_move`, which only accepts them
    while a human is on move.  An AI answers through the ``deliver``
    callback it was handed for its turn; every new turn (and every undo,
    restart or new game) retires the previous callback, so a late engine
    result cannot land on a position it was not computed for.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).  ``EngineSession`` brings worker results back to
    that thread before delivering them.
    """

    __slots__ = ("_game", "_players", "_phase", "_turn", "events")

    def __init__(self) -> None:
        self._game = Game()
        self._players: dict[Color, IPlayer] = {}
        self._phase = GamePhase.NOT_STARTED
        self._turn = 0
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def game(self) -> Game:
        return self._game

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._game.current_player)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        position: Position | None = None,
    ) -> None:
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._game = Game(position)
        _LOGGER.info("New game: %s (white) vs %s (black)", white.name, black.name)
        self._start_turn()

    def restart(self) -> None:
        """Start over from the initial position with the same players."""
        if self._phase == GamePhase.NOT_STARTED:
            return
        self._game.restart()
        self._start_turn()

    def submit_move(self, move: Move) -> MoveOutcome:
        """Submit a human move for the side to move. Rejections change nothing."""
        if self._phase == GamePhase.NOT_STARTED:
            return self._reject(RejectReason.NOT_STARTED, move)
        if self._phase == GamePhase.GAME_OVER:
            return self._reject(RejectReason.GAME_OVER, move)
        if self._phase == GamePhase.THINKING:
            return self._reject(RejectReason.AWAITING_ENGINE, move)
        return self._commit(move)

    def undo_move(self) -> bool:
        """Take back one ply. Returns True on success."""
        if self._phase == GamePhase.NOT_STARTED:
            return False
        if self._game.undo_last_move() is None:
            return False
        self._start_turn()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit(self, move: Move) -> MoveOutcome:
        outcome = self._game.commit(move)
        if not outcome:
            return outcome

        self._emit_move(move)
        self._start_turn()
        return outcome

    def _start_turn(self) -> None:
        self._turn += 1
        if self._game.is_game_over:
            self._set_phase(GamePhase.GAME_OVER)
            self._emit_game_over()
            return
        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._set_phase(GamePhase.AWAITING_MOVE)
        else:
            self._set_phase(GamePhase.THINKING)
        cp.request_move(self._game.position, self._make_sink(self._turn))

    def _make_sink(self, turn: int) -> MoveSink:
        def deliver(move: Move) -> MoveOutcome:
            if turn != self._turn or self._phase != GamePhase.THINKING:
                return self._reject(RejectReason.STALE_ENGINE_MOVE, move)
            return self._commit(move)

        return deliver

    def _reject(self, reason: RejectReason, move: Move) -> MoveOutcome:
        _LOGGER.debug("Controller rejected %s: %s", move, reason.name)
        return MoveOutcome.reject(reason, self._game.status, move)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._game)

    def _emit_game_over(self) -> None:
        for cb in self.events.on_game_over:
            cb(self._game.status, self._game.current_player)
