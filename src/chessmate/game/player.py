"""Human and engine-backed players."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from chessmate.core.enums import Color
from chessmate.engine.minimax import MinimaxEngine
from chessmate.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits, SearchResult
from chessmate.game.interfaces import IPlayer, MoveSink

if TYPE_CHECKING:
    from chessmate.core.position import Position

_LOGGER = logging.getLogger(__name__)

# (position copy, limits, deliver) -> None; runs the search somewhere else.
SearchDispatch = Callable[["Position", SearchLimits, MoveSink], None]


class HumanPlayer(IPlayer):
    """Moves come from the interactive side via ``GameController.submit_move``."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position, deliver: MoveSink) -> None:
        pass


class AIPlayer(IPlayer):
    """A side played by the minimax search.

    By default the search runs inline on a copy of the position and the best
    move is delivered before :meth:`request_move` returns.  Pass *dispatch*
    to run it elsewhere instead (see ``EngineSession.request``); the
    dispatcher receives the position copy, this player's limits and the
    turn's ``deliver`` callback.

    Args:
        color: Side the engine plays.
        engine: Search used inline; defaults to :class:`MinimaxEngine`.
        depth: Search depth in plies.
        name: Display name.
        dispatch: Optional hand-off for asynchronous searches.
    """

    __slots__ = ("_color", "_name", "_engine", "_limits", "_dispatch", "_last_result")

    def __init__(
        self,
        color: Color,
        engine: IEngine | None = None,
        *,
        depth: int = DEFAULT_DEPTH,
        name: str = "Minimax",
        dispatch: SearchDispatch | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._limits = SearchLimits(max_depth=depth)
        self._dispatch = dispatch
        self._last_result: SearchResult | None = None

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @property
    def last_result(self) -> SearchResult | None:
        """Result of the latest inline search (``None`` when dispatched)."""
        return self._last_result

    def set_depth(self, depth: int) -> None:
        """Search *depth* plies from the next request on."""
        self._limits = SearchLimits(max_depth=depth)

    def request_move(self, position: Position, deliver: MoveSink) -> None:
        if self._dispatch is not None:
            self._last_result = None
            self._dispatch(position.copy(), self._limits, deliver)
            return

        result = self._engine.search(position.copy(), self._limits)
        self._last_result = result
        if result.best_move is None:
            _LOGGER.warning("%s found no move for %s", self._name, self._color)
            return
        deliver(result.best_move)
