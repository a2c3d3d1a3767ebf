"""Player contract and turn phases shared by the controller and players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import IntEnum, auto
from typing import TYPE_CHECKING, TypeAlias

from chessmate.core.enums import Color
from chessmate.core.move import Move
from chessmate.game.state import MoveOutcome

if TYPE_CHECKING:
    from chessmate.core.position import Position

# Hands a chosen move back to the controller for the turn it was issued for.
MoveSink: TypeAlias = Callable[[Move], MoveOutcome]


class GamePhase(IntEnum):
    """Where the controller is in the turn cycle."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()  # a human is on move
    THINKING = auto()  # an AI holds the turn's MoveSink
    GAME_OVER = auto()


class IPlayer(ABC):
    """One side of a game.

    The controller calls :meth:`request_move` once per turn with a fresh
    ``deliver`` callback.  Players that choose moves themselves answer
    through it; a callback kept past its turn is refused by the controller.
    """

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, position: Position, deliver: MoveSink) -> None:
        """Start choosing a move in *position* (the live game position)."""
