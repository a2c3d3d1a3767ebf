"""Game management layer: game facade, controller and players.

Quick start::

    from chessmate.game import Game

    game = Game()
    outcome = game.attempt_move(4, 1, 4, 3)  # e2-e4
    assert outcome.accepted
"""

from chessmate.game.controller import GameController, GameEvents
from chessmate.game.interfaces import GamePhase, IPlayer, MoveSink
from chessmate.game.player import AIPlayer, HumanPlayer
from chessmate.game.state import Game, MoveOutcome

__all__ = [
    # Interfaces
    "GamePhase",
    "IPlayer",
    "MoveSink",
    # Concrete
    "AIPlayer",
    "Game",
    "GameController",
    "GameEvents",
    "HumanPlayer",
    "MoveOutcome",
]
