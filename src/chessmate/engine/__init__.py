"""Chess engine package: minimax search and models.

The Qt worker lives in :mod:`chessmate.engine.qt_bridge` and is imported
explicitly so the search itself stays usable without a Qt event loop.
"""

from chessmate.engine.minimax import (
    INF_SCORE,
    MATE_SCORE,
    PIECE_VALUES,
    MinimaxEngine,
    evaluate,
    find_best_move,
)
from chessmate.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits, SearchResult

__all__ = [
    "DEFAULT_DEPTH",
    "IEngine",
    "INF_SCORE",
    "MATE_SCORE",
    "MinimaxEngine",
    "PIECE_VALUES",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "find_best_move",
]
