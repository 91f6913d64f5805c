"""ttt_engine package.

Never-losing tic-tac-toe move selection: an immutable board model and an exact
minimax search with alpha-beta pruning.

Convenience imports are exposed for common workflows.
"""

from importlib.metadata import PackageNotFoundError, version

from .board import (
    EMPTY,
    O,
    X,
    apply_move,
    available_moves,
    current_player,
    empty_board,
    is_terminal,
    utility,
    winner,
)
from .errors import InvalidBoardError, InvalidMoveError, NoLegalMoveError, TicTacToeError
from .search import SearchResult, best_move, search

try:
    __version__ = version("ttt-engine")
except PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0"

__all__ = [
    "EMPTY",
    "X",
    "O",
    "empty_board",
    "current_player",
    "available_moves",
    "apply_move",
    "winner",
    "is_terminal",
    "utility",
    "best_move",
    "search",
    "SearchResult",
    "TicTacToeError",
    "InvalidBoardError",
    "InvalidMoveError",
    "NoLegalMoveError",
]
