"""Exceptions raised by the board model and the search engine.

All of them signal caller contract violations (stale or malformed boards,
asking for a move on a finished game); none are meant to be recovered from
inside the library.
"""


class TicTacToeError(Exception):
    pass


class InvalidBoardError(TicTacToeError, ValueError):
    pass


class InvalidMoveError(TicTacToeError):
    pass


class NoLegalMoveError(TicTacToeError):
    pass
