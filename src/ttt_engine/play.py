"""
Game driver around the search engine.

A policy is any callable mapping (board, player) to a move. The engine policy
is the alpha-beta search; the random policy is the usual baseline opponent.
``bot_reply`` is the hook an interactive front end calls after every board
change to find out whether the computer should move.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional

import numpy as np

from .board import (
    O,
    X,
    Board,
    apply_move,
    available_moves,
    current_player,
    empty_board,
    is_terminal,
    player_symbol,
    serialize_board,
    utility,
    winner,
)
from .search import best_move

logger = logging.getLogger(__name__)

Policy = Callable[[Board, int], int]


@dataclass
class GameRecord:
    start: Board
    moves: List[int] = field(default_factory=list)
    final_board: Optional[Board] = None
    winner: Optional[int] = None
    utility: int = 0


def engine_policy(board: Board, player: int) -> int:
    return best_move(board, player)


def random_policy(rng: np.random.Generator) -> Policy:
    def _choose(board: Board, player: int) -> int:
        return int(rng.choice(available_moves(board)))

    return _choose


def bot_reply(board: Board, bot_player: int) -> Optional[int]:
    """Engine move for ``bot_player`` if the game is on and it is its turn, else None."""
    if is_terminal(board) or current_player(board) != bot_player:
        return None
    return best_move(board, bot_player)


def play_game(board: Board, policies: Mapping[int, Policy]) -> GameRecord:
    """Play ``board`` out to a terminal position.

    ``policies`` maps X and O to the policy choosing that side's moves.
    Illegal proposals surface as InvalidMoveError from apply_move.
    """
    record = GameRecord(start=board)
    s = board
    while not is_terminal(s):
        p = current_player(s)
        mv = policies[p](s, p)
        s = apply_move(s, mv, p)
        record.moves.append(mv)
        logger.debug("ply=%d player=%s move=%d board=%s", len(record.moves), player_symbol(p), mv, serialize_board(s))
    record.final_board = s
    record.winner = winner(s)
    record.utility = utility(s)
    return record


def self_play(board: Optional[Board] = None) -> GameRecord:
    if board is None:
        board = empty_board()
    return play_game(board, {X: engine_policy, O: engine_policy})
