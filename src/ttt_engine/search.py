"""
Exact adversarial search: minimax with alpha-beta pruning over the full game tree.
Teaching notes:
- Values are from X's perspective: +1 X wins, 0 draw, -1 O wins. X maximizes, O minimizes.
- The tree is at most 9 plies deep, so the search is exact, never heuristic.
- Moves are tried in ascending index order and a move replaces the current best
  only on strict improvement, so the lowest-index optimal move wins ties.
- Alpha-beta only skips siblings the opponent would never allow; the root value
  and the chosen move are the same as plain minimax.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import NamedTuple, Optional, Tuple

from .board import (
    O,
    X,
    Board,
    apply_move,
    available_moves,
    is_terminal,
    player_symbol,
    serialize_board,
    utility,
)
from .errors import NoLegalMoveError

logger = logging.getLogger(__name__)


class SearchResult(NamedTuple):
    value: float
    move: Optional[int]


@dataclass
class SearchStats:
    nodes: int = 0
    cutoffs: int = 0


def max_value(board: Board, alpha: float, beta: float, stats: Optional[SearchStats] = None) -> SearchResult:
    if stats is not None:
        stats.nodes += 1
    if is_terminal(board):
        return SearchResult(utility(board), None)

    v = -math.inf
    best_move: Optional[int] = None
    for move in available_moves(board):
        child = apply_move(board, move, X)
        child_value = min_value(child, alpha, beta, stats).value
        if child_value > v:
            v = child_value
            best_move = move
        alpha = max(alpha, v)
        if alpha >= beta:
            if stats is not None:
                stats.cutoffs += 1
            break
    return SearchResult(v, best_move)


def min_value(board: Board, alpha: float, beta: float, stats: Optional[SearchStats] = None) -> SearchResult:
    if stats is not None:
        stats.nodes += 1
    if is_terminal(board):
        return SearchResult(utility(board), None)

    v = math.inf
    best_move: Optional[int] = None
    for move in available_moves(board):
        child = apply_move(board, move, O)
        child_value = max_value(child, alpha, beta, stats).value
        if child_value < v:
            v = child_value
            best_move = move
        beta = min(beta, v)
        if alpha >= beta:
            if stats is not None:
                stats.cutoffs += 1
            break
    return SearchResult(v, best_move)


def search(board: Board, player: int, stats: Optional[SearchStats] = None) -> SearchResult:
    """Root search for ``player``; returns the minimax value and the chosen move.

    Raises NoLegalMoveError when the board is already terminal.
    """
    if is_terminal(board):
        raise NoLegalMoveError(f"No legal move on terminal board {serialize_board(board)}")
    evaluate = max_value if player == X else min_value
    res = evaluate(board, -math.inf, math.inf, stats)
    if stats is not None:
        logger.debug(
            "board=%s player=%s value=%s move=%s nodes=%d cutoffs=%d",
            serialize_board(board), player_symbol(player), res.value, res.move, stats.nodes, stats.cutoffs,
        )
    return res


def best_move(board: Board, player: int) -> int:
    move = search(board, player).move
    assert move is not None
    return move


@lru_cache(maxsize=None)
def minimax(board: Board) -> SearchResult:
    """Plain minimax without pruning, memoised per board.

    The side to move is the one whose mark would keep the counts alternating,
    i.e. the maximizer when the counts are equal. Same tie-break as the pruned
    search. Used as the reference solver.
    """
    if is_terminal(board):
        return SearchResult(utility(board), None)
    maximizing = board.count(X) == board.count(O)
    p = X if maximizing else O
    best_val: Optional[float] = None
    best_mv: Optional[int] = None
    for mv in available_moves(board):
        q = minimax(apply_move(board, mv, p)).value
        if best_val is None or (q > best_val if maximizing else q < best_val):
            best_val = q
            best_mv = mv
    return SearchResult(best_val, best_mv)


def optimal_moves(board: Board) -> Tuple[int, ...]:
    """Every move that achieves the minimax value, ascending."""
    if is_terminal(board):
        return tuple()
    maximizing = board.count(X) == board.count(O)
    p = X if maximizing else O
    target = minimax(board).value
    return tuple(mv for mv in available_moves(board) if minimax(apply_move(board, mv, p)).value == target)


def count_minimax_nodes(board: Board) -> int:
    """Size of the unpruned game tree below ``board`` (board itself included)."""
    if is_terminal(board):
        return 1
    p = X if board.count(X) == board.count(O) else O
    return 1 + sum(count_minimax_nodes(apply_move(board, mv, p)) for mv in available_moves(board))
