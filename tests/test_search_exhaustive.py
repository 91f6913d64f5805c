from typing import Dict, Tuple

import pytest

from ttt_engine.board import (
    O,
    X,
    Board,
    apply_move,
    available_moves,
    current_player,
    empty_board,
    is_terminal,
    reachable_states,
    utility,
)
from ttt_engine.search import SearchResult, best_move, minimax, optimal_moves, search


@pytest.fixture(scope="module")
def nonterminal_states():
    return [s for s in reachable_states() if not is_terminal(s)]


@pytest.fixture(scope="module")
def pruned(nonterminal_states) -> Dict[Board, SearchResult]:
    return {s: search(s, current_player(s)) for s in nonterminal_states}


def test_nonterminal_count(nonterminal_states):
    assert len(nonterminal_states) == 4520


def test_pruned_matches_plain_minimax_everywhere(pruned):
    for s, res in pruned.items():
        ref = minimax(s)
        assert res.value == ref.value, s
        assert res.move == ref.move, s
        assert res.move in optimal_moves(s), s


def test_chosen_move_is_lowest_index_optimal(pruned):
    for s, res in pruned.items():
        assert res.move == optimal_moves(s)[0], s


def test_best_move_is_legal_on_every_reachable_state(pruned):
    for s, res in pruned.items():
        assert res.move in available_moves(s)


def test_engine_move_preserves_game_value(pruned):
    # The engine never throws away value, so it can never lose from a drawn or won position.
    for s, res in pruned.items():
        child = apply_move(s, res.move, current_player(s))
        assert minimax(child).value == minimax(s).value, s


def _worst_outcome(board: Tuple[int, ...], engine: int) -> int:
    """Worst utility (for the engine) over every opponent reply sequence."""
    if is_terminal(board):
        return utility(board) if engine == X else -utility(board)
    p = current_player(board)
    if p == engine:
        return _worst_outcome(apply_move(board, best_move(board, p), p), engine)
    return min(_worst_outcome(apply_move(board, mv, p), engine) for mv in available_moves(board))


@pytest.mark.parametrize("engine", [X, O])
def test_engine_never_loses_from_empty_board(engine):
    assert _worst_outcome(empty_board(), engine) >= 0
