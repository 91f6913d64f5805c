import pytest

from ttt_engine.board import O, X, deserialize_board, empty_board
from ttt_engine.errors import NoLegalMoveError
from ttt_engine.search import (
    SearchStats,
    best_move,
    count_minimax_nodes,
    max_value,
    min_value,
    minimax,
    optimal_moves,
    search,
)


def test_immediate_win_completes_row():
    b = deserialize_board("110220000")
    assert best_move(b, X) == 2
    assert search(b, X).value == 1


def test_o_takes_immediate_win():
    b = deserialize_board("110220100")
    assert best_move(b, O) == 5
    assert search(b, O).value == -1


def test_o_blocks_double_corner_with_an_edge():
    # X on opposite corners, O in the centre: any corner reply loses to a fork.
    b = deserialize_board("100020001")
    res = search(b, O)
    assert res.value == 0
    assert res.move in (1, 3, 5, 7)
    assert res.move == 1
    assert optimal_moves(b) == (1, 3, 5, 7)


def test_o_must_block_open_row():
    b = deserialize_board("110020000")
    assert best_move(b, O) == 2


def test_empty_board_value_is_draw():
    res = search(empty_board(), X)
    assert res.value == 0
    assert res.move == 0
    assert optimal_moves(empty_board()) == tuple(range(9))


def test_terminal_board_raises():
    with pytest.raises(NoLegalMoveError):
        best_move(deserialize_board("111220000"), O)
    with pytest.raises(NoLegalMoveError):
        search(deserialize_board("112221121"), X)


def test_repeated_calls_are_deterministic():
    b = deserialize_board("100000000")
    first = best_move(b, O)
    assert all(best_move(b, O) == first for _ in range(5))
    assert first == 4


def test_evaluators_return_utility_at_terminal():
    b = deserialize_board("222110100")
    assert max_value(b, float("-inf"), float("inf")).move is None
    assert min_value(b, float("-inf"), float("inf")).value == -1


def test_stats_show_pruning():
    stats = SearchStats()
    res = search(empty_board(), X, stats)
    assert res == minimax(empty_board())
    assert stats.cutoffs > 0
    assert 0 < stats.nodes < count_minimax_nodes(empty_board())


def test_count_minimax_nodes_full_tree():
    assert count_minimax_nodes(empty_board()) == 549946
    assert count_minimax_nodes(deserialize_board("111220000")) == 1
