import numpy as np
import pytest

from ttt_engine.board import O, X, apply_move, deserialize_board, empty_board, is_terminal
from ttt_engine.errors import InvalidMoveError
from ttt_engine.play import bot_reply, engine_policy, play_game, random_policy, self_play


def test_self_play_from_empty_board_is_a_draw():
    record = self_play()
    assert record.utility == 0
    assert record.winner is None
    assert len(record.moves) == 9
    assert is_terminal(record.final_board)
    assert record.start == empty_board()


def test_self_play_is_reproducible():
    assert self_play().moves == self_play().moves


def test_self_play_finishes_won_position():
    record = self_play(deserialize_board("110220000"))
    assert record.moves == [2]
    assert record.winner == X
    assert record.utility == 1


def test_bot_reply_only_on_its_turn():
    b = empty_board()
    assert bot_reply(b, O) is None
    mv = bot_reply(b, X)
    assert mv == 0
    b = apply_move(b, mv, X)
    assert bot_reply(b, X) is None
    assert bot_reply(b, O) == 4


def test_bot_reply_none_when_game_over():
    assert bot_reply(deserialize_board("111220000"), O) is None
    assert bot_reply(deserialize_board("112221121"), X) is None


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("engine", [X, O])
def test_engine_never_loses_to_random_opponent(seed, engine):
    opponent = O if engine == X else X
    rng = np.random.default_rng(seed)
    record = play_game(empty_board(), {engine: engine_policy, opponent: random_policy(rng)})
    if engine == X:
        assert record.utility >= 0
    else:
        assert record.utility <= 0


def test_illegal_policy_move_raises():
    def stubborn(board, player):
        return 0

    with pytest.raises(InvalidMoveError):
        play_game(empty_board(), {X: stubborn, O: stubborn})
