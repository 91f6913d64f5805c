"""
Board model: representation, serialization, rules, winner/terminal checks, validity.
Teaching notes:
- A board is a tuple of 9 cells: 0=empty, 1=X, 2=O, row-major. X always starts.
- Boards are immutable values; applying a move returns a new tuple.
- Valid states have counts either equal (X to move) or X one ahead (O to move).
- The side to move is derived from the piece counts, never stored.
"""
from collections import deque
from typing import Iterator, List, Optional, Tuple

from .errors import InvalidBoardError, InvalidMoveError

EMPTY = 0
X = 1
O = 2

Board = Tuple[int, ...]

# Rows, then columns, then the two diagonals. winner() reports the first
# matching line in this order.
WIN_PATTERNS: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

SYMBOLS = {EMPTY: '.', X: 'X', O: 'O'}
_CELL_CHARS = {
    '0': EMPTY, '.': EMPTY, '-': EMPTY, '_': EMPTY,
    '1': X, 'X': X, 'x': X,
    '2': O, 'O': O, 'o': O,
}


def empty_board() -> Board:
    return (EMPTY,) * 9


def other_player(player: int) -> int:
    return O if player == X else X


def player_symbol(player: int) -> str:
    return SYMBOLS[player]


def parse_player(text: str) -> int:
    cell = _CELL_CHARS.get(text.strip())
    if cell not in (X, O):
        raise InvalidBoardError(f"Unknown player: {text!r} (expected X or O)")
    return cell


def serialize_board(board: Board) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(text: str) -> Board:
    """Parse 9 cells written as digits (``100020000``) or symbols (``X...O....``)."""
    raw = text.strip()
    if len(raw) != 9 or any(c not in _CELL_CHARS for c in raw):
        raise InvalidBoardError(f"Invalid board string {raw!r}. Must be 9 chars of 0/1/2 or ./X/O.")
    return tuple(_CELL_CHARS[c] for c in raw)


def render_board(board: Board) -> str:
    rows = []
    for r in range(3):
        rows.append(' '.join(SYMBOLS[board[3 * r + c]] for c in range(3)))
    return '\n'.join(rows)


def piece_counts(board: Board) -> Tuple[int, int]:
    return board.count(X), board.count(O)


def current_player(board: Board) -> int:
    x_count, o_count = piece_counts(board)
    if x_count == o_count:
        return X
    if x_count == o_count + 1:
        return O
    raise InvalidBoardError(
        f"Board {serialize_board(board)} has x={x_count} o={o_count}; cannot derive side to move"
    )


def available_moves(board: Board) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def apply_move(board: Board, move: int, player: int) -> Board:
    if not 0 <= move < 9:
        raise InvalidMoveError(f"Move {move} is outside the board")
    if board[move] != EMPTY:
        raise InvalidMoveError(f"Cell {move} is already occupied by {SYMBOLS[board[move]]}")
    lst = list(board)
    lst[move] = player
    return tuple(lst)


def winner(board: Board) -> Optional[int]:
    for a, b, c in WIN_PATTERNS:
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v
    return None


def is_full(board: Board) -> bool:
    return EMPTY not in board


def is_terminal(board: Board) -> bool:
    return winner(board) is not None or is_full(board)


def utility(board: Board) -> int:
    w = winner(board)
    if w == X:
        return 1
    if w == O:
        return -1
    return 0


def is_valid_state(board: Board) -> bool:
    if len(board) != 9 or any(v not in (EMPTY, X, O) for v in board):
        return False
    x_count, o_count = piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))

    x_wins = count_wins(X)
    o_wins = count_wins(O)
    if x_wins > 0 and o_wins > 0:
        return False
    if x_wins > 0 and x_count != o_count + 1:
        return False
    if o_wins > 0 and x_count != o_count:
        return False
    return True


def reachable_states() -> Iterator[Board]:
    """Yield every board reachable from the empty board, terminal ones included.

    Breadth-first, so boards come out in order of increasing piece count.
    Play stops at terminal boards.
    """
    start = empty_board()
    q = deque([start])
    seen = {start}
    while q:
        s = q.popleft()
        yield s
        if is_terminal(s):
            continue
        p = current_player(s)
        for mv in available_moves(s):
            child = apply_move(s, mv, p)
            if child not in seen:
                seen.add(child)
                q.append(child)
