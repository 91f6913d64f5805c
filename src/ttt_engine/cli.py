from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from . import __version__
from .benchmark import pruning_report, save_report
from .board import (
    X,
    O,
    Board,
    current_player,
    deserialize_board,
    is_terminal,
    is_valid_state,
    other_player,
    parse_player,
    player_symbol,
    render_board,
    serialize_board,
    utility,
    winner,
)
from .config import log_level, reports_dir
from .errors import TicTacToeError
from .play import engine_policy, play_game, random_policy
from .search import search


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt-engine", description="Never-losing tic-tac-toe engine")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for the random opponent")

    p_move = sub.add_parser("move", help="Best move for the side to move (or --player)")
    p_move.add_argument("--board", help="Board string, e.g., 110220000 or XX.OO.... (omit with --stdin)")
    p_move.add_argument("--player", help="X or O (default: side to move derived from the board)")
    p_move.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_show = sub.add_parser("show", help="Render a board with its winner and terminal status")
    p_show.add_argument("--board", required=True, help="Board string, e.g., 100020000")

    p_play = sub.add_parser("selfplay", help="Play a board out with the engine")
    p_play.add_argument("--board", default="000000000", help="Starting board (default: empty)")
    p_play.add_argument(
        "--opponent",
        choices=["engine", "random"],
        default="engine",
        help="Who plays against the engine (default: engine)",
    )
    p_play.add_argument(
        "--engine-side",
        help="X or O; side the engine plays against a random opponent (default: side to move)",
    )

    p_bench = sub.add_parser("bench", help="Compare alpha-beta with plain minimax on reachable boards")
    p_bench.add_argument(
        "--min-plies", type=int, default=2, help="Only boards with at least this many pieces (default: 2)"
    )
    p_bench.add_argument("--save", action="store_true", help="Write pruning_report.json")
    p_bench.add_argument(
        "--out", type=Path, default=None, help="Report directory (default: $TTT_ENGINE_REPORTS or reports/)"
    )

    return p


def _print_info() -> None:
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    print(f"numpy={np.__version__}")


def _read_board(raw: Optional[str]) -> Optional[Board]:
    try:
        b = deserialize_board(raw or "")
    except TicTacToeError as e:
        logging.error("%s", e)
        return None
    if not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def _cmd_move(ns: argparse.Namespace) -> int:
    if ns.stdin:
        w = csv.writer(sys.stdout)
        w.writerow(["board", "player", "move", "value"])
        for line in sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            try:
                b = deserialize_board(raw)
            except TicTacToeError:
                continue
            if not is_valid_state(b) or is_terminal(b):
                continue
            p = current_player(b)
            res = search(b, p)
            w.writerow([serialize_board(b), player_symbol(p), res.move, res.value])
        return 0

    b = _read_board(ns.board)
    if b is None:
        return 2
    try:
        p = parse_player(ns.player) if ns.player else current_player(b)
        res = search(b, p)
    except TicTacToeError as e:
        logging.error("%s", e)
        return 2
    logging.info("player=%s move=%d value=%s", player_symbol(p), res.move, res.value)
    return 0


def _cmd_show(ns: argparse.Namespace) -> int:
    b = _read_board(ns.board)
    if b is None:
        return 2
    for row in render_board(b).splitlines():
        logging.info("%s", row)
    w = winner(b)
    logging.info(
        "winner=%s terminal=%s utility=%d",
        player_symbol(w) if w is not None else "none",
        is_terminal(b),
        utility(b),
    )
    return 0


def _cmd_selfplay(ns: argparse.Namespace) -> int:
    b = _read_board(ns.board)
    if b is None:
        return 2
    if is_terminal(b):
        logging.error("Board is already terminal; nothing to play.")
        return 2
    try:
        engine_side = parse_player(ns.engine_side) if ns.engine_side else current_player(b)
    except TicTacToeError as e:
        logging.error("%s", e)
        return 2
    if ns.opponent == "random":
        policies = {engine_side: engine_policy, other_player(engine_side): random_policy(np.random.default_rng(ns.seed))}
    else:
        policies = {X: engine_policy, O: engine_policy}
    record = play_game(b, policies)
    for row in render_board(record.final_board).splitlines():
        logging.info("%s", row)
    logging.info(
        "moves=%s winner=%s utility=%d",
        " ".join(map(str, record.moves)),
        player_symbol(record.winner) if record.winner is not None else "none",
        record.utility,
    )
    return 0


def _cmd_bench(ns: argparse.Namespace) -> int:
    if ns.min_plies < 0 or ns.min_plies > 8:
        logging.error("--min-plies out of range [0,8]: %s", ns.min_plies)
        return 2
    report = pruning_report(ns.min_plies)
    logging.info(
        "states=%d pruned_nodes=%d unpruned_nodes=%d cutoffs=%d",
        report.states,
        report.pruned_nodes,
        report.unpruned_nodes,
        report.cutoffs,
    )
    logging.info(
        "ratio mean=%.4f median=%.4f p95=%.4f max=%.4f mismatches=%d",
        report.ratio_mean,
        report.ratio_median,
        report.ratio_p95,
        report.ratio_max,
        report.value_mismatches,
    )
    if ns.save:
        path = save_report(report, ns.out if ns.out is not None else reports_dir())
        logging.info("Saved report to: %s", path)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else log_level(),
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        print(__version__)
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    if ns.cmd == "move":
        return _cmd_move(ns)
    if ns.cmd == "show":
        return _cmd_show(ns)
    if ns.cmd == "selfplay":
        return _cmd_selfplay(ns)
    if ns.cmd == "bench":
        return _cmd_bench(ns)

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
