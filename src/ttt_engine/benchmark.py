"""
Pruning efficiency report: alpha-beta versus plain minimax on reachable boards.

For each reachable non-terminal board with enough pieces on it, count the
nodes each search visits and check that both agree on the root value.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

from .board import current_player, is_terminal, reachable_states
from .config import get_git_commit
from .search import SearchStats, count_minimax_nodes, minimax, search

logger = logging.getLogger(__name__)

REPORT_FILE = "pruning_report.json"


@dataclass
class PruningReport:
    min_plies: int
    states: int
    pruned_nodes: int
    unpruned_nodes: int
    cutoffs: int
    ratio_mean: float
    ratio_median: float
    ratio_p95: float
    ratio_max: float
    value_mismatches: int


def pruning_report(min_plies: int = 2) -> PruningReport:
    pruned: List[int] = []
    unpruned: List[int] = []
    cutoffs = 0
    mismatches = 0
    for board in reachable_states():
        if is_terminal(board) or sum(1 for v in board if v != 0) < min_plies:
            continue
        stats = SearchStats()
        res = search(board, current_player(board), stats)
        if res.value != minimax(board).value:
            mismatches += 1
        pruned.append(stats.nodes)
        unpruned.append(count_minimax_nodes(board))
        cutoffs += stats.cutoffs
    if not pruned:
        raise ValueError(f"No non-terminal reachable boards with at least {min_plies} pieces")
    ratios = np.asarray(pruned, dtype=float) / np.asarray(unpruned, dtype=float)
    report = PruningReport(
        min_plies=min_plies,
        states=len(pruned),
        pruned_nodes=int(np.sum(pruned)),
        unpruned_nodes=int(np.sum(unpruned)),
        cutoffs=cutoffs,
        ratio_mean=float(np.mean(ratios)),
        ratio_median=float(np.median(ratios)),
        ratio_p95=float(np.percentile(ratios, 95)),
        ratio_max=float(np.max(ratios)),
        value_mismatches=mismatches,
    )
    logger.debug("pruning report: %s", report)
    return report


def save_report(report: PruningReport, out_dir: Path) -> Path:
    from . import __version__

    out_dir.mkdir(parents=True, exist_ok=True)
    payload: Dict[str, Any] = {
        "created_at": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "git_commit": get_git_commit(),
        "report": asdict(report),
    }
    path = out_dir / REPORT_FILE
    path.write_text(json.dumps(payload, indent=2, sort_keys=True))
    return path
