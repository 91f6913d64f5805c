"""Environment-first settings for the command line and saved reports.

The engine itself takes no configuration; these helpers only serve the CLI
and the benchmark report writer.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

DEFAULT_LOG_LEVEL = logging.INFO


def log_level() -> int:
    """Level named by TTT_ENGINE_LOG_LEVEL (e.g. ``DEBUG``), INFO when unset or unknown."""
    name = os.getenv("TTT_ENGINE_LOG_LEVEL")
    if not name:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTT_ENGINE_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("TTT_ENGINE_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def reports_dir() -> Path:
    p = os.getenv("TTT_ENGINE_REPORTS")
    return Path(p) if p else repo_root() / "reports"


def get_git_commit() -> str | None:
    """Return the current git commit hash, or None outside a repository."""
    try:
        out = subprocess.check_output(
            ["git", "-C", str(repo_root()), "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return out.strip() or None
