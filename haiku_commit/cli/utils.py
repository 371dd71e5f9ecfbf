"""CLI Utility Functions"""

import sys
from pathlib import Path

TRUNCATION_MARKER = "\n... (truncated)"


def truncate_diff(diff: str, max_length: int) -> tuple[str, bool]:
    """Cut the diff to `max_length` characters. Returns (diff, was_truncated)."""
    if len(diff) <= max_length:
        return diff, False
    return diff[:max_length] + TRUNCATION_MARKER, True


def read_diff(path: str | None) -> str:
    """Read the diff from a file, or from stdin when no path is given."""
    if path:
        return Path(path).read_text(encoding='utf-8', errors='replace')
    if sys.stdin.isatty():
        return ""
    return sys.stdin.read()
