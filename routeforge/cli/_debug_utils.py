from __future__ import annotations

import argparse
from typing import Dict, List, Mapping, Sequence, TypeVar

T = TypeVar("T")


def _debug_enabled(args: argparse.Namespace) -> bool:
    return bool(getattr(args, "debug", False))


def _dbg(args: argparse.Namespace, msg: str) -> None:
    if not _debug_enabled(args):
        return
    print(f"[debug] {msg}")


def _debug_window(args: argparse.Namespace, items: Sequence[T]) -> tuple[List[T], List[T]]:
    """Head and tail of items bounded by --debug-limit (0 shows everything)."""
    limit = getattr(args, "debug_limit", 0) or 0
    if limit <= 0 or len(items) <= limit:
        return list(items), []
    return list(items[:limit]), list(items[-limit:])


def format_counts(counts: Mapping[str, int]) -> str:
    # Highest count first, ties by key, so output is stable across runs.
    ordered: Dict[str, int] = dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))
    if not ordered:
        return "-"
    return ",".join(f"{key}:{value}" for key, value in ordered.items())
