"""Shared helpers for duckext_tooling (parallelism, sizes, paths)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

DEFAULT_JOBS = 4


# --- Parallelism ---


def portable_jobs(environ: Mapping[str, str] | None = None) -> int:
    """Parallelism hint for make -j: JOBS env var, else CPU count, else DEFAULT_JOBS."""
    env = os.environ if environ is None else environ
    raw = (env.get("JOBS") or "").strip()
    if raw:
        try:
            jobs = int(raw)
        except ValueError:
            msg = f"JOBS must be a positive integer, got: {raw!r}"
            raise ValueError(msg) from None
        if jobs < 1:
            msg = f"JOBS must be a positive integer, got: {raw!r}"
            raise ValueError(msg)
        return jobs
    return os.cpu_count() or DEFAULT_JOBS


# --- Sizes ---


def human_size(n: int) -> str:
    """Format a byte count like du -h (e.g. 512B, 1.5K, 12M)."""
    size = float(n)
    for unit in ("B", "K", "M", "G"):
        if size < 1024 or unit == "G":
            if unit == "B":
                return f"{int(size)}{unit}"
            return f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}G"


# --- Path ---


def display_path(p: Path, root: Path) -> str:
    """p relative to root when it is under root, else p as given."""
    try:
        return str(p.relative_to(root))
    except ValueError:
        return str(p)
