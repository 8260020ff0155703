"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from log_percentiles.core.models import EmphasisMode, RunConfig, SortOrder
from log_percentiles.core.matching import compile_pattern
from log_percentiles.core.pipeline import build_report, load_lines, process

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000
BASE_DIR_ENV = "LOG_PERCENTILES_BASE_DIR"


def _base_dir() -> Path:
    """Return the resolved base directory for tool paths."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def _parse_emphasis(emphasis: str) -> EmphasisMode:
    try:
        return EmphasisMode(emphasis.strip().lower())
    except ValueError as e:
        valid = ", ".join(m.value for m in EmphasisMode)
        raise ValueError(f"Unknown emphasis '{emphasis}'. Valid values: {valid}.") from e


def _parse_sorting(sorting: str | None) -> SortOrder:
    if not sorting:
        return SortOrder.NONE
    try:
        return SortOrder(sorting.strip().lower())
    except ValueError as e:
        raise ValueError(f"Unknown sorting '{sorting}'. Valid values: asc, desc.") from e


async def classify_log_percentiles_impl(
    *,
    log_path: str,
    pattern: str,
    emphasis: str = "percentile",
    sorting: str | None = None,
    matching_only: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `classify_log_percentiles` MCP tool.

    Notes
    -----
    - Boundaries always cover the whole file; `limit` only truncates the
      returned lines.
    - Lines are returned unstyled; the band is in `classification`.
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    limit = min(limit, HARD_LIMIT)

    path = _safe_resolve(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    config = RunConfig(
        pattern=pattern,
        emphasis=_parse_emphasis(emphasis),
        sorting=_parse_sorting(sorting),
        matching_only=matching_only,
        color=False,
    )
    regex = compile_pattern(config.pattern)
    lines = await load_lines(path)
    result = process(lines, config, regex=regex)
    return build_report(result, limit=limit).model_dump(mode="json")
