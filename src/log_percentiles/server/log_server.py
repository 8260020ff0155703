"""MCP server entrypoint (stdio transport).

Run locally (stdio):
    python -m log_percentiles.server.log_server
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_percentiles.core.report import PercentileReport
from log_percentiles.tools.percentiles import classify_log_percentiles_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("LOG_PERCENTILES_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("log-percentiles", json_response=True)


@mcp.resource("app://log-percentiles/schemas/report")
def report_schema() -> dict[str, Any]:
    """Return the JSON schema for classify_log_percentiles results."""
    return PercentileReport.model_json_schema()


@mcp.tool()
async def classify_log_percentiles(
    log_path: str,
    pattern: str,
    emphasis: str = "percentile",
    sorting: str | None = None,
    matching_only: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Classify numbers captured from a log file into p50/p90/p99 bands.

    Parameters
    ----------
    log_path:
        Path to a local log file (plain text or .gz), resolved under
        LOG_PERCENTILES_BASE_DIR.
    pattern:
        Regular expression. Group 1 (or the whole match when there are no
        groups) must capture an unsigned integer, e.g. "took (\\d+)ms".
    emphasis:
        "percentile" (default), "highlight" or "bold". Only percentile mode
        computes boundaries.
    sorting:
        "asc" or "desc" to order matching lines by number. Non-matching lines
        are dropped. Cannot be combined with matching_only.
    matching_only:
        Drop non-matching lines and keep input order.
    limit:
        Maximum number of lines returned (hard-capped in the implementation).

    Returns
    -------
    dict:
        {"count", "matched", "boundaries", "summary", "lines": [...]}
    """
    return await classify_log_percentiles_impl(
        log_path=log_path,
        pattern=pattern,
        emphasis=emphasis,
        sorting=sorting,
        matching_only=matching_only,
        limit=limit,
    )


def main() -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
