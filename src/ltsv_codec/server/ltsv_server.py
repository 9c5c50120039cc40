"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: decode text, encode records, read LTSV files
- Resources: help, a sample document, result schema and raw file access

Run locally (stdio):
    python -m ltsv_codec.server.ltsv_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from ltsv_codec.resources.registry import register_resources
from ltsv_codec.tools.codec import decode_text_impl, encode_records_impl, read_file_impl

LOGGER = logging.getLogger(__name__)
LOG_LEVEL_ENV = "LTSV_LOG_LEVEL"


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"{LOG_LEVEL_ENV} must be a logging level name, got {level_name!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


mcp = FastMCP("ltsv-codec", json_response=True)

register_resources(mcp)


@mcp.tool()
def decode_ltsv(
    text: str,
    lenient: bool = False,
    skip_blank_lines: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Decode LTSV text into records.

    Parameters
    ----------
    text:
        LTSV document; one record per line, tab-separated label:value fields.
    lenient:
        When true, malformed lines are reported under "errors" instead of failing the call.
    skip_blank_lines:
        When true, empty lines are dropped instead of becoming empty records.
    limit:
        Maximum number of records, and separately of errors, returned (hard-capped).

    Returns
    -------
    dict:
        {"count": int, "records": [[[label, value], ...], ...], "errors": [...], "truncated": bool}
    """
    return decode_text_impl(
        text=text,
        lenient=lenient,
        skip_blank_lines=skip_blank_lines,
        limit=limit,
    ).model_dump()


@mcp.tool()
def encode_ltsv(records: list[Any]) -> dict[str, Any]:
    """Encode records into LTSV text.

    Each record is either an object ({"host": "a", "status": "200"}) or a list of
    [label, value] pairs when field order or duplicate labels matter.
    """
    return encode_records_impl(records=records).model_dump()


@mcp.tool()
async def read_ltsv_file(
    path: str,
    lenient: bool = False,
    skip_blank_lines: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Decode an LTSV file (plain or .gz) located under LTSV_BASE_DIR."""
    result = await read_file_impl(
        path=path,
        lenient=lenient,
        skip_blank_lines=skip_blank_lines,
        limit=limit,
    )
    return result.model_dump()


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
