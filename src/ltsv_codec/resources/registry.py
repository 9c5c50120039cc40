"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

import aiofiles
from mcp.server.fastmcp import FastMCP

from ltsv_codec.core.files import resolve_encoding
from ltsv_codec.tools.codec import (
    ALLOWED_FILE_SUFFIXES,
    BASE_DIR_ENV,
    DecodeResult,
    base_dir,
    resolve_file,
)

SAMPLE_DOCUMENT = (
    "host:127.0.0.1\tuser:-\ttime:[10/Oct/2000:13:55:36 -0700]\treq:GET / HTTP/1.0\tstatus:200\n"
    "host:127.0.0.1\tuser:frank\ttime:[10/Oct/2000:13:55:37 -0700]\treq:GET /a HTTP/1.0\tstatus:404\n"
)


def help_text() -> str:
    """Return a short list of available resource URIs."""
    allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
    return (
        "Resources:\n"
        "- app://ltsv-codec/help\n"
        "- app://ltsv-codec/examples/sample\n"
        "- app://ltsv-codec/schemas/decode-result\n"
        f"- ltsv://{{path}} (restricted to {BASE_DIR_ENV}; allowed: {allowed}; no .gz)\n"
        f"\nBase directory: {base_dir()}\n"
    )


async def read_raw_text(path: str) -> str:
    """Read an uncompressed LTSV file from within LTSV_BASE_DIR."""
    p = resolve_file(path)
    if p.suffix.lower() == ".gz":
        raise ValueError("Compressed files are only readable through read_ltsv_file.")
    async with aiofiles.open(p, encoding=resolve_encoding(), newline="\n") as f:
        return await f.read()


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://ltsv-codec/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return help_text()

    @mcp.resource("app://ltsv-codec/examples/sample")
    def sample_document() -> str:
        """Return a tiny LTSV access log for demos and tests."""
        return SAMPLE_DOCUMENT

    @mcp.resource("app://ltsv-codec/schemas/decode-result")
    def decode_result_schema() -> dict[str, Any]:
        """Return the JSON schema of decode tool results."""
        return DecodeResult.model_json_schema()

    @mcp.resource("ltsv://{path}")
    async def read_raw(path: str) -> str:
        """Return the raw text of an LTSV file within LTSV_BASE_DIR."""
        return await read_raw_text(path)
