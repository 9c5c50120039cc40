"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return pydantic models the server can dump to JSON.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, Sequence
from contextlib import aclosing
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ltsv_codec.core.decoder import decode
from ltsv_codec.core.encoder import dumps
from ltsv_codec.core.errors import MalformedField
from ltsv_codec.core.files import iter_path
from ltsv_codec.core.models import BlankLinePolicy, DecodeMode, Record

DEFAULT_LIMIT = 1000
HARD_LIMIT = 10000
BASE_DIR_ENV = "LTSV_BASE_DIR"
ALLOWED_FILE_SUFFIXES = {".ltsv", ".log", ".txt"}


class DecodeIssue(BaseModel):
    line_no: int = Field(description="1-based line number of the malformed line.")
    field: str = Field(description="Raw text of the offending field.")
    reason: str = Field(description="Why the field could not be decoded.")


class DecodeResult(BaseModel):
    count: int = Field(description="Number of records returned.")
    records: list[list[tuple[str, str]]] = Field(
        default_factory=list, description="Records as ordered [label, value] pairs."
    )
    errors: list[DecodeIssue] = Field(default_factory=list)
    truncated: bool = Field(default=False, description="True when limit cut the output short.")


class EncodeResult(BaseModel):
    count: int = Field(description="Number of records encoded.")
    text: str = Field(description="LTSV text, one newline-terminated line per record.")


def _resolve_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    return min(limit, HARD_LIMIT)


def _modes(lenient: bool, skip_blank_lines: bool) -> tuple[DecodeMode, BlankLinePolicy]:
    mode = DecodeMode.COLLECT if lenient else DecodeMode.STRICT
    blank = BlankLinePolicy.SKIP if skip_blank_lines else BlankLinePolicy.EMPTY_RECORD
    return mode, blank


def _issue(exc: MalformedField) -> DecodeIssue:
    return DecodeIssue(line_no=exc.line_no, field=exc.field, reason=exc.reason)


def _collect(items: Iterable[Record | MalformedField], limit: int) -> DecodeResult:
    result = DecodeResult(count=0)
    for item in items:
        if isinstance(item, MalformedField):
            if len(result.errors) >= limit:
                result.truncated = True
                break
            result.errors.append(_issue(item))
            continue
        if len(result.records) >= limit:
            result.truncated = True
            break
        result.records.append(list(item.pairs))
    result.count = len(result.records)
    return result


def decode_text_impl(
    *,
    text: str,
    lenient: bool = False,
    skip_blank_lines: bool = False,
    limit: int | None = None,
) -> DecodeResult:
    """Implementation for the `decode_ltsv` MCP tool."""
    mode, blank = _modes(lenient, skip_blank_lines)
    return _collect(decode(text, mode=mode, blank_lines=blank), _resolve_limit(limit))


def to_record(item: Any, index: int) -> Record:
    """Accept either a JSON object or a list of [label, value] pairs."""
    if isinstance(item, Mapping):
        return Record.from_mapping(item)
    if isinstance(item, Sequence) and not isinstance(item, str):
        pairs = []
        for pair in item:
            if not isinstance(pair, Sequence) or isinstance(pair, str) or len(pair) != 2:
                raise ValueError(
                    f"Record {index}: each field must be a [label, value] pair, got {pair!r}."
                )
            pairs.append((pair[0], pair[1]))
        return Record.from_pairs(pairs)
    raise ValueError(
        f"Record {index}: expected an object or a list of [label, value] pairs, "
        f"got {type(item).__name__}."
    )


def encode_records_impl(*, records: Sequence[Any]) -> EncodeResult:
    """Implementation for the `encode_ltsv` MCP tool."""
    converted = [to_record(item, i) for i, item in enumerate(records)]
    return EncodeResult(count=len(converted), text=dumps(converted))


def base_dir() -> Path:
    """Return the resolved base directory for file access."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError(f"Path escapes {BASE_DIR_ENV}: {path}")
    return p


def _ensure_allowed_suffix(path: Path) -> None:
    suffix = path.suffix.lower()
    if suffix == ".gz":
        suffix = path.with_suffix("").suffix.lower()
    if suffix not in ALLOWED_FILE_SUFFIXES:
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        raise ValueError(f"File type not allowed. Allowed: {allowed} (optionally .gz).")


def resolve_file(path: str) -> Path:
    """Resolve and validate a file path the tools may read."""
    resolved = _safe_resolve(path)
    _ensure_allowed_suffix(resolved)
    if not resolved.is_file():
        raise FileNotFoundError(f"LTSV file not found: {resolved}")
    return resolved


async def read_file_impl(
    *,
    path: str,
    lenient: bool = False,
    skip_blank_lines: bool = False,
    limit: int | None = None,
) -> DecodeResult:
    """Implementation for the `read_ltsv_file` MCP tool."""
    resolved = resolve_file(path)
    limit_eff = _resolve_limit(limit)
    mode, blank = _modes(lenient, skip_blank_lines)

    # Read one record (or error) past the limit so truncation can be reported.
    items: list[Record | MalformedField] = []
    records = errors = 0
    async with aclosing(iter_path(resolved, mode=mode, blank_lines=blank)) as it:
        async for item in it:
            items.append(item)
            if isinstance(item, Record):
                records += 1
            else:
                errors += 1
            if records > limit_eff or errors > limit_eff:
                break
    return _collect(items, limit_eff)
