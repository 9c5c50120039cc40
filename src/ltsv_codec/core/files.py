"""Async file access for LTSV documents.

Thin I/O layer around the decoder and encoder: opens plain or gzip files and
feeds them through the same per-line logic as :func:`decoder.decode`.
"""

from __future__ import annotations

import codecs
import gzip
import logging
import os
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .decoder import decode_raw_line
from .encoder import RecordLike, iter_encode
from .errors import MalformedField
from .models import BlankLinePolicy, DecodeMode, Record

logger = logging.getLogger(__name__)

ENCODING_ENV = "LTSV_ENCODING"
DEFAULT_ENCODING = "utf-8"


def resolve_encoding(encoding: str | None = None) -> str:
    """Return the text encoding to use, honoring LTSV_ENCODING."""
    name = encoding or os.getenv(ENCODING_ENV) or DEFAULT_ENCODING
    try:
        codecs.lookup(name)
    except LookupError as exc:
        source = "encoding" if encoding else ENCODING_ENV
        raise ValueError(f"{source} names an unknown codec: {name!r}") from exc
    return name


@asynccontextmanager
async def _open_text(path: Path, mode: str, *, encoding: str):
    """Open an LTSV file for async text I/O (plain or gzip)."""
    # newline="\n": split only on LF and never translate on write.
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode=f"{mode}t", encoding=encoding, newline="\n")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, mode, encoding=encoding, newline="\n") as f:
            yield f


async def iter_path(
    path: str | Path,
    *,
    mode: DecodeMode = DecodeMode.STRICT,
    blank_lines: BlankLinePolicy = BlankLinePolicy.EMPTY_RECORD,
    encoding: str | None = None,
) -> AsyncIterator[Record | MalformedField]:
    """Yield decoded records from an LTSV file."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"LTSV file not found: {path}")
    encoding = resolve_encoding(encoding)

    async with _open_text(path, "r", encoding=encoding) as f:
        line_no = 0
        async for line in f:
            line_no += 1
            out = decode_raw_line(line_no, line, mode=mode, blank_lines=blank_lines)
            if out is not None:
                yield out


async def read_path(path: str | Path, **iter_kwargs) -> list[Record | MalformedField]:
    """Collect iter_path into a list."""
    return [r async for r in iter_path(path, **iter_kwargs)]


async def write_path(
    path: str | Path,
    records: Iterable[RecordLike],
    *,
    encoding: str | None = None,
    append: bool = False,
) -> int:
    """Encode records into a file and return how many were written."""
    path = Path(path)
    encoding = resolve_encoding(encoding)
    count = 0
    async with _open_text(path, "a" if append else "w", encoding=encoding) as f:
        for line in iter_encode(records):
            await f.write(line)
            count += 1
    logger.debug("Wrote %d LTSV records to %s", count, path)
    return count
