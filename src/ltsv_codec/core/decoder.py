"""LTSV decoder.

Turns a source of text lines into a lazy sequence of Records.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Iterator

from .errors import MalformedField
from .models import BlankLinePolicy, DecodeMode, Pair, Record

logger = logging.getLogger(__name__)

LineSource = Iterable[str] | str


def _trim(line: str) -> str:
    """Strip the line terminator (LF, optionally preceded by CR)."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _iter_lines(source: LineSource) -> Iterator[str]:
    # StringIO splits on "\n" only; str.splitlines would also break on \x0b, \x1c, ...
    if isinstance(source, str):
        return iter(io.StringIO(source))
    return iter(source)


def split_field(field: str, *, line_no: int, line: str | None = None) -> Pair:
    """Split a field on its first colon."""
    label, sep, value = field.partition(":")
    if not sep:
        raise MalformedField(line_no, field, line=line)
    if not label:
        raise MalformedField(line_no, field, line=line, reason="empty label")
    return label, value


def _decode_fields(line: str, line_no: int) -> Record:
    # line is already stripped of its terminator
    if not line:
        return Record()
    return Record(
        pairs=tuple(split_field(f, line_no=line_no, line=line) for f in line.split("\t"))
    )


def decode_line(line: str, line_no: int = 1) -> Record:
    """Decode a single line (terminator optional) into a Record."""
    return _decode_fields(_trim(line), line_no)


def decode_raw_line(
    line_no: int,
    line: str,
    *,
    mode: DecodeMode = DecodeMode.STRICT,
    blank_lines: BlankLinePolicy = BlankLinePolicy.EMPTY_RECORD,
) -> Record | MalformedField | None:
    """Apply the per-line decode policy.

    Returns None when the line is skipped, the error when mode is COLLECT.
    """
    line = _trim(line)
    if not line and blank_lines is BlankLinePolicy.SKIP:
        return None
    try:
        return _decode_fields(line, line_no)
    except MalformedField as exc:
        logger.debug("Malformed LTSV line %d: %s", line_no, exc.reason)
        if mode is DecodeMode.STRICT:
            raise
        return exc


def decode(
    source: LineSource,
    *,
    mode: DecodeMode = DecodeMode.STRICT,
    blank_lines: BlankLinePolicy = BlankLinePolicy.EMPTY_RECORD,
) -> Iterator[Record | MalformedField]:
    """Lazily decode LTSV lines.

    ``source`` is a string or any iterable of lines (an open text file works).
    In STRICT mode the first malformed line raises MalformedField; in COLLECT
    mode the error is yielded in place of that line's record.
    """
    for line_no, line in enumerate(_iter_lines(source), start=1):
        out = decode_raw_line(line_no, line, mode=mode, blank_lines=blank_lines)
        if out is not None:
            yield out


def iter_fields(source: LineSource) -> Iterator[Pair]:
    """Yield every (label, value) pair of a document in order."""
    for record in decode(source, blank_lines=BlankLinePolicy.SKIP):
        yield from record


def read_records(
    source: LineSource,
    *,
    blank_lines: BlankLinePolicy = BlankLinePolicy.EMPTY_RECORD,
) -> list[Record]:
    """Decode a whole document eagerly; any malformed line raises."""
    return [r for r in decode(source, blank_lines=blank_lines) if isinstance(r, Record)]


def loads(
    text: str,
    *,
    blank_lines: BlankLinePolicy = BlankLinePolicy.EMPTY_RECORD,
) -> list[Record]:
    """Decode an LTSV string into a list of Records."""
    return read_records(text, blank_lines=blank_lines)
