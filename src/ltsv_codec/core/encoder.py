"""LTSV encoder."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Protocol

from .errors import UnencodableContent
from .models import Record

logger = logging.getLogger(__name__)

_LABEL_FORBIDDEN = {"\t": "tab", ":": "colon", "\n": "newline", "\r": "carriage return"}
_VALUE_FORBIDDEN = {"\t": "tab", "\n": "newline", "\r": "carriage return"}

RecordLike = Record | Mapping[str, str]


class TextSink(Protocol):
    """Anything with a text ``write`` method (files, StringIO, sys.stdout)."""

    def write(self, s: str, /) -> object:
        ...


def _as_record(record: RecordLike) -> Record:
    if isinstance(record, Record):
        return record
    if isinstance(record, Mapping):
        return Record.from_mapping(record)
    raise TypeError(f"Expected Record or mapping, got {type(record).__name__}")


def validate_pair(label: object, value: object) -> None:
    """Raise UnencodableContent if the pair cannot be written losslessly."""
    if not isinstance(label, str):
        raise UnencodableContent(label, value, f"label must be str, not {type(label).__name__}")
    if not isinstance(value, str):
        raise UnencodableContent(label, value, f"value must be str, not {type(value).__name__}")
    if not label:
        raise UnencodableContent(label, value, "label is empty")
    for ch, name in _LABEL_FORBIDDEN.items():
        if ch in label:
            raise UnencodableContent(label, value, f"label contains a {name}")
    for ch, name in _VALUE_FORBIDDEN.items():
        if ch in value:
            raise UnencodableContent(label, value, f"value contains a {name}")


def encode_record(record: RecordLike) -> str:
    """Render one record as a newline-terminated LTSV line."""
    fields = []
    for label, value in _as_record(record):
        validate_pair(label, value)
        fields.append(f"{label}:{value}")
    return "\t".join(fields) + "\n"


def iter_encode(records: Iterable[RecordLike]) -> Iterator[str]:
    """Lazily render records; errors carry the failing record's index."""
    for index, record in enumerate(records):
        try:
            yield encode_record(record)
        except UnencodableContent as exc:
            raise exc.at_record(index) from None


def encode(records: Iterable[RecordLike], sink: TextSink) -> int:
    """Write records to sink and return how many were written.

    Each record is rendered in full before it is written, so a failure never
    leaves half a line behind. Records written before the failure stay in the
    sink.
    """
    count = 0
    for line in iter_encode(records):
        sink.write(line)
        count += 1
    logger.debug("Encoded %d LTSV records", count)
    return count


def dumps(records: Iterable[RecordLike]) -> str:
    """Encode records into a single LTSV string."""
    return "".join(iter_encode(records))
