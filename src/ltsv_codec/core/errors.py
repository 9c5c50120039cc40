"""Codec errors.

I/O failures (missing files, undecodable bytes, closed streams) are not
wrapped: they surface from the underlying file object unchanged.
"""

from __future__ import annotations


class LtsvError(Exception):
    """Base class for errors raised by the codec."""


class MalformedField(LtsvError, ValueError):
    """A tab-delimited field could not be split into label and value."""

    def __init__(
        self,
        line_no: int,
        field: str,
        *,
        line: str | None = None,
        reason: str = "missing ':' separator",
    ) -> None:
        self.line_no = line_no
        self.field = field
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_no}: malformed field {field!r} ({reason})")


class UnencodableContent(LtsvError, ValueError):
    """A label or value holds a character LTSV cannot represent."""

    def __init__(
        self,
        label: object,
        value: object,
        reason: str,
        *,
        record_index: int | None = None,
    ) -> None:
        self.label = label
        self.value = value
        self.reason = reason
        self.record_index = record_index
        super().__init__(self._format())

    def _format(self) -> str:
        where = f"record {self.record_index}, " if self.record_index is not None else ""
        return f"Cannot encode {where}label {self.label!r}: {self.reason}"

    def at_record(self, index: int) -> UnencodableContent:
        """Attach the position of the failing record."""
        self.record_index = index
        self.args = (self._format(),)
        return self
