"""Reader and writer for Labeled Tab-Separated Values (LTSV)."""

from __future__ import annotations

from .core import (
    BlankLinePolicy,
    DecodeMode,
    LtsvError,
    MalformedField,
    Record,
    UnencodableContent,
    decode,
    decode_line,
    dumps,
    encode,
    encode_record,
    iter_encode,
    iter_fields,
    iter_path,
    loads,
    read_path,
    read_records,
    write_path,
)

__all__ = [
    "BlankLinePolicy",
    "DecodeMode",
    "LtsvError",
    "MalformedField",
    "Record",
    "UnencodableContent",
    "decode",
    "decode_line",
    "dumps",
    "encode",
    "encode_record",
    "iter_encode",
    "iter_fields",
    "iter_path",
    "loads",
    "read_path",
    "read_records",
    "write_path",
]
