"""Core LTSV codec: record model, decoder, encoder and file access."""

from __future__ import annotations

from .decoder import decode, decode_line, iter_fields, loads, read_records, split_field
from .encoder import dumps, encode, encode_record, iter_encode, validate_pair
from .errors import LtsvError, MalformedField, UnencodableContent
from .files import iter_path, read_path, write_path
from .models import BlankLinePolicy, DecodeMode, Pair, Record

__all__ = [
    "BlankLinePolicy",
    "DecodeMode",
    "LtsvError",
    "MalformedField",
    "Pair",
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
    "split_field",
    "validate_pair",
    "write_path",
]
