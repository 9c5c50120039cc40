from __future__ import annotations

import io
import logging

import pytest

from ltsv_codec.core.decoder import decode, decode_line, iter_fields, loads, read_records
from ltsv_codec.core.errors import MalformedField
from ltsv_codec.core.models import BlankLinePolicy, DecodeMode, Record


def test_decode_multi_record_document_in_line_order() -> None:
    records = list(decode("host:a\tuser:b\nhost:c\tuser:d\n"))
    assert records == [
        Record.from_pairs([("host", "a"), ("user", "b")]),
        Record.from_pairs([("host", "c"), ("user", "d")]),
    ]


def test_first_colon_splits_label_from_value() -> None:
    rec = decode_line("value:a:b")
    assert rec.pairs == (("value", "a:b"),)


def test_empty_value_is_allowed() -> None:
    assert decode_line("user:\tstatus:200").pairs == (("user", ""), ("status", "200"))


def test_last_line_without_newline_is_decoded(access_text: str) -> None:
    records = loads(access_text.rstrip("\n"))
    assert len(records) == 3
    assert records[-1].get("status") == "500"


def test_crlf_line_endings() -> None:
    assert loads("a:1\r\nb:2\r\n") == loads("a:1\nb:2\n")


def test_only_one_trailing_carriage_return_is_stripped() -> None:
    assert loads("a:b\r\r\n")[0] == decode_line("a:b\r\r\n")
    assert decode_line("a:b\r\r\n").pairs == (("a", "b\r"),)

    items = list(decode("\r\r\n", mode=DecodeMode.COLLECT, blank_lines=BlankLinePolicy.SKIP))
    assert len(items) == 1
    assert isinstance(items[0], MalformedField)
    assert items[0].field == "\r"


def test_values_keep_non_newline_control_characters() -> None:
    # form feed and vertical tab are line breaks for str.splitlines, not for LTSV
    records = loads("a:x\x0cy\tb:\x0b\n")
    assert records == [Record.from_pairs([("a", "x\x0cy"), ("b", "\x0b")])]


def test_decode_accepts_text_file_objects() -> None:
    src = io.StringIO("a:1\nb:2\n")
    assert [r.pairs for r in decode(src)] == [(("a", "1"),), (("b", "2"),)]


def test_decode_is_lazy() -> None:
    consumed: list[str] = []

    def lines():
        for line in ["a:1\n", "nocolon\n"]:
            consumed.append(line)
            yield line

    it = decode(lines())
    assert next(it).pairs == (("a", "1"),)
    assert consumed == ["a:1\n"]


def test_blank_line_becomes_empty_record_by_default() -> None:
    records = loads("a:1\n\nb:2\n")
    assert records == [
        Record.from_pairs([("a", "1")]),
        Record(),
        Record.from_pairs([("b", "2")]),
    ]


def test_blank_line_skip_policy() -> None:
    records = loads("a:1\n\r\nb:2\n", blank_lines=BlankLinePolicy.SKIP)
    assert [r.labels() for r in records] == [["a"], ["b"]]


def test_malformed_field_raises_in_strict_mode() -> None:
    with pytest.raises(MalformedField) as excinfo:
        list(decode("a:1\nok:1\tnocolon\n"))

    err = excinfo.value
    assert err.field == "nocolon"
    assert err.line_no == 2
    assert err.line == "ok:1\tnocolon"
    assert isinstance(err, ValueError)


def test_empty_label_is_malformed() -> None:
    with pytest.raises(MalformedField, match="empty label"):
        decode_line(":value")


def test_trailing_tab_leaves_an_empty_malformed_field() -> None:
    with pytest.raises(MalformedField) as excinfo:
        decode_line("a:1\t")
    assert excinfo.value.field == ""


def test_collect_mode_yields_error_and_continues(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="ltsv_codec.core.decoder")
    items = list(decode("a:1\nbroken\nb:2\n", mode=DecodeMode.COLLECT))

    assert items[0] == Record.from_pairs([("a", "1")])
    assert isinstance(items[1], MalformedField)
    assert items[1].line_no == 2
    assert items[2] == Record.from_pairs([("b", "2")])
    assert "Malformed LTSV line 2" in caplog.text


def test_iter_fields_flattens_records() -> None:
    pairs = list(iter_fields("a:1\tb:2\n\nc:3\n"))
    assert pairs == [("a", "1"), ("b", "2"), ("c", "3")]


def test_read_records_is_strict() -> None:
    with pytest.raises(MalformedField):
        read_records(["a:1\n", "bad\n"])


def test_empty_document() -> None:
    assert loads("") == []
