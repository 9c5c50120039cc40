from __future__ import annotations

import dataclasses

import pytest

from ltsv_codec.core.models import Record


def test_record_keeps_insertion_order_and_duplicates() -> None:
    rec = Record.from_pairs([("b", "1"), ("a", "2"), ("b", "3")])
    assert rec.labels() == ["b", "a", "b"]
    assert list(rec) == [("b", "1"), ("a", "2"), ("b", "3")]
    assert len(rec) == 3


def test_record_lookup_helpers() -> None:
    rec = Record.from_pairs([("tag", "x"), ("host", "h"), ("tag", "y")])
    assert rec.get("tag") == "x"
    assert rec.get("missing") is None
    assert rec.get("missing", "-") == "-"
    assert rec.get_all("tag") == ["x", "y"]
    assert "host" in rec
    assert "nope" not in rec


def test_to_dict_last_duplicate_wins() -> None:
    rec = Record.from_pairs([("tag", "x"), ("tag", "y")])
    assert rec.to_dict() == {"tag": "y"}


def test_from_mapping_uses_mapping_order() -> None:
    rec = Record.from_mapping({"host": "a", "user": "b", "status": "200"})
    assert rec.labels() == ["host", "user", "status"]


def test_record_is_immutable_value() -> None:
    base = Record.from_pairs([("a", "1")])
    grown = base.with_field("b", "2")

    assert base.pairs == (("a", "1"),)
    assert grown.pairs == (("a", "1"), ("b", "2"))
    assert Record(pairs=[("a", "1")]) == base
    with pytest.raises(dataclasses.FrozenInstanceError):
        base.pairs = ()  # type: ignore[misc]


def test_empty_record() -> None:
    rec = Record()
    assert len(rec) == 0
    assert rec.labels() == []
    assert rec == Record.from_pairs([])
