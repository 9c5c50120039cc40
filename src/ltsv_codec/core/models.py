"""Core data models for the LTSV codec."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

Pair = tuple[str, str]


class DecodeMode(str, Enum):
    """How the decoder reacts to a malformed line."""

    STRICT = "strict"  # raise on the first malformed line
    COLLECT = "collect"  # yield the error in place of the record and continue


class BlankLinePolicy(str, Enum):
    """What an empty line decodes to."""

    EMPTY_RECORD = "record"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class Record:
    """One LTSV line: an ordered sequence of (label, value) pairs.

    Duplicate labels are kept in insertion order. Lookups are linear, which is
    fine for the handful of fields a line usually carries.
    """

    pairs: tuple[Pair, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "pairs", tuple((k, v) for k, v in self.pairs))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Pair]) -> Record:
        """Build a record from an iterable of (label, value) pairs."""
        return cls(pairs=tuple(pairs))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> Record:
        """Build a record from a mapping, keeping its iteration order."""
        return cls(pairs=tuple(mapping.items()))

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def __contains__(self, label: object) -> bool:
        return any(k == label for k, _ in self.pairs)

    def labels(self) -> list[str]:
        """Return labels in field order (duplicates included)."""
        return [k for k, _ in self.pairs]

    def get(self, label: str, default: str | None = None) -> str | None:
        """Return the first value stored under label."""
        for k, v in self.pairs:
            if k == label:
                return v
        return default

    def get_all(self, label: str) -> list[str]:
        """Return every value stored under label, in field order."""
        return [v for k, v in self.pairs if k == label]

    def to_dict(self) -> dict[str, str]:
        """Collapse into a dict; the last duplicate label wins."""
        return dict(self.pairs)

    def with_field(self, label: str, value: str) -> Record:
        """Return a copy with one more pair appended."""
        return Record(pairs=(*self.pairs, (label, value)))
