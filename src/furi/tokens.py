from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Mapping, NamedTuple

__all__ = [
    "FuriPair",
    "FuriSpan",
    "FuriData",
    "serialize_pairs",
    "deserialize_pairs",
]


class FuriPair(NamedTuple):
    """A base fragment of the word and the furigana shown over it ("" for none)."""

    furigana: str
    base: str


@dataclass(frozen=True, slots=True)
class FuriSpan:
    """
    Explicit furigana placement over ``word[start:end]``.

    ``end`` is exclusive. Spans are produced by ``parse_furi`` and consumed by
    ``generate_pairs``, which expects them sorted and non-overlapping.
    """

    start: int
    end: int
    text: str


@dataclass(frozen=True, slots=True)
class FuriData:
    """
    Placement data in one of its two accepted shapes.

    ``kind`` selects which field is meaningful: ``"string"`` uses ``text``
    (``"1:せ;2:じ"``), ``"mapping"`` uses ``entries``, the
    ``(index, furigana)`` items of a mapping such as ``{"1": "せ"}`` in their
    original order.
    """

    kind: Literal["string", "mapping"]
    text: str = ""
    entries: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_string(cls, text: str) -> "FuriData":
        return cls(kind="string", text=text)

    @classmethod
    def from_mapping(cls, entries: Mapping[str, str]) -> "FuriData":
        return cls(kind="mapping", entries=tuple(entries.items()))

    @classmethod
    def coerce(cls, data: "FuriData | str | Mapping[str, str]") -> "FuriData":
        if isinstance(data, FuriData):
            return data
        if isinstance(data, str):
            return cls.from_string(data)
        if isinstance(data, Mapping):
            return cls.from_mapping(data)
        raise TypeError(f"Unsupported furigana placement data: {type(data).__name__}")

    def is_empty(self) -> bool:
        if self.kind == "string":
            return not self.text
        return not self.entries


def serialize_pairs(pairs: Iterable[FuriPair]) -> list[list[str]]:
    return [[pair.furigana, pair.base] for pair in pairs]


def deserialize_pairs(data: Iterable[object]) -> list[FuriPair]:
    pairs: list[FuriPair] = []
    for entry in data:
        if isinstance(entry, Mapping):
            furigana = entry.get("furigana")
            base = entry.get("base")
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            furigana, base = entry
        else:
            continue
        if not isinstance(furigana, str) or not isinstance(base, str):
            continue
        pairs.append(FuriPair(furigana, base))
    return pairs
