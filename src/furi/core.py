from __future__ import annotations

import os
import sys
from typing import Iterable, Mapping, Sequence

from .kana import (
    contains_kanji,
    is_hiragana,
    is_kanji,
    is_katakana,
    strip_okurigana,
    tokenize,
)
from .tokens import FuriData, FuriPair, FuriSpan

__all__ = [
    "FuriError",
    "FuriParseError",
    "FuriSpanError",
    "basic_furi",
    "combine_furi",
    "generate_pairs",
    "parse_furi",
    "set_debug_logging",
]

_DEBUG_ENV = "FURI_DEBUG"
_DEBUG_LOG = os.environ.get(_DEBUG_ENV, "").strip().lower() in {"1", "true", "yes", "on"}


def set_debug_logging(enabled: bool) -> None:
    global _DEBUG_LOG
    _DEBUG_LOG = enabled


def _debug_log(message: str) -> None:
    if _DEBUG_LOG:
        print(f"[furi debug] {message}", file=sys.stderr)


class FuriError(ValueError):
    """Base class for furigana alignment errors."""


class FuriParseError(FuriError):
    """Raised when furigana placement data cannot be parsed."""


class FuriSpanError(FuriError):
    """Raised when explicit spans are unsorted, overlapping or out of bounds."""


def _parse_index(value: object, entry: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        index = value
    elif isinstance(value, str) and value.strip().isdigit():
        index = int(value.strip())
    else:
        raise FuriParseError(f"Invalid furigana index {value!r} in entry {entry!r}")
    if index < 0:
        raise FuriParseError(f"Negative furigana index in entry {entry!r}")
    return index


def _parse_furi_mapping(entries: Iterable[tuple[str, str]]) -> list[FuriSpan]:
    spans: list[FuriSpan] = []
    for key, content in entries:
        start = _parse_index(key, f"{key}:{content}")
        spans.append(FuriSpan(start, start + 1, str(content)))
    return spans


def _parse_furi_string(locations: str) -> list[FuriSpan]:
    spans: list[FuriSpan] = []
    for entry in locations.split(";"):
        if not entry.strip():
            continue
        if ":" not in entry:
            raise FuriParseError(f"Missing ':' in furigana entry {entry!r}")
        indexes, content = entry.split(":", 1)
        start_raw, sep, end_raw = indexes.partition("-")
        start = _parse_index(start_raw, entry)
        end = _parse_index(end_raw, entry) if sep else 0
        # JMdict lists the last covered character (or nothing), never an
        # exclusive bound, so both branches bump by one.
        spans.append(FuriSpan(start, end + 1 if end else start + 1, content))
    return spans


def parse_furi(data: FuriData | str | Mapping[str, str]) -> list[FuriSpan]:
    """
    Parse furigana placement data into spans, in the order given.

    >>> parse_furi("1:せ;2:じ")
    [FuriSpan(start=1, end=2, text='せ'), FuriSpan(start=2, end=3, text='じ')]
    """
    furi = FuriData.coerce(data)
    if furi.kind == "string":
        return _parse_furi_string(furi.text)
    if furi.kind == "mapping":
        return _parse_furi_mapping(furi.entries)
    raise FuriParseError(f"Unknown furigana data kind: {furi.kind!r}")


def _check_spans(word: str, spans: Sequence[FuriSpan]) -> None:
    cursor = 0
    for span in spans:
        if span.start < cursor:
            raise FuriSpanError(
                f"Span {span.start}-{span.end} overlaps or precedes the previous span in {word!r}"
            )
        if span.end <= span.start:
            raise FuriSpanError(f"Span {span.start}-{span.end} is empty in {word!r}")
        if span.end > len(word):
            raise FuriSpanError(
                f"Span {span.start}-{span.end} exceeds word length {len(word)} of {word!r}"
            )
        cursor = span.end


def generate_pairs(word: str, spans: Sequence[FuriSpan]) -> list[FuriPair]:
    """
    Build furigana/base pairs from explicit spans, filling the gaps.

    Characters not covered by any span are emitted with blank furigana.
    """
    _check_spans(word, spans)
    if not spans:
        return [FuriPair("", word)] if word else []

    pairs: list[FuriPair] = []
    cursor = 0
    for index, span in enumerate(spans):
        if span.start > cursor:
            pairs.append(FuriPair("", word[cursor : span.start]))
        pairs.append(FuriPair(span.text, word[span.start : span.end]))
        if index == len(spans) - 1 and span.end < len(word):
            pairs.append(FuriPair("", word[span.end :]))
        cursor = span.end
    return pairs


def _match_runs(runs: Sequence[str], reading: str) -> list[str] | None:
    """
    Match ``reading`` against the word runs, returning one fragment per run.

    Kana (and other non-kanji) runs must appear literally; kanji runs take a
    greedy wildcard. Earlier kanji runs claim as much of the reading as they
    can while the remaining runs can still match the rest.

    ``tails[i][pos]`` records whether ``runs[i:]`` can consume exactly
    ``reading[pos:]``; it is filled right to left so the forward walk never
    backtracks.
    """
    size = len(reading)
    is_kanji_run = [all(is_kanji(ch) for ch in run) for run in runs]
    tails = [[False] * (size + 1) for _ in range(len(runs) + 1)]
    tails[len(runs)][size] = True
    for index in range(len(runs) - 1, -1, -1):
        run = runs[index]
        after = tails[index + 1]
        row = tails[index]
        if is_kanji_run[index]:
            reachable = False
            for pos in range(size, -1, -1):
                reachable = reachable or after[pos]
                row[pos] = reachable
        else:
            for pos in range(size - len(run) + 1):
                row[pos] = after[pos + len(run)] and reading.startswith(run, pos)
    if not tails[0][0]:
        return None

    fragments: list[str] = []
    pos = 0
    for index, run in enumerate(runs):
        after = tails[index + 1]
        if is_kanji_run[index]:
            end = next(end for end in range(size, pos - 1, -1) if after[end])
        else:
            end = pos + len(run)
        fragments.append(reading[pos:end])
        pos = end
    return fragments


def _collapse_redundant(furigana: str, base: str) -> FuriPair:
    if not furigana or furigana == base:
        return FuriPair("", base)
    return FuriPair(furigana, base)


def basic_furi(word: str, reading: str) -> list[FuriPair]:
    """
    Infer furigana placement by separating kanji runs from kana runs.

    Kana in the word must reappear in the reading, so they anchor the
    readings of the kanji runs between them. A leading honorific prefix
    (お見舞い → お) and trailing okurigana (大人しい → しい) are split off
    first and re-attached without furigana.

    >>> basic_furi("お見舞い", "おみまい")
    [FuriPair(furigana='', base='お'), FuriPair(furigana='みま', base='見舞'), FuriPair(furigana='', base='い')]
    """
    prefix_len = len(word) - len(strip_okurigana(word, leading=True))
    bikago = word[:prefix_len] if prefix_len and reading.startswith(word[:prefix_len]) else ""
    core_word = word[len(bikago) :]
    core_reading = reading[len(bikago) :]

    suffix_len = len(core_reading) - len(strip_okurigana(core_reading, match_kanji=word))
    okurigana = core_reading[len(core_reading) - suffix_len :] if suffix_len else ""
    if okurigana and not core_word.endswith(okurigana):
        okurigana = ""
    if okurigana:
        core_word = core_word[: -len(okurigana)]
        core_reading = core_reading[: -len(okurigana)]

    runs = tokenize(core_word)
    fragments = _match_runs(runs, core_reading)
    if fragments is None:
        _debug_log(f"no run match for {core_word!r} against {core_reading!r}; annotating whole core")
        pairs = [_collapse_redundant(core_reading, core_word)] if core_word else []
    else:
        pairs = [_collapse_redundant(kana, base) for kana, base in zip(fragments, runs)]

    if bikago:
        pairs.insert(0, FuriPair("", bikago))
    if okurigana:
        pairs.append(FuriPair("", okurigana))
    return pairs


def _is_mixed_reading_script(reading: str) -> bool:
    # The prolonged sound mark counts for both scripts.
    return any(is_hiragana(ch) for ch in reading) and any(is_katakana(ch) for ch in reading)


def combine_furi(
    word: str,
    reading: str,
    furi: FuriData | str | Mapping[str, str] | None = None,
) -> list[FuriPair]:
    """
    Combine a word, its reading and optional placement data into pairs.

    >>> combine_furi("お世辞", "おせじ", "1:せ;2:じ")
    [FuriPair(furigana='', base='お'), FuriPair(furigana='せ', base='世'), FuriPair(furigana='じ', base='辞')]
    >>> combine_furi("胡座", "あぐら", "0:あぐら")
    [FuriPair(furigana='あぐら', base='胡座')]
    """
    if word == reading or not contains_kanji(word):
        return [FuriPair("", word)]

    furi_data = FuriData.coerce(furi) if furi is not None else None
    has_furi = furi_data is not None and not furi_data.is_empty()
    spans = parse_furi(furi_data) if has_furi else []

    # Jukujikun/gikun readings (今日 "0:きょう") cover the whole word with one span.
    is_special_reading = len(spans) == 1 and all(is_kanji(ch) for ch in word)
    is_mixed_reading_script = _is_mixed_reading_script(reading)

    if not has_furi or is_special_reading or is_mixed_reading_script:
        _debug_log(
            f"basic furigana for {word!r} (furi={has_furi}, special={is_special_reading}, "
            f"mixed={is_mixed_reading_script})"
        )
        return basic_furi(word, reading)

    _debug_log(f"explicit furigana for {word!r}: {len(spans)} span(s)")
    return generate_pairs(word, spans)
