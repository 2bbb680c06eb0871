from __future__ import annotations

__all__ = [
    "is_kanji",
    "is_hiragana",
    "is_katakana",
    "is_kana",
    "is_japanese",
    "contains_kanji",
    "char_class",
    "tokenize",
    "strip_okurigana",
]

PROLONGED_SOUND_MARK = "ー"
KANJI_EXTRA_CHARS = "々〆ヵヶ"

# Run classes returned by char_class().
KANJI = "kanji"
HIRAGANA = "hiragana"
KATAKANA = "katakana"
OTHER = "other"


def is_kanji(ch: str) -> bool:
    if not ch:
        return False
    code = ord(ch)
    return (
        0x4E00 <= code <= 0x9FFF  # CJK Unified Ideographs
        or 0x3400 <= code <= 0x4DBF  # Extension A
        or 0x20000 <= code <= 0x2A6DF  # Extension B
        or 0x2A700 <= code <= 0x2EBEF  # Extensions C-F
        or 0x30000 <= code <= 0x3134F  # Extension G
        or 0xF900 <= code <= 0xFAFF  # Compatibility Ideographs
        or 0x2F800 <= code <= 0x2FA1F  # Compatibility Supplement
        or ch in KANJI_EXTRA_CHARS
    )


def is_hiragana(ch: str) -> bool:
    if not ch:
        return False
    code = ord(ch)
    return 0x3041 <= code <= 0x309F or ch == PROLONGED_SOUND_MARK


def is_katakana(ch: str) -> bool:
    if not ch or ch in KANJI_EXTRA_CHARS:
        return False
    code = ord(ch)
    return (
        0x30A1 <= code <= 0x30FF  # Katakana
        or 0x31F0 <= code <= 0x31FF  # Phonetic extensions
        or 0xFF66 <= code <= 0xFF9F  # Halfwidth katakana
    )


def is_kana(ch: str) -> bool:
    return is_hiragana(ch) or is_katakana(ch)


def _is_japanese_char(ch: str) -> bool:
    code = ord(ch)
    return (
        is_kanji(ch)
        or is_kana(ch)
        or 0x3000 <= code <= 0x303F  # CJK symbols and punctuation
        or 0xFF01 <= code <= 0xFF65  # Fullwidth forms
    )


def is_japanese(text: str) -> bool:
    """True when every character of ``text`` is kanji, kana or Japanese punctuation."""
    if not text:
        return False
    return all(_is_japanese_char(ch) for ch in text)


def contains_kanji(text: str) -> bool:
    return any(is_kanji(ch) for ch in text)


def char_class(ch: str) -> str:
    if is_kanji(ch):
        return KANJI
    if ch == PROLONGED_SOUND_MARK:
        # Callers join the mark to whichever kana run precedes it.
        return KATAKANA
    if is_hiragana(ch):
        return HIRAGANA
    if is_katakana(ch):
        return KATAKANA
    return OTHER


def tokenize(text: str) -> list[str]:
    """
    Split ``text`` into maximal runs of a single script class.

    The prolonged sound mark continues the kana run it follows, so
    ``"らーめん"`` stays one hiragana run and ``"ラーメン"`` one katakana run.
    """
    runs: list[str] = []
    current: list[str] = []
    current_class: str | None = None
    for ch in text:
        cls = char_class(ch)
        if ch == PROLONGED_SOUND_MARK and current_class in (HIRAGANA, KATAKANA):
            cls = current_class
        if current and cls != current_class:
            runs.append("".join(current))
            current = []
        current.append(ch)
        current_class = cls
    if current:
        runs.append("".join(current))
    return runs


def _is_kana_string(text: str) -> bool:
    return bool(text) and all(is_kana(ch) for ch in text)


def strip_okurigana(text: str, leading: bool = False, match_kanji: str = "") -> str:
    """
    Remove the leading or trailing kana run from ``text``.

    The run to remove is the first (``leading``) or last run of
    ``match_kanji`` when given, otherwise of ``text`` itself. ``text`` is
    returned unchanged when it is not Japanese, when the relevant edge is
    not kana, when ``match_kanji`` holds no kanji, or when ``text`` is
    entirely kana and no matcher was supplied.
    """
    if not is_japanese(text):
        return text
    if leading and not is_kana(text[0]):
        return text
    if not leading and not is_kana(text[-1]):
        return text
    if match_kanji and not contains_kanji(match_kanji):
        return text
    if not match_kanji and _is_kana_string(text):
        return text

    runs = tokenize(match_kanji or text)
    if leading:
        head = runs[0]
        return text[len(head):] if text.startswith(head) else text
    tail = runs[-1]
    return text[: -len(tail)] if text.endswith(tail) else text

