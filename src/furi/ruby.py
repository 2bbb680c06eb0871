from __future__ import annotations

from bs4 import BeautifulSoup, NavigableString, Tag

from .tokens import FuriPair

__all__ = ["ruby_html_to_pairs"]


def _soup_fragment(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _ruby_base_text(ruby: Tag) -> str:
    """
    Extract base text from <ruby>, ignoring <rt>/<rp>. Supports legacy and <rb>.
    """
    rbs = ruby.find_all("rb", recursive=False)
    if rbs:
        return "".join(rb.get_text() for rb in rbs)
    parts = []
    for child in ruby.children:
        if isinstance(child, NavigableString):
            parts.append(str(child))
        elif isinstance(child, Tag) and child.name not in ("rt", "rp"):
            parts.append(child.get_text())
    return "".join(parts)


def _ruby_reading_text(ruby: Tag) -> str:
    rts = ruby.find_all("rt", recursive=False)
    return "".join(rt.get_text() for rt in rts)


def _append_plain(pairs: list[FuriPair], text: str) -> None:
    if not text:
        return
    if pairs and not pairs[-1].furigana:
        pairs[-1] = FuriPair("", pairs[-1].base + text)
    else:
        pairs.append(FuriPair("", text))


def _collect_pairs(node: Tag, pairs: list[FuriPair]) -> None:
    for child in node.children:
        if isinstance(child, NavigableString):
            _append_plain(pairs, str(child))
        elif isinstance(child, Tag):
            if child.name == "ruby":
                base = _ruby_base_text(child)
                reading = _ruby_reading_text(child)
                if not base:
                    continue
                if reading and reading != base:
                    pairs.append(FuriPair(reading, base))
                else:
                    _append_plain(pairs, base)
            elif child.name in ("rt", "rp"):
                continue
            else:
                _collect_pairs(child, pairs)


def ruby_html_to_pairs(html: str) -> list[FuriPair]:
    """
    Read ruby markup back into furigana/base pairs.

    Text outside ``<ruby>`` becomes unannotated pairs; consecutive plain
    text is merged into a single pair.
    """
    pairs: list[FuriPair] = []
    _collect_pairs(_soup_fragment(html), pairs)
    return pairs
