from __future__ import annotations

import time

import pytest

import furi.core as core
from furi import (
    FuriData,
    FuriParseError,
    FuriSpanError,
    basic_furi,
    combine_furi,
)


def test_explicit_placement_string() -> None:
    assert combine_furi("お世辞", "おせじ", "1:せ;2:じ") == [("", "お"), ("せ", "世"), ("じ", "辞")]


def test_explicit_placement_mapping() -> None:
    result = combine_furi("お世辞", "おせじ", {"1": "せ", "2": "じ"})
    assert result == [("", "お"), ("せ", "世"), ("じ", "辞")]
    assert combine_furi("お世辞", "おせじ", FuriData.from_mapping({"1": "せ", "2": "じ"})) == result


def test_missing_placement_falls_back_to_basic() -> None:
    assert combine_furi("大人しい", "おとなしい") == [("おとな", "大人"), ("", "しい")]
    assert combine_furi("使い方", "つかいかた") == [("つか", "使"), ("", "い"), ("かた", "方")]
    assert combine_furi("大人しい", "おとなしい", "") == [("おとな", "大人"), ("", "しい")]


def test_single_span_over_all_kanji_uses_basic() -> None:
    assert combine_furi("胡座", "あぐら", "0:あぐら") == [("あぐら", "胡座")]
    assert combine_furi("今日", "きょう", "0-1:きょう") == [("きょう", "今日")]


def test_single_span_with_kana_is_honoured() -> None:
    assert combine_furi("今日は", "きょうは", "0-1:きょう") == [("きょう", "今日"), ("", "は")]


def test_mixed_script_reading_ignores_placement() -> None:
    result = combine_furi("お世辞", "おセジ", "1:せ;2:じ")
    assert result == [("", "お"), ("セジ", "世辞")]


def test_prolonged_mark_counts_as_both_scripts() -> None:
    # ー is hiragana and katakana at once, so placement data is set aside.
    assert combine_furi("珈琲", "こーひー", "0:こー;1:ひー") == [("こーひー", "珈琲")]


def test_kana_only_and_identical_words() -> None:
    assert combine_furi("ひらがな", "なんでも") == [("", "ひらがな")]
    assert combine_furi("カタカナ", "かたかな", "0:か") == [("", "カタカナ")]
    assert combine_furi("漢字", "漢字") == [("", "漢字")]
    assert combine_furi("", "") == [("", "")]


def test_malformed_placement_raises() -> None:
    with pytest.raises(FuriParseError):
        combine_furi("お世辞", "おせじ", "x:せ")
    with pytest.raises(FuriSpanError):
        combine_furi("漢字語", "かんじご", "0-1:かん;1:じ")


@pytest.mark.parametrize(
    ("word", "reading", "furi"),
    [
        ("お世辞", "おせじ", "1:せ;2:じ"),
        ("大人しい", "おとなしい", None),
        ("使い方", "つかいかた", None),
        ("胡座", "あぐら", "0:あぐら"),
        ("お見舞い", "おみまい", None),
        ("取り扱い", "とりあつかい", None),
        ("アメ玉", "あめだま", None),
        ("使い方", "しようほう", None),
        ("見る", "ミル", "0:み"),
        ("ひらがな", "ひらがな", None),
    ],
)
def test_bases_always_reconstruct_word(word, reading, furi) -> None:
    pairs = combine_furi(word, reading, furi)
    assert "".join(base for _, base in pairs) == word
    assert all(base for _, base in pairs)


def test_basic_furi_strips_honorific_prefix() -> None:
    assert basic_furi("お見舞い", "おみまい") == [("", "お"), ("みま", "見舞"), ("", "い")]


def test_basic_furi_interleaved_kana() -> None:
    assert basic_furi("取り扱い", "とりあつかい") == [
        ("と", "取"),
        ("", "り"),
        ("あつか", "扱"),
        ("", "い"),
    ]


def test_basic_furi_greedy_first_kanji_run() -> None:
    # Both の in the reading could anchor the kana run; the first kanji run
    # claims as much as it can.
    assert basic_furi("上の上", "うえのうえのうえ") == [
        ("うえのうえ", "上"),
        ("", "の"),
        ("うえ", "上"),
    ]


def test_basic_furi_without_match_annotates_whole_core() -> None:
    assert basic_furi("使い方", "しようほう") == [("しようほう", "使い方")]
    # Katakana in the word cannot anchor a hiragana reading.
    assert basic_furi("アメ玉", "あめだま") == [("あめだま", "アメ玉")]


def test_basic_furi_empty_inputs() -> None:
    assert basic_furi("", "") == []
    assert basic_furi("漢", "") == [("", "漢")]


def test_debug_logging_reports_strategy(monkeypatch, capsys) -> None:
    monkeypatch.setattr(core, "_DEBUG_LOG", True)
    combine_furi("使い方", "つかいかた")
    combine_furi("お世辞", "おせじ", "1:せ;2:じ")
    err = capsys.readouterr().err
    assert "[furi debug] basic furigana for '使い方'" in err
    assert "[furi debug] explicit furigana for 'お世辞': 2 span(s)" in err


def test_debug_logging_silent_by_default(monkeypatch, capsys) -> None:
    monkeypatch.setattr(core, "_DEBUG_LOG", False)
    combine_furi("使い方", "つかいかた")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_basic_furi_many_runs_without_match_is_fast() -> None:
    word = "漢の" * 15 + "漢ぬ"
    started = time.perf_counter()
    assert basic_furi(word, "の" * 30) == [("の" * 30, word)]
    assert time.perf_counter() - started < 1.0


def test_basic_furi_many_runs_with_match_is_fast() -> None:
    word = "漢の" * 400 + "漢"
    reading = "かの" * 400 + "か"
    started = time.perf_counter()
    pairs = basic_furi(word, reading)
    assert time.perf_counter() - started < 5.0
    assert len(pairs) == 801
    assert pairs[0] == ("か", "漢")
    assert pairs[1] == ("", "の")
    assert "".join(base for _, base in pairs) == word
