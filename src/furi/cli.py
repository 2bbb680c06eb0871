from __future__ import annotations

import argparse
import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Sequence

import tomllib
from bs4 import BeautifulSoup, NavigableString
from rich.console import Console
from rich.table import Table

from .core import FuriError, combine_furi, set_debug_logging
from .ruby import ruby_html_to_pairs
from .tokens import FuriPair, serialize_pairs


def _read_local_version() -> str | None:
    try:
        pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    except IndexError:  # pragma: no cover
        return None
    try:
        with pyproject_path.open("rb") as fh:
            data = tomllib.load(fh)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return None
    return data.get("project", {}).get("version")


try:
    __version__ = metadata.version("furi")
except metadata.PackageNotFoundError:
    __version__ = _read_local_version() or "0.0.0+unknown"


def _add_version_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"furi {__version__}",
    )


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument(
        "--json",
        action="store_true",
        help='Print pairs as JSON: [["furigana", "base"], ...].',
    )
    fmt.add_argument(
        "--html",
        action="store_true",
        help="Print pairs as <ruby> markup.",
    )
    parser.add_argument(
        "--rp",
        action="store_true",
        help="Wrap readings in <rp> parentheses (with --html).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging (strategy selection, fallbacks).",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Align a Japanese word with its reading into furigana/base pairs. "
        "Use `furi ruby` to read existing ruby markup.",
    )
    _add_version_flag(ap)
    ap.add_argument("word", help="Word as written, e.g. 使い方")
    ap.add_argument("reading", help="Kana reading, e.g. つかいかた")
    ap.add_argument(
        "furi",
        nargs="?",
        default=None,
        help="Optional JMdict-style placement string, e.g. '1:せ;2:じ'.",
    )
    _add_output_flags(ap)
    return ap


def build_ruby_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furi ruby",
        description="Read <ruby> markup back into furigana/base pairs.",
    )
    _add_version_flag(ap)
    ap.add_argument("html", help="HTML fragment containing <ruby> elements.")
    ap.add_argument(
        "--json",
        action="store_true",
        help='Print pairs as JSON: [["furigana", "base"], ...].',
    )
    ap.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return ap


def _pairs_table(pairs: Sequence[FuriPair]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("base")
    table.add_column("furigana", style="cyan")
    for index, (furigana, base) in enumerate(pairs):
        table.add_row(str(index), base, furigana or "-")
    return table


def _render_ruby_html(pairs: Sequence[FuriPair], *, rp: bool = False) -> str:
    """
    Print form of pairs as ruby markup for the ``--html`` flag.

    Pairs without furigana become plain (escaped) text. With ``rp`` the
    reading is wrapped in ``<rp>`` parentheses for readers without ruby
    support.
    """
    soup = BeautifulSoup("", "html.parser")
    for furigana, base in pairs:
        if not furigana:
            soup.append(NavigableString(base))
            continue
        ruby = soup.new_tag("ruby")
        ruby.append(NavigableString(base))
        if rp:
            open_paren = soup.new_tag("rp")
            open_paren.string = "("
            ruby.append(open_paren)
        rt = soup.new_tag("rt")
        rt.string = furigana
        ruby.append(rt)
        if rp:
            close_paren = soup.new_tag("rp")
            close_paren.string = ")"
            ruby.append(close_paren)
        soup.append(ruby)
    return str(soup)


def _emit_pairs(pairs: Sequence[FuriPair], args: argparse.Namespace, console: Console) -> None:
    if getattr(args, "json", False):
        print(json.dumps(serialize_pairs(pairs), ensure_ascii=False))
    elif getattr(args, "html", False):
        print(_render_ruby_html(pairs, rp=bool(getattr(args, "rp", False))))
    else:
        console.print(_pairs_table(pairs))


def _run_ruby(args: argparse.Namespace, console: Console) -> int:
    pairs = ruby_html_to_pairs(args.html)
    _emit_pairs(pairs, args, console)
    return 0


def _run_combine(args: argparse.Namespace, console: Console) -> int:
    pairs = combine_furi(args.word, args.reading, args.furi)
    _emit_pairs(pairs, args, console)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    console = Console()
    err_console = Console(stderr=True)

    if argv and argv[0] == "ruby":
        ruby_args = build_ruby_parser().parse_args(argv[1:])
        if ruby_args.debug:
            set_debug_logging(True)
        return _run_ruby(ruby_args, console)

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    if args.debug:
        set_debug_logging(True)
    try:
        return _run_combine(args, console)
    except FuriError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
