from .core import (
    FuriError,
    FuriParseError,
    FuriSpanError,
    basic_furi,
    combine_furi,
    generate_pairs,
    parse_furi,
    set_debug_logging,
)
from .ruby import ruby_html_to_pairs
from .tokens import FuriData, FuriPair, FuriSpan, deserialize_pairs, serialize_pairs

__all__ = [
    "combine_furi",
    "basic_furi",
    "generate_pairs",
    "parse_furi",
    "FuriPair",
    "FuriSpan",
    "FuriData",
    "serialize_pairs",
    "deserialize_pairs",
    "ruby_html_to_pairs",
    "set_debug_logging",
    "FuriError",
    "FuriParseError",
    "FuriSpanError",
]
