"""Byte-level parsing primitives shared by the procfs parsers."""

from proclimits.parsers.primitives import (
    GrammarError,
    Incomplete,
    Parser,
    line_ending,
    map_result,
    opt,
    parse_float,
    parse_isize,
    parse_word,
    skip_space,
    tag,
    take_until,
    take_until_and_consume,
    take_while,
)

__all__ = [
    "GrammarError",
    "Incomplete",
    "Parser",
    "line_ending",
    "map_result",
    "opt",
    "parse_float",
    "parse_isize",
    "parse_word",
    "skip_space",
    "tag",
    "take_until",
    "take_until_and_consume",
    "take_while",
]
