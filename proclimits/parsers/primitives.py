"""Primitive byte-level parsers.

Every parser takes the input buffer and a start position and returns a
``(position, value)`` tuple, where ``position`` points just past the consumed
bytes. A parser that does not match raises :class:`GrammarError`; a parser
that runs out of input before it can decide raises :class:`Incomplete`.
Neither escapes the package: :func:`map_result` turns them into
:class:`~proclimits.errors.ParseError`.
"""

from collections.abc import Callable
from typing import TypeVar

from proclimits.errors import ParseError, TruncatedInputError

T = TypeVar("T")

Parser = Callable[[bytes, int], tuple[int, T]]

SPACE = b" \t"
WHITESPACE = b" \t\r\n\x0b\x0c"
DIGITS = b"0123456789"


class GrammarError(Exception):
    """Input at ``pos`` does not match what the parser expects."""

    def __init__(self, pos: int, expected: str, found: bytes = b"") -> None:
        self.pos = pos
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected} at offset {pos}, found {found!r}")


class Incomplete(Exception):
    """Input ended at ``pos`` while ``expected`` was still required."""

    def __init__(self, pos: int, expected: str) -> None:
        self.pos = pos
        self.expected = expected
        super().__init__(f"input ended at offset {pos} while expecting {expected}")


def _peek(data: bytes, pos: int, size: int = 12) -> bytes:
    return data[pos : pos + size]


def tag(data: bytes, pos: int, literal: bytes) -> tuple[int, bytes]:
    """Match ``literal`` exactly (case-sensitive)."""
    end = pos + len(literal)
    if data.startswith(literal, pos):
        return end, literal
    rest = data[pos:]
    if len(rest) < len(literal) and literal.startswith(rest):
        raise Incomplete(len(data), repr(literal))
    raise GrammarError(pos, repr(literal), _peek(data, pos))


def take_while(data: bytes, pos: int, accept: bytes) -> tuple[int, bytes]:
    """Consume a possibly empty run of bytes contained in ``accept``."""
    end = pos
    size = len(data)
    while end < size and data[end] in accept:
        end += 1
    return end, data[pos:end]


def skip_space(data: bytes, pos: int) -> int:
    """Skip spaces and tabs; line terminators are left alone."""
    return take_while(data, pos, SPACE)[0]


def take_until(data: bytes, pos: int, needle: bytes) -> tuple[int, bytes]:
    """Consume everything up to, not including, the first ``needle``."""
    found = data.find(needle, pos)
    if found < 0:
        raise Incomplete(len(data), repr(needle))
    return found, data[pos:found]


def take_until_and_consume(data: bytes, pos: int, needle: bytes) -> tuple[int, bytes]:
    """Like :func:`take_until` but also consumes ``needle`` itself."""
    found, skipped = take_until(data, pos, needle)
    return found + len(needle), skipped


def parse_isize(data: bytes, pos: int) -> tuple[int, int]:
    """Parse an optionally negative decimal integer."""
    start = pos
    if data.startswith(b"-", pos):
        pos += 1
    end, digits = take_while(data, pos, DIGITS)
    if not digits:
        if end >= len(data):
            raise Incomplete(end, "integer")
        raise GrammarError(start, "integer", _peek(data, start))
    return end, int(data[start:end])


def parse_float(data: bytes, pos: int) -> tuple[int, float]:
    """Parse a decimal number such as ``0.52``; the fraction is optional."""
    start = pos
    pos, _ = parse_isize(data, pos)
    if data.startswith(b".", pos):
        end, fraction = take_while(data, pos + 1, DIGITS)
        if not fraction:
            if end >= len(data):
                raise Incomplete(end, "fraction")
            raise GrammarError(pos, "fraction", _peek(data, pos))
        pos = end
    return pos, float(data[start:pos])


def parse_word(data: bytes, pos: int) -> tuple[int, str]:
    """Parse a non-empty run of non-whitespace bytes as text."""
    end = pos
    size = len(data)
    while end < size and data[end] not in WHITESPACE:
        end += 1
    if end == pos:
        raise GrammarError(pos, "word", _peek(data, pos))
    try:
        return end, data[pos:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise GrammarError(pos, "utf-8 word", data[pos:end]) from e


def opt(parser: Parser[T], data: bytes, pos: int) -> tuple[int, T | None]:
    """Run ``parser``; on a grammar mismatch consume nothing and yield None."""
    try:
        return parser(data, pos)
    except GrammarError:
        return pos, None


def line_ending(data: bytes, pos: int, allow_eof: bool = False) -> tuple[int, bytes]:
    """Match LF or CRLF.

    With ``allow_eof`` the end of the buffer also counts as a terminator, so
    the last line of a file without a trailing newline is accepted.
    """
    if pos >= len(data):
        if allow_eof:
            return pos, b""
        raise Incomplete(pos, "line ending")
    if data.startswith(b"\n", pos):
        return pos + 1, b"\n"
    if data.startswith(b"\r\n", pos):
        return pos + 2, b"\r\n"
    if data[pos:] == b"\r":
        raise Incomplete(len(data), "line ending")
    raise GrammarError(pos, "line ending", _peek(data, pos))


def map_result(parser: Parser[T], data: bytes) -> T:
    """Run ``parser`` over ``data`` and return its value.

    Collapses the three internal outcomes into two: the parsed value (trailing
    bytes are ignored), or a raised :class:`ParseError`. Running out of input
    is always reported as :class:`TruncatedInputError`.
    """
    try:
        _, value = parser(data, 0)
    except Incomplete as e:
        raise TruncatedInputError(f"Input is truncated: {e}") from e
    except GrammarError as e:
        raise ParseError(f"Malformed input: {e}") from e
    return value
