"""Parser combinators — small composable matchers over an in-memory string.

Every parser consumes a prefix of the remaining input and returns
``(value, remainder)``, or raises a ``ParseError`` subclass. Spans produced
along the way carry absolute offsets into the original input.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Span:
    """Half-open range ``[offset, offset + length)`` into a source string."""

    offset: int
    length: int

    @classmethod
    def of(cls, pair: tuple[int, int]) -> Span:
        offset, length = pair
        return cls(offset, length)

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def range(self) -> slice:
        return slice(self.offset, self.end)

    def text(self, source: str) -> str:
        return source[self.range]


@functools.total_ordering
class Limit:
    """Upper repeat bound: either ``Limit.at(n)`` or ``Limit.INFINITY``."""

    __slots__ = ("_count",)

    INFINITY: Limit

    def __init__(self, count: int | None) -> None:
        if count is not None and count < 0:
            raise ValueError(f"Repeat bound must be non-negative, got {count}")
        self._count = count

    @classmethod
    def at(cls, count: int) -> Limit:
        return cls(count)

    @property
    def is_infinite(self) -> bool:
        return self._count is None

    @property
    def count(self) -> int | None:
        return self._count

    def _key(self) -> tuple[int, int]:
        if self._count is None:
            return (1, 0)
        return (0, self._count)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Limit):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: Limit) -> bool:
        if not isinstance(other, Limit):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        if self._count is None:
            return "Limit.INFINITY"
        return f"Limit.at({self._count})"


Limit.INFINITY = Limit(None)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ParseError(Exception):
    """Base class for combinator failures. Equal when type and payload match."""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class ExpectedLiteral(ParseError):
    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return f"expected literal {self.text!r}"


class UnexpectedCharacter(ParseError):
    def __init__(self, char: str) -> None:
        super().__init__(char)
        self.char = char

    def __str__(self) -> str:
        return f"unexpected character {self.char!r}"


class UnexpectedEOF(ParseError):
    def __str__(self) -> str:
        return "unexpected end of input"


class ExpectedOneOfToParse(ParseError):
    def __str__(self) -> str:
        return "no alternative matched"


class ExpectedToAvoid(ParseError):
    def __init__(self, marker: str) -> None:
        super().__init__(marker)
        self.marker = marker

    def __str__(self) -> str:
        return f"expected text before {self.marker!r}"


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

class Parser(ABC, Generic[T]):
    """Consume a prefix of ``remaining`` starting at absolute ``offset``.

    Each step hands back a fresh remainder slice, so long repetitions are
    quadratic in the input length. Fine for templates and short inputs; use
    ``compile_template`` rather than ``compile_with_parsers`` on large ones.
    """

    def parse(self, text: str) -> tuple[T, str]:
        return self.parse_at(0, text)

    @abstractmethod
    def parse_at(self, offset: int, remaining: str) -> tuple[T, str]:
        ...


class Literal(Parser[Span]):
    def __init__(self, text: str) -> None:
        self.text = text

    def parse_at(self, offset: int, remaining: str) -> tuple[Span, str]:
        if remaining.startswith(self.text):
            length = len(self.text)
            return Span(offset, length), remaining[length:]
        raise ExpectedLiteral(self.text)


class AnyChar(Parser[Span]):
    def __init__(self, predicate: Callable[[str], bool]) -> None:
        self.predicate = predicate

    def parse_at(self, offset: int, remaining: str) -> tuple[Span, str]:
        if not remaining:
            raise UnexpectedEOF()
        char = remaining[0]
        if not self.predicate(char):
            raise UnexpectedCharacter(char)
        return Span(offset, 1), remaining[1:]


class Avoid(Parser[Span]):
    """Scan until ``marker`` or end of input; at least one character."""

    def __init__(self, marker: str) -> None:
        self.marker = marker

    def parse_at(self, offset: int, remaining: str) -> tuple[Span, str]:
        scanned = 0
        while scanned < len(remaining) and not remaining.startswith(self.marker, scanned):
            scanned += 1
        if scanned == 0:
            raise ExpectedToAvoid(self.marker)
        return Span(offset, scanned), remaining[scanned:]


class Map(Parser[U]):
    def __init__(self, parser: Parser[T], transform: Callable[[T], U]) -> None:
        self.parser = parser
        self.transform = transform

    def parse_at(self, offset: int, remaining: str) -> tuple[U, str]:
        value, rest = self.parser.parse_at(offset, remaining)
        return self.transform(value), rest


class OneOf(Parser[T]):
    def __init__(self, parsers: Sequence[Parser[T]]) -> None:
        self.parsers = tuple(parsers)

    def parse_at(self, offset: int, remaining: str) -> tuple[T, str]:
        for parser in self.parsers:
            try:
                return parser.parse_at(offset, remaining)
            except ParseError:
                continue
        raise ExpectedOneOfToParse()


class Chain(Parser[tuple]):
    """Run parsers back to back; the first failure propagates."""

    def __init__(self, parsers: Sequence[Parser]) -> None:
        self.parsers = tuple(parsers)

    def parse_at(self, offset: int, remaining: str) -> tuple[tuple, str]:
        values = []
        rest = remaining
        for parser in self.parsers:
            value, after = parser.parse_at(offset, rest)
            offset += len(rest) - len(after)
            rest = after
            values.append(value)
        return tuple(values), rest


class Between(Parser[list]):
    def __init__(self, lower: int, upper: Limit, parser: Parser[T]) -> None:
        if lower < 0:
            raise ValueError(f"Lower repeat bound must be non-negative, got {lower}")
        self.lower = lower
        self.upper = upper
        self.parser = parser

    def parse_at(self, offset: int, remaining: str) -> tuple[list[T], str]:
        values: list[T] = []
        rest = remaining
        count = 0

        # Below the floor every failure is fatal.
        while count < self.lower:
            value, after = self.parser.parse_at(offset, rest)
            offset += len(rest) - len(after)
            rest = after
            values.append(value)
            count += 1

        while Limit.at(count) < self.upper:
            try:
                value, after = self.parser.parse_at(offset, rest)
            except ParseError:
                break
            offset += len(rest) - len(after)
            rest = after
            values.append(value)
            count += 1

        return values, rest


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def literal(text: str) -> Parser[Span]:
    """Match ``text`` exactly."""
    return Literal(text)


def any_char(predicate: Callable[[str], bool]) -> Parser[Span]:
    """Match one character accepted by ``predicate``."""
    return AnyChar(predicate)


def avoid(marker: str) -> Parser[Span]:
    """Match the non-empty run of text before the next ``marker``."""
    return Avoid(marker)


def map_value(parser: Parser[T], transform: Callable[[T], U]) -> Parser[U]:
    """Transform the value produced by ``parser``."""
    return Map(parser, transform)


def one_of(parsers: Sequence[Parser[T]]) -> Parser[T]:
    """First parser to succeed at the same position wins."""
    return OneOf(parsers)


def sequence(*parsers: Parser) -> Parser[tuple]:
    """Run ``parsers`` in order, producing a tuple of their values."""
    return Chain(parsers)


def between(lower: int, upper: int, parser: Parser[T]) -> Parser[list[T]]:
    """Repeat ``parser`` at least ``lower`` and at most ``upper`` times."""
    return Between(lower, Limit.at(upper), parser)


def at_least(lower: int, parser: Parser[T]) -> Parser[list[T]]:
    return Between(lower, Limit.INFINITY, parser)


def many(parser: Parser[T]) -> Parser[list[T]]:
    return at_least(0, parser)
