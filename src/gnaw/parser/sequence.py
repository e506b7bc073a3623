"""Sequencing combinators.

Each child runs on the remainder of the previous one. The first child that
does not return Done decides the outcome: its Error or Incomplete is
returned unchanged, so diagnostics and Needed bounds from deep inside a
sequence reach the caller intact.

Python 3.13+.
"""

from typing import Any

from gnaw.core.input import Stream
from gnaw.core.result import Done, Outcome, Parser

__all__ = [
    "delimited",
    "pair",
    "preceded",
    "separated_pair",
    "sequence",
    "terminated",
]


def sequence(*parsers: Parser[Any]) -> Parser[tuple[Any, ...]]:
    """Run parsers one after another, collecting their outputs in a tuple.

    Example:
        >>> key_value = sequence(alpha, tag(b"="), digit)
        >>> key_value(Input.of(b"x=42;")).output
        (Input(b'x', position=0), Input(b'=', position=1), Input(b'42', position=2))
    """

    def parse_sequence(stream: Stream) -> Outcome[tuple[Any, ...]]:
        outputs: list[Any] = []
        current = stream
        for parser in parsers:
            outcome = parser(current)
            if not isinstance(outcome, Done):
                return outcome
            outputs.append(outcome.output)
            current = outcome.remainder
        return Done(current, tuple(outputs))

    return parse_sequence


def pair[A, B](first: Parser[A], second: Parser[B]) -> Parser[tuple[A, B]]:
    """Run two parsers in order; output both results."""

    def parse_pair(stream: Stream) -> Outcome[tuple[A, B]]:
        left = first(stream)
        if not isinstance(left, Done):
            return left
        right = second(left.remainder)
        if not isinstance(right, Done):
            return right
        return Done(right.remainder, (left.output, right.output))

    return parse_pair


def separated_pair[A, B](
    first: Parser[A], separator: Parser[object], second: Parser[B]
) -> Parser[tuple[A, B]]:
    """Like pair(), with a separator between the two (its output is dropped)."""
    inner = sequence(first, separator, second)

    def parse_separated_pair(stream: Stream) -> Outcome[tuple[A, B]]:
        outcome = inner(stream)
        if not isinstance(outcome, Done):
            return outcome
        left, _, right = outcome.output
        return Done(outcome.remainder, (left, right))

    return parse_separated_pair


def preceded[O](prefix: Parser[object], parser: Parser[O]) -> Parser[O]:
    """Match ``prefix`` then ``parser``; output ``parser``'s result."""
    inner = pair(prefix, parser)

    def parse_preceded(stream: Stream) -> Outcome[O]:
        return inner(stream).map(lambda both: both[1])

    return parse_preceded


def terminated[O](parser: Parser[O], suffix: Parser[object]) -> Parser[O]:
    """Match ``parser`` then ``suffix``; output ``parser``'s result."""
    inner = pair(parser, suffix)

    def parse_terminated(stream: Stream) -> Outcome[O]:
        return inner(stream).map(lambda both: both[0])

    return parse_terminated


def delimited[O](open_: Parser[object], parser: Parser[O], close: Parser[object]) -> Parser[O]:
    """Match ``open_``, ``parser``, ``close``; output ``parser``'s result.

    Example:
        >>> parenthesized = delimited(char("("), digit, char(")"))
        >>> parenthesized(Input.of("(12)")).output
        Input('12', position=1)
    """
    inner = sequence(open_, parser, close)

    def parse_delimited(stream: Stream) -> Outcome[O]:
        return inner(stream).map(lambda parts: parts[1])

    return parse_delimited
