"""Helpers shared by the primitive parsers.

Centralizes the two streaming rules every primitive follows:

- "Not enough input": Incomplete on a streaming view, Error on a complete one.
- "Greedy class ran to the end of the buffer": the boundary is unknown on a
  streaming view (Incomplete), known on a complete one (Done).

Python 3.13+.
"""

from collections.abc import Callable, Iterable

from gnaw.core.input import Element, Input, Stream
from gnaw.core.result import Done, Error, Incomplete, Needed, Outcome
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind

__all__ = ["char_set", "need", "negated", "split_greedy"]

# Highest code point mapped between text and byte character sets.
_ASCII_MAX: int = 0x7F


def need(stream: Stream, size: int, kind: ErrorKind) -> Incomplete | Error[object]:
    """Report that ``size`` more elements are required.

    Args:
        stream: View the primitive was invoked on
        size: Lower bound of missing elements (positive)
        kind: Discriminant to report when the view is complete

    Returns:
        Incomplete on a streaming view, Error(kind) on a complete view
    """
    if stream.complete:
        return errors.fail(kind, stream)
    return Incomplete(Needed.of(size))


def split_greedy(
    stream: Input, stop: int, kind: ErrorKind, at_least: int
) -> Outcome[Input]:
    """Finish a greedy scan that stopped at relative offset ``stop``.

    Args:
        stream: View that was scanned
        stop: Offset of the first non-matching element, or -1 when every
            element matched
        kind: Discriminant reported when fewer than ``at_least`` matched
        at_least: Minimum number of matching elements (0 or 1)

    Returns:
        Done(remainder, matched prefix), Incomplete, or Error(kind)
    """
    if stop < 0:
        if not stream.complete:
            return Incomplete(Needed.of(1))
        stop = len(stream)
    if stop < at_least:
        return errors.fail(kind, stream)
    matched, remainder = stream.split_at(stop)
    return Done(remainder, matched)


def negated(predicate: Callable[[Element], bool]) -> Callable[[Element], bool]:
    """Return the logical negation of an element predicate."""

    def not_predicate(element: Element) -> bool:
        return not predicate(element)

    return not_predicate


def char_set(chars: bytes | bytearray | str | Iterable[int]) -> frozenset[int | str]:
    """Build a membership set usable against binary and text elements.

    ASCII members are stored both as code points (binary elements are ints)
    and as one-character strings (text elements are str).

    Example:
        >>> members = char_set("ab")
        >>> "a" in members, ord("b") in members, "c" in members
        (True, True, False)
    """
    if isinstance(chars, str):
        codes = {ord(char) for char in chars if ord(char) <= _ASCII_MAX}
        return frozenset(chars) | frozenset(codes)
    values = bytes(chars)
    return frozenset(values) | frozenset(chr(value) for value in values if value <= _ASCII_MAX)
