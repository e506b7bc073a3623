"""Character-class recognizers and single-character parsers.

Predicates accept either element type (``int`` from binary views,
one-character ``str`` from text views) and classify ASCII only, so a grammar
behaves identically on bytes and text.

Class matchers come in two flavours:

- ``digit``, ``alpha``, ``alphanumeric``, ``hex_digit``, ``oct_digit``,
  ``space``, ``multispace``: one or more elements (Error on zero)
- ``digit0``, ``alpha0``, ``alphanumeric0``, ``space0``, ``multispace0``:
  zero or more elements

On a streaming view, a matcher whose class runs to the end of the buffer
returns ``Incomplete(Needed(1))``: the class might continue in the next
chunk. On a complete view it returns ``Done``.

Single-character parsers (``char``, ``one_of``, ``none_of``, ``anychar``)
output the matched character as a one-character ``str`` for both input
kinds.

Python 3.13+.
"""

from collections.abc import Callable, Iterable

from gnaw.core.input import Element, Input
from gnaw.core.result import Done, Outcome, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind

from .helpers import char_set, need, negated, split_greedy

__all__ = [
    "alpha",
    "alpha0",
    "alphanumeric",
    "alphanumeric0",
    "anychar",
    "char",
    "crlf",
    "digit",
    "digit0",
    "hex_digit",
    "is_alphabetic",
    "is_alphanumeric",
    "is_digit",
    "is_hex_digit",
    "is_multispace",
    "is_oct_digit",
    "is_space",
    "line_ending",
    "multispace",
    "multispace0",
    "none_of",
    "not_line_ending",
    "oct_digit",
    "one_of",
    "space",
    "space0",
]

_CR: int = 0x0D
_LF: int = 0x0A
_TAB: int = 0x09
_SPACE: int = 0x20


# ============================================================================
# PREDICATES
# ============================================================================


def _code(element: Element) -> int:
    return element if isinstance(element, int) else ord(element)


def is_digit(element: Element) -> bool:
    """ASCII decimal digit (0-9)."""
    return 0x30 <= _code(element) <= 0x39


def is_alphabetic(element: Element) -> bool:
    """ASCII letter (a-z, A-Z)."""
    code = _code(element) | 0x20
    return 0x61 <= code <= 0x7A


def is_alphanumeric(element: Element) -> bool:
    """ASCII letter or digit."""
    return is_digit(element) or is_alphabetic(element)


def is_hex_digit(element: Element) -> bool:
    """ASCII hexadecimal digit (0-9, a-f, A-F)."""
    code = _code(element)
    return 0x30 <= code <= 0x39 or 0x61 <= (code | 0x20) <= 0x66


def is_oct_digit(element: Element) -> bool:
    """ASCII octal digit (0-7)."""
    return 0x30 <= _code(element) <= 0x37


def is_space(element: Element) -> bool:
    """Space or horizontal tab."""
    return _code(element) in (_SPACE, _TAB)


def is_multispace(element: Element) -> bool:
    """Space, horizontal tab, carriage return or line feed."""
    return _code(element) in (_SPACE, _TAB, _CR, _LF)


# ============================================================================
# CLASS MATCHERS
# ============================================================================


def _class_matcher(
    predicate: Callable[[Element], bool], kind: ErrorKind, at_least: int, name: str
) -> Parser[Input]:
    stop_at = negated(predicate)

    def parse_class(stream: Input) -> Outcome[Input]:
        return split_greedy(stream, stream.find_first(stop_at), kind, at_least)

    parse_class.__name__ = parse_class.__qualname__ = name
    return parse_class


digit = _class_matcher(is_digit, ErrorKind.DIGIT, 1, "digit")
alpha = _class_matcher(is_alphabetic, ErrorKind.ALPHA, 1, "alpha")
alphanumeric = _class_matcher(is_alphanumeric, ErrorKind.ALPHANUMERIC, 1, "alphanumeric")
hex_digit = _class_matcher(is_hex_digit, ErrorKind.HEX_DIGIT, 1, "hex_digit")
oct_digit = _class_matcher(is_oct_digit, ErrorKind.OCT_DIGIT, 1, "oct_digit")
space = _class_matcher(is_space, ErrorKind.SPACE, 1, "space")
multispace = _class_matcher(is_multispace, ErrorKind.MULTISPACE, 1, "multispace")

digit0 = _class_matcher(is_digit, ErrorKind.DIGIT, 0, "digit0")
alpha0 = _class_matcher(is_alphabetic, ErrorKind.ALPHA, 0, "alpha0")
alphanumeric0 = _class_matcher(is_alphanumeric, ErrorKind.ALPHANUMERIC, 0, "alphanumeric0")
space0 = _class_matcher(is_space, ErrorKind.SPACE, 0, "space0")
multispace0 = _class_matcher(is_multispace, ErrorKind.MULTISPACE, 0, "multispace0")


# ============================================================================
# SINGLE CHARACTERS
# ============================================================================


def _as_char(element: Element) -> str:
    return element if isinstance(element, str) else chr(element)


def _single_char(accept: Callable[[Element], bool], kind: ErrorKind) -> Parser[str]:
    def parse_char(stream: Input) -> Outcome[str]:
        if stream.is_empty:
            return need(stream, 1, kind)
        element = stream[0]
        if not accept(element):
            return errors.fail(kind, stream)
        return Done(stream.advance(1), _as_char(element))

    return parse_char


def char(expected: str | int) -> Parser[str]:
    """Match one specific ASCII character (given as a str or a byte value).

    Raises:
        ValueError: If expected is not a single ASCII character
    """
    code = expected if isinstance(expected, int) else ord(expected) if len(expected) == 1 else -1
    if not 0 <= code <= 0x7F:
        msg = f"char() expects a single ASCII character, got {expected!r}"
        raise ValueError(msg)
    members = char_set(bytes([code]))
    return _single_char(members.__contains__, ErrorKind.CHAR)


def one_of(chars: bytes | bytearray | str | Iterable[int]) -> Parser[str]:
    """Match one element that belongs to ``chars``."""
    return _single_char(char_set(chars).__contains__, ErrorKind.ONE_OF)


def none_of(chars: bytes | bytearray | str | Iterable[int]) -> Parser[str]:
    """Match one element that does not belong to ``chars``."""
    return _single_char(negated(char_set(chars).__contains__), ErrorKind.NONE_OF)


def _any_element(element: Element) -> bool:  # noqa: ARG001
    return True


anychar = _single_char(_any_element, ErrorKind.EOF)


# ============================================================================
# LINE ENDINGS
# ============================================================================


def _line_break(stream: Input, kind: ErrorKind, allow_bare_lf: bool) -> Outcome[Input]:
    if stream.is_empty:
        return need(stream, 1, kind)
    first = _code(stream[0])
    if first == _LF and allow_bare_lf:
        matched, remainder = stream.split_at(1)
        return Done(remainder, matched)
    if first != _CR:
        return errors.fail(kind, stream)
    if len(stream) < 2:
        return need(stream, 1, kind)
    if _code(stream[1]) != _LF:
        return errors.fail(kind, stream)
    matched, remainder = stream.split_at(2)
    return Done(remainder, matched)


def crlf(stream: Input) -> Outcome[Input]:
    """Match ``\\r\\n``."""
    return _line_break(stream, ErrorKind.CRLF, allow_bare_lf=False)


def line_ending(stream: Input) -> Outcome[Input]:
    """Match ``\\n`` or ``\\r\\n``."""
    return _line_break(stream, ErrorKind.LINE_ENDING, allow_bare_lf=True)


def _is_line_break(element: Element) -> bool:
    return _code(element) in (_CR, _LF)


def not_line_ending(stream: Input) -> Outcome[Input]:
    """Consume everything up to (not including) the next ``\\r`` or ``\\n``."""
    return split_greedy(stream, stream.find_first(_is_line_break), ErrorKind.LINE_ENDING, 0)
