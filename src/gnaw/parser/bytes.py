"""Slice-producing primitives: literals, counted takes, searches and scans.

Every function here is a constructor: it validates its arguments once and
returns a parser, a plain function ``(Input) -> Outcome``. Outputs are views
into the caller's buffer; ``escaped_transform`` is the only primitive that
builds an owned value.

Streaming Rules:
    - A decision that needs elements past the end of a streaming view returns
      ``Incomplete`` with the smallest lower bound that is known.
    - The same situation on a complete view (``Input.complete``) returns
      ``Error`` instead, and greedy scans that reach the end return ``Done``.

Python 3.13+.
"""

from collections.abc import Callable, Iterable

from gnaw.core.input import Element, Input, Literal
from gnaw.core.result import Done, Error, Incomplete, Needed, Outcome, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind
from gnaw.enums import Comparison

from .helpers import char_set, need, negated, split_greedy

__all__ = [
    "escaped",
    "escaped_transform",
    "is_a",
    "is_not",
    "length_data",
    "length_value",
    "non_empty",
    "tag",
    "tag_no_case",
    "take",
    "take_till",
    "take_till1",
    "take_until",
    "take_until_and_consume",
    "take_until_either",
    "take_until_either_and_consume",
    "take_while",
    "take_while1",
]


# ============================================================================
# LITERALS
# ============================================================================


def _literal_parser(
    literal: bytes | bytearray | str,
    kind: ErrorKind,
    compare: Callable[[Input, bytes | str], Comparison],
) -> Parser[Input]:
    expected = Literal.of(literal)

    def parse_literal(stream: Input) -> Outcome[Input]:
        target = expected.for_input(stream)
        match compare(stream, target):
            case Comparison.MATCH:
                matched, remainder = stream.split_at(len(target))
                return Done(remainder, matched)
            case Comparison.PARTIAL:
                return need(stream, len(target) - len(stream), kind)
            case _:
                return errors.fail(kind, stream)

    return parse_literal


def tag(literal: bytes | bytearray | str) -> Parser[Input]:
    """Match an exact literal prefix.

    A streaming view that is a strict prefix of the literal is Incomplete,
    needing the missing elements.

    Example:
        >>> tag(b"abc")(Input.of(b"abcdef"))
        Done(remainder=Input(b'def', position=3), output=Input(b'abc', position=0))
        >>> tag(b"abc")(Input.of(b"ab"))
        Incomplete(needed=Needed(size=1))
    """
    return _literal_parser(literal, ErrorKind.TAG, Input.compare)


def tag_no_case(literal: bytes | bytearray | str) -> Parser[Input]:
    """Match a literal prefix, ignoring ASCII/Unicode case."""
    return _literal_parser(literal, ErrorKind.TAG_NO_CASE, Input.compare_no_case)


# ============================================================================
# COUNTED TAKES
# ============================================================================


def take(count: int) -> Parser[Input]:
    """Consume exactly ``count`` elements.

    Raises:
        ValueError: If count is negative
    """
    if count < 0:
        msg = f"take() count must be non-negative, got {count}"
        raise ValueError(msg)

    def parse_take(stream: Input) -> Outcome[Input]:
        return _take_exact(stream, count)

    return parse_take


def _take_exact(stream: Input, count: int) -> Outcome[Input]:
    available = len(stream)
    if available < count:
        return need(stream, count - available, ErrorKind.EOF)
    matched, remainder = stream.split_at(count)
    return Done(remainder, matched)


def length_data(count_parser: Parser[int]) -> Parser[Input]:
    """Read a length with ``count_parser``, then take that many elements.

    A negative length (from a signed count parser) fails with ``LENGTH_VALUE``.
    """

    def parse_length_data(stream: Input) -> Outcome[Input]:
        outcome = count_parser(stream)
        if not isinstance(outcome, Done):
            return outcome
        if outcome.output < 0:
            return errors.fail(ErrorKind.LENGTH_VALUE, stream)
        return _take_exact(outcome.remainder, outcome.output)

    return parse_length_data


def length_value[O](count_parser: Parser[int], parser: Parser[O]) -> Parser[O]:
    """Read a length, take that many elements, and run ``parser`` on them alone.

    The taken slice is final, so ``parser`` sees it as a complete view and
    cannot ask for more. Leftover elements inside the slice are discarded.
    """

    def parse_length_value(stream: Input) -> Outcome[O]:
        counted = length_data(count_parser)(stream)
        if not isinstance(counted, Done):
            return counted
        inner = parser(counted.output.with_complete())
        match inner:
            case Done(_, output):
                return Done(counted.remainder, output)
            case Error():
                return errors.wrap(ErrorKind.LENGTH_VALUE, stream, inner)
            case _:
                return errors.fail(ErrorKind.LENGTH_VALUE, stream)

    return parse_length_value


def non_empty(stream: Input) -> Outcome[Input]:
    """Consume the whole view, requiring at least one element."""
    if stream.is_empty:
        return need(stream, 1, ErrorKind.NON_EMPTY)
    matched, remainder = stream.split_at(len(stream))
    return Done(remainder, matched)


# ============================================================================
# SEARCHES
# ============================================================================


def _until(pattern: bytes | bytearray | str, kind: ErrorKind, consume: bool) -> Parser[Input]:
    expected = Literal.of(pattern)

    def parse_until(stream: Input) -> Outcome[Input]:
        target = expected.for_input(stream)
        index = stream.find(target)
        if index < 0:
            return need(stream, len(target) - stream.partial_suffix(target), kind)
        matched, remainder = stream.split_at(index)
        if consume:
            remainder = remainder.advance(len(target))
        return Done(remainder, matched)

    return parse_until


def take_until(pattern: bytes | bytearray | str) -> Parser[Input]:
    """Consume everything before the first occurrence of ``pattern``.

    The pattern itself is left in the remainder. When it is not found on a
    streaming view, the Needed bound accounts for a partial occurrence at
    the end of the buffer.

    Example:
        >>> take_until(b"::")(Input.of(b"key::value"))
        Done(remainder=Input(b'::value', position=3), output=Input(b'key', position=0))
    """
    return _until(pattern, ErrorKind.TAKE_UNTIL, consume=False)


def take_until_and_consume(pattern: bytes | bytearray | str) -> Parser[Input]:
    """Like take_until(), also consuming the pattern (the output excludes it)."""
    return _until(pattern, ErrorKind.TAKE_UNTIL_AND_CONSUME, consume=True)


def _until_either(chars: bytes | bytearray | str, kind: ErrorKind, consume: bool) -> Parser[Input]:
    members = char_set(chars)

    def parse_until_either(stream: Input) -> Outcome[Input]:
        index = stream.find_first(members.__contains__)
        if index < 0:
            return need(stream, 1, kind)
        matched, remainder = stream.split_at(index)
        if consume:
            remainder = remainder.advance(1)
        return Done(remainder, matched)

    return parse_until_either


def take_until_either(chars: bytes | bytearray | str) -> Parser[Input]:
    """Consume everything before the first element found in ``chars``."""
    return _until_either(chars, ErrorKind.TAKE_UNTIL_EITHER, consume=False)


def take_until_either_and_consume(chars: bytes | bytearray | str) -> Parser[Input]:
    """Like take_until_either(), also consuming the delimiter element."""
    return _until_either(chars, ErrorKind.TAKE_UNTIL_EITHER_AND_CONSUME, consume=True)


# ============================================================================
# PREDICATE SCANS
# ============================================================================


def _scan(predicate: Callable[[Element], bool], kind: ErrorKind, at_least: int) -> Parser[Input]:
    stop_at = negated(predicate)

    def parse_scan(stream: Input) -> Outcome[Input]:
        return split_greedy(stream, stream.find_first(stop_at), kind, at_least)

    return parse_scan


def take_while(predicate: Callable[[Element], bool]) -> Parser[Input]:
    """Consume the longest prefix whose elements satisfy ``predicate`` (may be empty).

    Binary elements are ints, text elements are one-character strings.
    """
    return _scan(predicate, ErrorKind.TAKE_WHILE1, at_least=0)


def take_while1(predicate: Callable[[Element], bool]) -> Parser[Input]:
    """Like take_while(), requiring at least one element."""
    return _scan(predicate, ErrorKind.TAKE_WHILE1, at_least=1)


def take_till(predicate: Callable[[Element], bool]) -> Parser[Input]:
    """Consume the longest prefix whose elements do not satisfy ``predicate``."""
    return _scan(negated(predicate), ErrorKind.TAKE_TILL1, at_least=0)


def take_till1(predicate: Callable[[Element], bool]) -> Parser[Input]:
    """Like take_till(), requiring at least one element."""
    return _scan(negated(predicate), ErrorKind.TAKE_TILL1, at_least=1)


def is_a(chars: bytes | bytearray | str | Iterable[int]) -> Parser[Input]:
    """Consume one or more elements that all belong to ``chars``."""
    return _scan(char_set(chars).__contains__, ErrorKind.IS_A, at_least=1)


def is_not(chars: bytes | bytearray | str | Iterable[int]) -> Parser[Input]:
    """Consume one or more elements, none of which belong to ``chars``."""
    return _scan(negated(char_set(chars).__contains__), ErrorKind.IS_NOT, at_least=1)


# ============================================================================
# ESCAPES
# ============================================================================


def _single(control_char: bytes | str) -> Literal:
    control = Literal.of(control_char)
    if len(control.binary) != 1:
        msg = f"control_char must be a single ASCII character, got {control_char!r}"
        raise ValueError(msg)
    return control


def _progressed(outcome: Outcome[object], stream: Input) -> bool:
    return isinstance(outcome, Done) and len(outcome.remainder) < len(stream)


def escaped(
    normal: Parser[object],
    control_char: bytes | str,
    escapable: Parser[object],
) -> Parser[Input]:
    """Recognize text made of ``normal`` runs and ``control_char`` escapes.

    Alternates ``normal`` with escape sequences (the control character
    followed by something ``escapable`` accepts) and returns the whole
    consumed slice, escapes included.

    Example:
        >>> string_body = escaped(is_not(b'"\\\\'), b"\\\\", one_of(b'"n\\\\'))
        >>> string_body(Input.of(b'ab\\\\"cd"', complete=True)).output
        Input(b'ab\\\\"cd', position=0)

    Raises:
        ValueError: If control_char is not a single ASCII character
    """
    control = _single(control_char)

    def parse_escaped(stream: Input) -> Outcome[Input]:
        marker = control.for_input(stream)
        current = stream
        while not current.is_empty:
            outcome = normal(current)
            if isinstance(outcome, Incomplete):
                return outcome
            if _progressed(outcome, current):
                current = outcome.remainder  # type: ignore[union-attr]
                continue
            if not current.starts_with(marker):
                break
            after_marker = current.advance(1)
            if after_marker.is_empty:
                return need(after_marker, 1, ErrorKind.ESCAPED)
            sequence = escapable(after_marker)
            match sequence:
                case Done(remainder, _):
                    current = remainder
                case Error():
                    return errors.wrap(ErrorKind.ESCAPED, current, sequence)
                case _:
                    return sequence
        if current.is_empty and not stream.complete:
            return Incomplete(Needed.of(1))
        matched, remainder = stream.split_at(stream.offset_to(current))
        return Done(remainder, matched)

    return parse_escaped


def _owned(value: object) -> bytes | str:
    if isinstance(value, Input):
        return value.materialize()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return value
    msg = f"escaped_transform pieces must be Input, bytes or str, got {type(value).__name__}"
    raise TypeError(msg)


def escaped_transform(
    normal: Parser[object],
    control_char: bytes | str,
    transform: Parser[object],
) -> Parser[bytes | str]:
    """Like escaped(), building an owned value with escapes replaced.

    ``normal`` outputs are copied as-is; after each control character,
    ``transform`` parses the escape and its output (bytes, str or a view) is
    appended in place of the escape sequence. The result is ``bytes`` for
    binary input and ``str`` for text input.

    Example:
        >>> unescape = escaped_transform(
        ...     is_not("\\\\"), "\\\\", alt(value("\\n", tag("n")), value("\\\\", tag("\\\\")))
        ... )
        >>> unescape(Input.of("a\\\\nb", complete=True)).output
        'a\\nb'
    """
    control = _single(control_char)

    def parse_escaped_transform(stream: Input) -> Outcome[bytes | str]:
        marker = control.for_input(stream)
        pieces: list[bytes | str] = []
        current = stream
        while not current.is_empty:
            outcome = normal(current)
            if isinstance(outcome, Incomplete):
                return outcome
            if _progressed(outcome, current):
                pieces.append(_owned(outcome.output))  # type: ignore[union-attr]
                current = outcome.remainder  # type: ignore[union-attr]
                continue
            if not current.starts_with(marker):
                break
            after_marker = current.advance(1)
            if after_marker.is_empty:
                return need(after_marker, 1, ErrorKind.ESCAPED_TRANSFORM)
            replacement = transform(after_marker)
            match replacement:
                case Done(remainder, output):
                    pieces.append(_owned(output))
                    current = remainder
                case Error():
                    return errors.wrap(ErrorKind.ESCAPED_TRANSFORM, current, replacement)
                case _:
                    return replacement
        if current.is_empty and not stream.complete:
            return Incomplete(Needed.of(1))
        joiner: bytes | str = "" if stream.is_text else b""
        return Done(current, joiner.join(pieces))  # type: ignore[arg-type]

    return parse_escaped_transform
