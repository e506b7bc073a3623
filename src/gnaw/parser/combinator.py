"""General-purpose combinators: optionals, mapping, look-ahead, errors, debugging.

These combinators wrap a single child parser and adjust one aspect of its
outcome. Unless stated otherwise, Incomplete from the child is propagated
unchanged: none of them may turn "not enough input yet" into a decision.

Python 3.13+.
"""

import logging
from collections.abc import Callable
from typing import Any

from gnaw.constants import DEFAULT_DBG_PREVIEW
from gnaw.core.input import BitInput, Input, Stream
from gnaw.core.result import Done, Error, Incomplete, Needed, Outcome, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind
from gnaw.diagnostics.errors import ConversionError

__all__ = [
    "complete",
    "cond",
    "cond_reduce",
    "dbg",
    "eof",
    "exact",
    "flat_map",
    "map_opt",
    "negate",
    "opt",
    "peek",
    "recognize",
    "rest",
    "transform",
    "value",
    "verify",
    "with_error",
]

logger = logging.getLogger(__name__)

# Exceptions a conversion passed to transform() may raise to reject a value.
# ConversionError is a ValueError; it is listed for readability.
_CONVERSION_ERRORS = (ConversionError, ValueError, ArithmeticError)


# ============================================================================
# OPTIONAL AND CONDITIONAL
# ============================================================================


def opt[O](parser: Parser[O]) -> Parser[O | None]:
    """Make ``parser`` optional: an Error becomes ``Done(input, None)``.

    Example:
        >>> sign = opt(one_of("+-"))
        >>> sign(Input.of("42")).output is None
        True
    """

    def parse_opt(stream: Stream) -> Outcome[O | None]:
        outcome = parser(stream)
        if isinstance(outcome, Error):
            return Done(stream, None)
        return outcome

    return parse_opt


def cond[O](flag: bool, parser: Parser[O]) -> Parser[O | None]:
    """Run ``parser`` only when ``flag`` is true; otherwise succeed with None.

    When it runs, ``parser``'s outcome is returned unchanged.
    """

    def parse_cond(stream: Stream) -> Outcome[O | None]:
        if not flag:
            return Done(stream, None)
        return parser(stream)

    return parse_cond


def cond_reduce[O](flag: bool, parser: Parser[O]) -> Parser[O]:
    """Run ``parser`` only when ``flag`` is true; otherwise fail with ``COND``."""

    def parse_cond_reduce(stream: Stream) -> Outcome[O]:
        if not flag:
            return errors.fail(ErrorKind.COND, stream)
        return parser(stream)

    return parse_cond_reduce


# ============================================================================
# MAPPING
# ============================================================================


def transform[O, R](parser: Parser[O], func: Callable[[O], R]) -> Parser[R]:
    """Apply a fallible conversion to ``parser``'s output.

    ``func`` rejects a value by raising ``ValueError`` (including
    ``ConversionError`` and ``UnicodeDecodeError``) or ``ArithmeticError``;
    the rejection becomes ``Error(MAP_RES)`` at the parser's input. Any other
    exception propagates: it signals a bug, not a mismatch.

    Example:
        >>> number = transform(digit, lambda view: int(view.decode()))
        >>> number(Input.of(b"42;")).output
        42
    """

    def parse_transform(stream: Stream) -> Outcome[R]:
        outcome = parser(stream)
        if not isinstance(outcome, Done):
            return outcome
        try:
            converted = func(outcome.output)
        except _CONVERSION_ERRORS:
            return errors.fail(ErrorKind.MAP_RES, stream)
        return Done(outcome.remainder, converted)

    return parse_transform


def map_opt[O, R](parser: Parser[O], func: Callable[[O], R | None]) -> Parser[R]:
    """Apply a conversion that signals rejection by returning None (``MAP_OPT``)."""

    def parse_map_opt(stream: Stream) -> Outcome[R]:
        outcome = parser(stream)
        if not isinstance(outcome, Done):
            return outcome
        converted = func(outcome.output)
        if converted is None:
            return errors.fail(ErrorKind.MAP_OPT, stream)
        return Done(outcome.remainder, converted)

    return parse_map_opt


def value[V](constant: V, parser: Parser[Any]) -> Parser[V]:
    """Replace ``parser``'s output with ``constant``."""

    def parse_value(stream: Stream) -> Outcome[V]:
        return parser(stream).map(lambda _: constant)

    return parse_value


def flat_map[O](parser: Parser[Input], inner: Parser[O]) -> Parser[O]:
    """Run ``inner`` over the slice that ``parser`` produced.

    The slice is final, so ``inner`` sees a complete view; an Incomplete from
    ``inner`` would ask for data that can never arrive and is reported as
    ``COMPLETE``. The remainder is ``parser``'s remainder.

    Example:
        >>> field = flat_map(take(4), digit)
        >>> field(Input.of(b"12ab....")).output
        Input(b'12', position=0, complete)
    """

    def parse_flat_map(stream: Stream) -> Outcome[O]:
        outer = parser(stream)
        if not isinstance(outer, Done):
            return outer
        nested = inner(outer.output.with_complete())
        match nested:
            case Done(_, output):
                return Done(outer.remainder, output)
            case Incomplete():
                return errors.fail(ErrorKind.COMPLETE, stream)
            case _:
                return nested

    return parse_flat_map


def verify[O](parser: Parser[O], predicate: Callable[[O], bool]) -> Parser[O]:
    """Fail with ``VERIFY`` unless ``predicate`` accepts the output."""

    def parse_verify(stream: Stream) -> Outcome[O]:
        outcome = parser(stream)
        if isinstance(outcome, Done) and not predicate(outcome.output):
            return errors.fail(ErrorKind.VERIFY, stream)
        return outcome

    return parse_verify


# ============================================================================
# LOOK-AHEAD AND CONSUMPTION
# ============================================================================


def peek[O](parser: Parser[O]) -> Parser[O]:
    """Run ``parser`` without consuming: the remainder is the original input."""

    def parse_peek(stream: Stream) -> Outcome[O]:
        outcome = parser(stream)
        if isinstance(outcome, Done):
            return Done(stream, outcome.output)
        return outcome

    return parse_peek


def negate(parser: Parser[Any]) -> Parser[None]:
    """Succeed without consuming when ``parser`` fails; fail with ``NOT`` when it matches."""

    def parse_negate(stream: Stream) -> Outcome[None]:
        outcome = parser(stream)
        match outcome:
            case Done():
                return errors.fail(ErrorKind.NOT, stream)
            case Error():
                return Done(stream, None)
            case _:
                return outcome

    return parse_negate


def recognize(parser: Parser[Any]) -> Parser[Input]:
    """Output the slice ``parser`` consumed instead of its output.

    Example:
        >>> number = recognize(sequence(opt(char("-")), digit))
        >>> number(Input.of("-12+")).output
        Input('-12', position=0)
    """

    def parse_recognize(stream: Input) -> Outcome[Input]:
        outcome = parser(stream)
        if not isinstance(outcome, Done):
            return outcome
        consumed, _ = stream.split_at(stream.offset_to(outcome.remainder))
        return Done(outcome.remainder, consumed)

    return parse_recognize


def complete[O](parser: Parser[O]) -> Parser[O]:
    """Turn Incomplete into ``Error(COMPLETE)``.

    For grammars that know their input is whole even though the view is
    not flagged ``complete``.
    """

    def parse_complete(stream: Stream) -> Outcome[O]:
        outcome = parser(stream)
        if isinstance(outcome, Incomplete):
            return errors.fail(ErrorKind.COMPLETE, stream)
        return outcome

    return parse_complete


def rest(stream: Input) -> Outcome[Input]:
    """Consume and output everything that is left (possibly nothing)."""
    everything, remainder = stream.split_at(len(stream))
    return Done(remainder, everything)


def eof(stream: Stream) -> Outcome[Stream]:
    """Succeed only at the end of the stream.

    A non-empty view fails with ``EOF_EXPECTED``. An empty streaming view is
    Incomplete (more data may still arrive); an empty complete view is Done.
    """
    if len(stream):
        return errors.fail(ErrorKind.EOF_EXPECTED, stream)
    if not stream.complete:
        return Incomplete(Needed.unknown())
    return Done(stream, stream)


def exact[O](parser: Parser[O]) -> Parser[O]:
    """Require ``parser`` to consume the whole view (``EXACT`` otherwise)."""

    def parse_exact(stream: Stream) -> Outcome[O]:
        outcome = parser(stream)
        if isinstance(outcome, Done) and len(outcome.remainder):
            return errors.fail(ErrorKind.EXACT, outcome.remainder)
        return outcome

    return parse_exact


# ============================================================================
# ERROR ANNOTATION AND DEBUGGING
# ============================================================================


def with_error[O](code: object, parser: Parser[O]) -> Parser[O]:
    """Report failures of ``parser`` under ``code``.

    ``code`` is an ``ErrorKind`` or any custom value (reported as
    ``Custom(code)`` in simple mode). In verbose mode a frame is added on top
    of the child's chain; in simple mode the discriminant is replaced.

    Example:
        >>> header = with_error("bad magic", tag(b"\\x89PNG"))
    """
    if isinstance(code, ErrorKind):
        kind, custom = code, None
    else:
        kind, custom = ErrorKind.CUSTOM, code

    def parse_with_error(stream: Stream) -> Outcome[O]:
        outcome = parser(stream)
        if isinstance(outcome, Error):
            return errors.wrap(kind, stream, outcome, custom)
        return outcome

    return parse_with_error


def _preview(stream: Stream) -> str:
    if isinstance(stream, BitInput):
        return f"bit {stream.position} of {stream.data[:DEFAULT_DBG_PREVIEW]!r}"
    return repr(stream[:DEFAULT_DBG_PREVIEW])


def dbg[O](parser: Parser[O], label: str | None = None) -> Parser[O]:
    """Log every outcome of ``parser`` through the ``gnaw.parser.combinator`` logger.

    Done and Incomplete are logged at DEBUG, Error at ERROR level together
    with a preview of the input. The outcome itself is passed through.
    """
    name = label or getattr(parser, "__name__", repr(parser))

    def parse_dbg(stream: Stream) -> Outcome[O]:
        outcome = parser(stream)
        match outcome:
            case Done(remainder, output):
                logger.debug(
                    "%s: Done at %d, consumed %d, output=%r",
                    name,
                    stream.position,
                    len(stream) - len(remainder),
                    output,
                )
            case Incomplete(needed):
                logger.debug("%s: Incomplete at %d, %s", name, stream.position, needed)
            case Error(error):
                logger.error(
                    "%s: Error at %d: %r on input %s",
                    name,
                    stream.position,
                    error,
                    _preview(stream),
                )
        return outcome

    return parse_dbg
