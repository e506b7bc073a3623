"""Repetition combinators: many, counted, folds and separated lists.

Zero-Progress Guard:
    A child that returns Done without consuming anything would make an
    unbounded loop spin forever. Every unbounded loop here checks progress
    after each child success and stops at the first zero-width match:

    - many0 / fold_many0 / separated lists: the zero-width output is NOT
      collected; the loop ends with what it has so far
    - many1 / fold_many1: a zero-width FIRST match is kept as the single
      element (the "one" requirement is met), then the loop ends
    - many_m_n / fold_many_m_n: the loop ends; fewer than ``m`` collected is
      an Error
    - many_till: the terminator did not match and the child cannot advance,
      so the loop fails with ``MANY_TILL``

    ``count`` is bounded by construction and collects zero-width matches.

Streaming:
    Incomplete from a child is always propagated: an item cut off by the end
    of a streaming buffer must not be mistaken for the end of the list.

Reduced Environments:
    Combinators that build Python lists refuse construction when owned
    collections are disabled (``GNAW_COLLECT=0``); the ``fold_*`` variants
    accumulate through a caller-supplied function and always work.

Python 3.13+.
"""

from collections.abc import Callable

from gnaw.config import require_collections
from gnaw.core.input import Stream
from gnaw.core.result import Done, Error, Incomplete, Outcome, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind
from gnaw.enums import TrailingSeparator

__all__ = [
    "count",
    "fold_many0",
    "fold_many1",
    "fold_many_m_n",
    "length_count",
    "many0",
    "many1",
    "many_m_n",
    "many_till",
    "separated_list",
    "separated_nonempty_list",
]


def _consumed(before: Stream, after: Stream) -> bool:
    return len(after) < len(before)


def _check_bounds(minimum: int, maximum: int, feature: str) -> None:
    if not 0 <= minimum <= maximum:
        msg = f"{feature} requires 0 <= m <= n, got m={minimum}, n={maximum}"
        raise ValueError(msg)


# ============================================================================
# FOLDS (the accumulation engine shared by the many* family)
# ============================================================================


def _fold_loop[O, A](
    parser: Parser[O], accumulator: A, stream: Stream, func: Callable[[A, O], A]
) -> Outcome[A]:
    """Fold matches until the first failure or zero-width match."""
    current = stream
    while True:
        outcome = parser(current)
        if isinstance(outcome, Incomplete):
            return outcome
        if isinstance(outcome, Error) or not _consumed(current, outcome.remainder):
            return Done(current, accumulator)
        accumulator = func(accumulator, outcome.output)
        current = outcome.remainder


def _fold_at_least_one[O, A](
    parser: Parser[O], init: Callable[[], A], func: Callable[[A, O], A], kind: ErrorKind
) -> Parser[A]:
    def parse_fold_at_least_one(stream: Stream) -> Outcome[A]:
        first = parser(stream)
        match first:
            case Incomplete():
                return first
            case Error():
                return errors.wrap(kind, stream, first)
            case Done(remainder, output) if not _consumed(stream, remainder):
                return Done(remainder, func(init(), output))
            case Done(remainder, output):
                return _fold_loop(parser, func(init(), output), remainder, func)

    return parse_fold_at_least_one


def _fold_bounded[O, A](
    minimum: int,
    maximum: int,
    parser: Parser[O],
    init: Callable[[], A],
    func: Callable[[A, O], A],
    kind: ErrorKind,
) -> Parser[A]:
    def parse_fold_bounded(stream: Stream) -> Outcome[A]:
        accumulator = init()
        current = stream
        matched = 0
        while matched < maximum:
            outcome = parser(current)
            if isinstance(outcome, Incomplete):
                return outcome
            if isinstance(outcome, Error):
                if matched < minimum:
                    return errors.wrap(kind, stream, outcome)
                break
            if not _consumed(current, outcome.remainder):
                break
            accumulator = func(accumulator, outcome.output)
            current = outcome.remainder
            matched += 1
        if matched < minimum:
            return errors.fail(kind, stream)
        return Done(current, accumulator)

    return parse_fold_bounded


def fold_many0[O, A](
    parser: Parser[O], init: Callable[[], A], func: Callable[[A, O], A]
) -> Parser[A]:
    """Apply ``parser`` until it fails, folding outputs into an accumulator.

    ``init`` is called once per parse to create a fresh accumulator, so a
    mutable accumulator is never shared between two parses.

    Example:
        >>> total = fold_many0(terminated(digit, opt(tag(","))), int, lambda acc, d: acc + int(d.decode()))
        >>> total(Input.of(b"1,2,3", complete=True)).output
        6
    """

    def parse_fold_many0(stream: Stream) -> Outcome[A]:
        return _fold_loop(parser, init(), stream, func)

    return parse_fold_many0


def fold_many1[O, A](
    parser: Parser[O], init: Callable[[], A], func: Callable[[A, O], A]
) -> Parser[A]:
    """Like fold_many0(), requiring at least one match (``FOLD_MANY1`` otherwise)."""
    return _fold_at_least_one(parser, init, func, ErrorKind.FOLD_MANY1)


def fold_many_m_n[O, A](
    minimum: int,
    maximum: int,
    parser: Parser[O],
    init: Callable[[], A],
    func: Callable[[A, O], A],
) -> Parser[A]:
    """Apply ``parser`` between ``minimum`` and ``maximum`` times, folding outputs.

    Raises:
        ValueError: If the bounds are not ``0 <= minimum <= maximum``
    """
    _check_bounds(minimum, maximum, "fold_many_m_n")
    return _fold_bounded(minimum, maximum, parser, init, func, ErrorKind.FOLD_MANY_M_N)


# ============================================================================
# COLLECTING REPETITION
# ============================================================================


def _append[O](items: list[O], item: O) -> list[O]:
    items.append(item)
    return items


def many0[O](parser: Parser[O]) -> Parser[list[O]]:
    """Apply ``parser`` zero or more times, collecting outputs in a list.

    Example:
        >>> many0(tag("ab"))(Input.of("ababx")).output
        [Input('ab', position=0), Input('ab', position=2)]

    Raises:
        ConfigurationError: If owned collections are disabled
    """
    require_collections("many0")
    return fold_many0(parser, list, _append)


def many1[O](parser: Parser[O]) -> Parser[list[O]]:
    """Apply ``parser`` one or more times (``MANY1`` if the first attempt fails).

    Raises:
        ConfigurationError: If owned collections are disabled
    """
    require_collections("many1")
    return _fold_at_least_one(parser, list, _append, ErrorKind.MANY1)


def many_m_n[O](minimum: int, maximum: int, parser: Parser[O]) -> Parser[list[O]]:
    """Apply ``parser`` at least ``minimum`` and at most ``maximum`` times.

    Raises:
        ConfigurationError: If owned collections are disabled
        ValueError: If the bounds are not ``0 <= minimum <= maximum``
    """
    require_collections("many_m_n")
    _check_bounds(minimum, maximum, "many_m_n")
    return _fold_bounded(minimum, maximum, parser, list, _append, ErrorKind.MANY_M_N)


def many_till[O, T](parser: Parser[O], terminator: Parser[T]) -> Parser[tuple[list[O], T]]:
    """Apply ``parser`` until ``terminator`` matches.

    The terminator is tried first at every step. Output is the collected
    list and the terminator's output.

    Raises:
        ConfigurationError: If owned collections are disabled
    """
    require_collections("many_till")

    def parse_many_till(stream: Stream) -> Outcome[tuple[list[O], T]]:
        items: list[O] = []
        current = stream
        while True:
            end = terminator(current)
            match end:
                case Done(remainder, output):
                    return Done(remainder, (items, output))
                case Incomplete():
                    return end
            outcome = parser(current)
            match outcome:
                case Incomplete():
                    return outcome
                case Error():
                    return errors.wrap(ErrorKind.MANY_TILL, stream, outcome)
                case Done(remainder, output) if _consumed(current, remainder):
                    items.append(output)
                    current = remainder
                case _:
                    return errors.fail(ErrorKind.MANY_TILL, current)

    return parse_many_till


def count[O](parser: Parser[O], times: int) -> Parser[list[O]]:
    """Apply ``parser`` exactly ``times`` times.

    Raises:
        ConfigurationError: If owned collections are disabled
        ValueError: If times is negative
    """
    require_collections("count")
    if times < 0:
        msg = f"count() requires a non-negative repetition count, got {times}"
        raise ValueError(msg)

    def parse_count(stream: Stream) -> Outcome[list[O]]:
        return _repeat(parser, times, stream)

    return parse_count


def _repeat[O](parser: Parser[O], times: int, stream: Stream) -> Outcome[list[O]]:
    items: list[O] = []
    current = stream
    for _ in range(times):
        outcome = parser(current)
        match outcome:
            case Done(remainder, output):
                items.append(output)
                current = remainder
            case Error():
                return errors.wrap(ErrorKind.COUNT, stream, outcome)
            case _:
                return outcome
    return Done(current, items)


def length_count[O](count_parser: Parser[int], parser: Parser[O]) -> Parser[list[O]]:
    """Read a repetition count, then apply ``parser`` that many times.

    A negative count (from a signed count parser) fails with ``COUNT``.

    Raises:
        ConfigurationError: If owned collections are disabled
    """
    require_collections("length_count")

    def parse_length_count(stream: Stream) -> Outcome[list[O]]:
        counted = count_parser(stream)
        if not isinstance(counted, Done):
            return counted
        if counted.output < 0:
            return errors.fail(ErrorKind.COUNT, stream)
        return _repeat(parser, counted.output, counted.remainder)

    return parse_length_count


# ============================================================================
# SEPARATED LISTS
# ============================================================================


def _separated[O](
    separator: Parser[object],
    parser: Parser[O],
    trailing: TrailingSeparator,
    at_least_one: bool,
    kind: ErrorKind,
) -> Parser[list[O]]:
    trailing = TrailingSeparator(trailing)

    def parse_separated(stream: Stream) -> Outcome[list[O]]:
        items: list[O] = []
        first = parser(stream)
        match first:
            case Incomplete():
                return first
            case Error():
                if at_least_one:
                    return errors.wrap(kind, stream, first)
                return Done(stream, items)
            case Done(remainder, output):
                items.append(output)
                current = remainder
        while True:
            separated = separator(current)
            match separated:
                case Incomplete():
                    return separated
                case Error():
                    return Done(current, items)
            after_separator = separated.remainder
            element = parser(after_separator)
            match element:
                case Incomplete():
                    return element
                case Error():
                    match trailing:
                        case TrailingSeparator.ALLOW:
                            return Done(after_separator, items)
                        case TrailingSeparator.REJECT:
                            return errors.wrap(kind, stream, element)
                        case _:
                            return Done(current, items)
                case Done(remainder, output) if _consumed(current, remainder):
                    items.append(output)
                    current = remainder
                case _:
                    return Done(current, items)

    return parse_separated


def separated_list[O](
    separator: Parser[object],
    parser: Parser[O],
    *,
    trailing: TrailingSeparator = TrailingSeparator.LEAVE,
) -> Parser[list[O]]:
    """Zero or more ``parser`` matches separated by ``separator``.

    A separator that is not followed by an element is handled according to
    ``trailing``: LEAVE keeps it in the remainder, ALLOW consumes it, REJECT
    fails with ``SEPARATED_LIST``.

    Example:
        >>> numbers = separated_list(tag(","), digit)
        >>> numbers(Input.of(b"1,22,3;")).output
        [Input(b'1', position=0), Input(b'22', position=2), Input(b'3', position=5)]

    Raises:
        ConfigurationError: If owned collections are disabled
    """
    require_collections("separated_list")
    return _separated(separator, parser, trailing, False, ErrorKind.SEPARATED_LIST)


def separated_nonempty_list[O](
    separator: Parser[object],
    parser: Parser[O],
    *,
    trailing: TrailingSeparator = TrailingSeparator.LEAVE,
) -> Parser[list[O]]:
    """Like separated_list(), requiring at least one element.

    Raises:
        ConfigurationError: If owned collections are disabled
    """
    require_collections("separated_nonempty_list")
    return _separated(separator, parser, trailing, True, ErrorKind.SEPARATED_NONEMPTY_LIST)
