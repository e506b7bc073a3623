"""Branching combinators: ordered choice, keyed dispatch, permutations.

Ordered choice is deterministic:

- children are tried in declaration order on the SAME input
- the first Done wins; later children are never run
- the first Incomplete is returned immediately (the choice cannot be
  decided until more input arrives, and a later child must not win on a
  truncated buffer)
- when every child fails, the combinator reports ``ALT`` on top of the
  FIRST child's error

Python 3.13+.
"""

from collections.abc import Hashable, Mapping
from typing import Any

from gnaw.core.input import Stream
from gnaw.core.result import Done, Error, Incomplete, Outcome, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind

__all__ = ["alt", "permutation", "switch"]

_UNSET = object()


def alt[O](*parsers: Parser[O]) -> Parser[O]:
    """Try each parser in order on the same input; the first success wins.

    Example:
        >>> keyword = alt(tag("true"), tag("false"))
        >>> keyword(Input.of("false!")).output
        Input('false', position=0)

    Raises:
        ValueError: If no parser is given
    """
    if not parsers:
        msg = "alt() requires at least one parser"
        raise ValueError(msg)

    def parse_alt(stream: Stream) -> Outcome[O]:
        first_error: Error[Any] | None = None
        for parser in parsers:
            outcome = parser(stream)
            if not isinstance(outcome, Error):
                return outcome
            if first_error is None:
                first_error = outcome
        return errors.wrap(ErrorKind.ALT, stream, first_error)  # type: ignore[arg-type]

    return parse_alt


def switch[O](
    selector: Parser[Any],
    cases: Mapping[Hashable, Parser[O]],
    default: Parser[O] | None = None,
) -> Parser[O]:
    """Dispatch on the output of ``selector``.

    The selector's output is looked up in ``cases`` (views compare and hash
    by content, so ``{b"GET": ...}`` keys match a ``tag``/``take`` output);
    the chosen parser runs on the selector's remainder. An unknown key uses
    ``default`` if given, else fails with ``SWITCH``.
    """

    def parse_switch(stream: Stream) -> Outcome[O]:
        selected = selector(stream)
        if not isinstance(selected, Done):
            return selected
        branch = cases.get(selected.output, default)
        if branch is None:
            return errors.fail(ErrorKind.SWITCH, stream)
        outcome = branch(selected.remainder)
        if isinstance(outcome, Error):
            return errors.wrap(ErrorKind.SWITCH, stream, outcome)
        return outcome

    return parse_switch


def permutation(*parsers: Parser[Any]) -> Parser[tuple[Any, ...]]:
    """Match every parser exactly once, in any order.

    After each match the remaining parsers are retried from the first one,
    so earlier parsers take precedence when several could match. Outputs are
    returned in declaration order.

    Raises:
        ValueError: If no parser is given
    """
    if not parsers:
        msg = "permutation() requires at least one parser"
        raise ValueError(msg)

    def parse_permutation(stream: Stream) -> Outcome[tuple[Any, ...]]:
        results: list[Any] = [_UNSET] * len(parsers)
        current = stream
        for _ in parsers:
            first_error: Error[Any] | None = None
            for index, parser in enumerate(parsers):
                if results[index] is not _UNSET:
                    continue
                outcome = parser(current)
                if isinstance(outcome, Incomplete):
                    return outcome
                if isinstance(outcome, Done):
                    results[index] = outcome.output
                    current = outcome.remainder
                    break
                if first_error is None:
                    first_error = outcome
            else:
                return errors.wrap(ErrorKind.PERMUTATION, stream, first_error)  # type: ignore[arg-type]
        return Done(current, tuple(results))

    return parse_permutation
