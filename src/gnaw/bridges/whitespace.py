"""Whitespace-skipping convenience wrappers.

Built purely from core vocabulary. Like every greedy class, trailing
whitespace at the end of a streaming buffer is Incomplete (more whitespace
may follow); use complete views for whole documents.

Python 3.13+.
"""

from gnaw.core.input import Input
from gnaw.core.result import Outcome, Parser
from gnaw.parser.character import multispace0
from gnaw.parser.sequence import delimited, sequence

__all__ = ["sp", "ws", "ws_sequence"]


def sp(stream: Input) -> Outcome[Input]:
    """Skip optional whitespace (space, tab, CR, LF); outputs the skipped slice."""
    return multispace0(stream)


def ws[O](parser: Parser[O]) -> Parser[O]:
    """Surround ``parser`` with optional whitespace on both sides.

    Example:
        >>> ws(tag("let"))(Input.of("  let x", complete=True)).output
        Input('let', position=2, complete)
    """
    return delimited(sp, parser, sp)


def ws_sequence(*parsers: Parser[object]) -> Parser[tuple[object, ...]]:
    """Like sequence(), allowing whitespace before, between and after the parsers."""
    return sequence(*(ws(parser) for parser in parsers))
