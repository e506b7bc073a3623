"""Drivers: whole-input parsing and the streaming retry loop.

The core never buffers. A parser that returns Incomplete leaves it to the
caller to obtain more data and re-run the SAME parser from the SAME
starting offset over the extended buffer. ``StreamParser`` packages that
loop:

    1. ``feed(chunk)`` appends the chunk to the pending buffer
    2. the parser runs from offset 0 of the pending data
    3. each Done yields an item; the next item is parsed from its remainder
    4. Incomplete stops the round until the next ``feed``
    5. Error raises ParseFailure

The consumed prefix is dropped once, when the round ends, so a chunk holding
many items is not re-copied per item.

Each round parses an immutable snapshot of the pending data, so views inside
previously returned items stay valid after the buffer moves on.

Python 3.13+.
"""

import logging
from collections.abc import Iterable, Iterator

from gnaw.core.input import Input, Source
from gnaw.core.result import Done, Error, Incomplete, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind
from gnaw.diagnostics.errors import GnawError, IncompleteInput, ParseFailure, TrailingInput

__all__ = ["StreamParser", "parse_all", "parse_chunks"]

logger = logging.getLogger(__name__)


def parse_all[O](parser: Parser[O], data: Source | memoryview) -> O:
    """Run ``parser`` over a whole, complete input and return its output.

    Args:
        parser: Parser to run
        data: The entire input

    Returns:
        The parser's output

    Raises:
        ParseFailure: If the parser fails
        IncompleteInput: If the parser asks for more data despite the
            complete input
        TrailingInput: If the parser succeeds without consuming everything

    Example:
        >>> parse_all(separated_list(char(","), digit), "1,2,3")
        [Input('1', position=0, complete), Input('2', position=2, complete), Input('3', position=4, complete)]
    """
    view = Input.of(data, complete=True)
    match parser(view):
        case Done(Input() as remainder, output):
            if remainder.is_empty:
                return output
            payload = errors.active().make(ErrorKind.EXACT, remainder)
            raise TrailingInput(payload, output=output, remainder=remainder, source=view)
        case Done(remainder, _):
            msg = f"parse_all() expects a byte or text parser, got remainder {remainder!r}"
            raise TypeError(msg)
        case Error(error):
            raise ParseFailure(error, source=view)
        case Incomplete(needed):
            raise IncompleteInput(needed)
    msg = "parser returned a value that is not an Outcome"
    raise TypeError(msg)


class StreamParser[O]:
    """Incremental driver for a parser that yields one item per Done.

    Attributes:
        parser: Item parser, re-run from the start of the pending data
        text: True to accept ``str`` chunks instead of bytes

    Example:
        >>> records = StreamParser(terminated(digit, char(";")))
        >>> records.feed(b"12;3")
        [Input(b'12', position=0)]
        >>> records.feed(b"4;")
        [Input(b'34', position=0)]
        >>> records.finish()
        []
    """

    __slots__ = ("_finished", "_pending", "_retries", "parser", "text")

    def __init__(self, parser: Parser[O], *, text: bool = False) -> None:
        """Create a driver with an empty buffer.

        Args:
            parser: Item parser
            text: Accept ``str`` chunks (default: bytes-like chunks)
        """
        self.parser = parser
        self.text = text
        self._pending: bytes | str = "" if text else b""
        self._retries = 0
        self._finished = False

    @property
    def buffered(self) -> int:
        """Number of pending elements not consumed by any item yet."""
        return len(self._pending)

    def feed(self, chunk: bytes | bytearray | memoryview | str) -> list[O]:
        """Append ``chunk`` and return every item that can now be parsed.

        Raises:
            ParseFailure: If the parser fails on the pending data
            GnawError: If called after finish(), or if the parser succeeds
                without consuming anything
            TypeError: If the chunk type does not match the driver mode
        """
        if self._finished:
            msg = "feed() called after finish()"
            raise GnawError(msg)
        if self.text != isinstance(chunk, str):
            expected = "str" if self.text else "bytes-like"
            msg = f"StreamParser expects {expected} chunks, got {type(chunk).__name__}"
            raise TypeError(msg)
        self._pending += chunk if isinstance(chunk, str) else bytes(chunk)  # type: ignore[operator]
        logger.debug("Fed %d elements (%d pending)", len(chunk), len(self._pending))
        return self._drain(complete=False)

    def finish(self) -> list[O]:
        """Mark the end of the stream and return the remaining items.

        Raises:
            ParseFailure: If the parser fails on the remaining data
            IncompleteInput: If the remaining data is a truncated item
        """
        self._finished = True
        return self._drain(complete=True)

    def _drain(self, *, complete: bool) -> list[O]:
        items: list[O] = []
        view = Input.of(self._pending, complete=complete)
        while not view.is_empty:
            outcome = self.parser(view)
            match outcome:
                case Done(Input() as remainder, output):
                    if view.offset_to(remainder) == 0:
                        msg = "Item parser succeeded without consuming input; the stream cannot advance"
                        raise GnawError(msg)
                    items.append(output)
                    view = remainder
                case Incomplete(needed):
                    if complete:
                        raise IncompleteInput(needed)
                    self._retries += 1
                    logger.debug(
                        "Incomplete item after %d pending elements, needed %s (retry %d)",
                        len(view),
                        needed.size if needed.is_known else "unknown",
                        self._retries,
                    )
                    break
                case Error(error):
                    raise ParseFailure(error, source=view)
                case _:
                    msg = f"Item parser returned {outcome!r}"
                    raise TypeError(msg)
        # Compact once per round; earlier items keep the old snapshot alive.
        if view.position:
            self._pending = view.materialize()
        return items


def parse_chunks[O](
    parser: Parser[O], chunks: Iterable[bytes | bytearray | memoryview | str], *, text: bool = False
) -> Iterator[O]:
    """Yield every item parsed from an iterable of chunks.

    Example:
        >>> list(parse_chunks(terminated(digit, char(";")), [b"1;2", b"3;"]))
        [Input(b'1', position=0), Input(b'23', position=0)]

    Raises:
        ParseFailure: If the parser fails
        IncompleteInput: If the stream ends inside an item
    """
    driver = StreamParser(parser, text=text)
    for chunk in chunks:
        yield from driver.feed(chunk)
    yield from driver.finish()
