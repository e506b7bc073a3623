"""Bit-level parsing over byte inputs.

Bit mode is entered with :func:`bits`, which wraps a byte ``Input`` in a
``BitInput`` cursor, runs a bit parser, and converts the result back to the
byte domain:

- Done: the cursor must sit on a byte boundary (``BITS_ALIGNMENT``
  otherwise, unless ``pad=True`` skips the rest of the current byte)
- Incomplete: ``Needed`` is converted from bits to whole bytes
- Error: propagated; verbose frames keep their bit positions

Inside bit mode every sequence, branch, repetition and general combinator
works unchanged, since they only thread the cursor through.

Example:
    >>> header = bits(sequence(take_bits(4), take_bits(4)))
    >>> header(Input.of(bytes([0x45, 0x00]))).output
    (4, 5)

Python 3.13+.
"""

from gnaw.constants import BITS_PER_BYTE, MAX_BIT_WIDTH
from gnaw.core.input import BitInput, Input
from gnaw.core.result import Done, Error, Incomplete, Outcome, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind

from .helpers import need

__all__ = ["bits", "byte_aligned", "tag_bits", "take_bits"]


def _bits_to_bytes(count: int) -> int:
    return (count + BITS_PER_BYTE - 1) // BITS_PER_BYTE


def _check_width(count: int, feature: str) -> None:
    if not 0 <= count <= MAX_BIT_WIDTH:
        msg = f"{feature} reads 0 to {MAX_BIT_WIDTH} bits, got {count}"
        raise ValueError(msg)


def take_bits(count: int) -> Parser[int]:
    """Read ``count`` bits, most significant first, as an unsigned integer.

    ``take_bits(0)`` succeeds with 0 without consuming. A short streaming
    cursor is Incomplete with the number of missing bits.

    Raises:
        ValueError: If count is outside 0..64
    """
    _check_width(count, "take_bits")

    def parse_take_bits(stream: BitInput) -> Outcome[int]:
        available = len(stream)
        if available < count:
            return need(stream, count - available, ErrorKind.EOF)
        return Done(stream.advance(count), stream.read(count))

    return parse_take_bits


def tag_bits(count: int, pattern: int) -> Parser[int]:
    """Read ``count`` bits and require them to equal ``pattern`` (``TAG_BITS``).

    Raises:
        ValueError: If count is outside 0..64 or pattern does not fit in it
    """
    _check_width(count, "tag_bits")
    if not 0 <= pattern < (1 << count):
        msg = f"tag_bits pattern {pattern:#x} does not fit in {count} bits"
        raise ValueError(msg)
    reader = take_bits(count)

    def parse_tag_bits(stream: BitInput) -> Outcome[int]:
        outcome = reader(stream)
        if isinstance(outcome, Done) and outcome.output != pattern:
            return errors.fail(ErrorKind.TAG_BITS, stream)
        return outcome

    return parse_tag_bits


def bits[O](parser: Parser[O], *, pad: bool = False) -> Parser[O]:
    """Run a bit parser on a byte input.

    Args:
        parser: Parser over ``BitInput``
        pad: Discard the unread bits of a partially consumed last byte
            instead of failing with ``BITS_ALIGNMENT``

    Returns:
        Parser over ``Input`` whose remainder starts at the next whole byte
    """

    def parse_bits(stream: Input) -> Outcome[O]:
        outcome = parser(BitInput(stream))
        match outcome:
            case Done(BitInput() as cursor, output):
                if cursor.is_aligned:
                    return Done(cursor.data, output)
                if pad:
                    return Done(cursor.data.advance(1), output)
                return errors.fail(ErrorKind.BITS_ALIGNMENT, cursor)
            case Done(remainder, _):
                msg = f"bits() expects a bit parser, got remainder {remainder!r}"
                raise TypeError(msg)
            case Incomplete(needed):
                return Incomplete(needed.map(_bits_to_bytes))
            case _:
                return outcome

    return parse_bits


def byte_aligned[O](parser: Parser[O]) -> Parser[O]:
    """Run a byte parser from inside bit mode.

    The cursor must be on a byte boundary (``BITS_ALIGNMENT`` otherwise).
    A byte-level Needed is converted to bits.
    """

    def parse_byte_aligned(stream: BitInput) -> Outcome[O]:
        if not stream.is_aligned:
            return errors.fail(ErrorKind.BITS_ALIGNMENT, stream)
        outcome = parser(stream.data)
        match outcome:
            case Done(Input() as remainder, output):
                return Done(BitInput(remainder), output)
            case Incomplete(needed):
                return Incomplete(needed.map(lambda size: size * BITS_PER_BYTE))
            case Error():
                return outcome
            case _:
                msg = f"byte_aligned() expects a byte parser, got {outcome!r}"
                raise TypeError(msg)

    return parse_byte_aligned
