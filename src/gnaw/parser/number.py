"""Fixed-width binary number extractors and hexadecimal integers.

The ``be_*`` / ``le_*`` parsers read a fixed number of bytes with ``struct``
directly from the view's buffer (no intermediate slice). They are parsers
themselves, not constructors::

    header = sequence(be_u16, be_u32)

A short streaming view is Incomplete with the number of missing bytes; a
short complete view is ``Error(EOF)``.

Python 3.13+.
"""

import struct

from gnaw.constants import MAX_HEX_U32_DIGITS
from gnaw.core.input import Input
from gnaw.core.result import Done, Outcome, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind

from .character import is_hex_digit
from .helpers import need, negated

__all__ = [
    "be_f32",
    "be_f64",
    "be_i8",
    "be_i16",
    "be_i32",
    "be_i64",
    "be_u8",
    "be_u16",
    "be_u32",
    "be_u64",
    "hex_u32",
    "le_f32",
    "le_f64",
    "le_i8",
    "le_i16",
    "le_i32",
    "le_i64",
    "le_u8",
    "le_u16",
    "le_u32",
    "le_u64",
]


def _fixed(fmt: str, name: str) -> Parser[int | float]:
    codec = struct.Struct(fmt)
    size = codec.size

    def parse_number(stream: Input) -> Outcome[int | float]:
        if stream.is_text:
            msg = f"{name} requires a binary input"
            raise TypeError(msg)
        available = len(stream)
        if available < size:
            return need(stream, size - available, ErrorKind.EOF)
        (value,) = codec.unpack_from(stream.source, stream.start)  # type: ignore[arg-type]
        return Done(stream.advance(size), value)

    parse_number.__name__ = parse_number.__qualname__ = name
    return parse_number


# Big-endian
be_u8 = _fixed(">B", "be_u8")
be_u16 = _fixed(">H", "be_u16")
be_u32 = _fixed(">I", "be_u32")
be_u64 = _fixed(">Q", "be_u64")
be_i8 = _fixed(">b", "be_i8")
be_i16 = _fixed(">h", "be_i16")
be_i32 = _fixed(">i", "be_i32")
be_i64 = _fixed(">q", "be_i64")
be_f32 = _fixed(">f", "be_f32")
be_f64 = _fixed(">d", "be_f64")

# Little-endian
le_u8 = _fixed("<B", "le_u8")
le_u16 = _fixed("<H", "le_u16")
le_u32 = _fixed("<I", "le_u32")
le_u64 = _fixed("<Q", "le_u64")
le_i8 = _fixed("<b", "le_i8")
le_i16 = _fixed("<h", "le_i16")
le_i32 = _fixed("<i", "le_i32")
le_i64 = _fixed("<q", "le_i64")
le_f32 = _fixed("<f", "le_f32")
le_f64 = _fixed("<d", "le_f64")


_not_hex = negated(is_hex_digit)


def hex_u32(stream: Input) -> Outcome[int]:
    """Parse up to eight hexadecimal digits as an unsigned 32-bit integer.

    Fewer than eight digits running to the end of a streaming view is
    Incomplete, since more digits may follow.

    Example:
        >>> hex_u32(Input.of(b"1F;", complete=True)).output
        31
    """
    window = stream[:MAX_HEX_U32_DIGITS]
    stop = window.find_first(_not_hex)
    if stop < 0:
        if len(window) < MAX_HEX_U32_DIGITS and not stream.complete:
            return need(stream, 1, ErrorKind.HEX_U32)
        stop = len(window)
    if stop == 0:
        return errors.fail(ErrorKind.HEX_U32, stream)
    digits, remainder = stream.split_at(stop)
    return Done(remainder, int(digits.decode("ascii"), 16))
