"""Immutable, zero-copy input views for byte, text and bit parsing.

Implements the view pattern every parser in gnaw consumes: a parser receives a
view, and a successful parser hands back a *suffix* of that view as the
remainder. Views never duplicate the underlying buffer; only ``materialize()``
and ``decode()`` produce owned copies.

Design Philosophy:
    - Input is immutable (frozen dataclass)
    - Every advance()/split_at() returns NEW views over the SAME buffer
    - Equality is by content, never by buffer identity
    - End of stream is a flag on the view (``complete``), not a sentinel value
    - Line:column computed on-demand (only for error reports)

Lifetime:
    A view holds a reference to its buffer, so the buffer lives at least as
    long as any view into it. Mutating a ``bytearray`` while views into it are
    alive is unsupported: views record offsets, not snapshots.
"""

import bisect
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import overload

from gnaw.constants import BITS_PER_BYTE
from gnaw.enums import Comparison

__all__ = [
    "BitInput",
    "Element",
    "Input",
    "LineOffsetCache",
    "Literal",
    "Source",
    "Stream",
]

type Source = bytes | bytearray | str
type Element = int | str

# repr() shows at most this many elements of a view.
_REPR_LIMIT: int = 40


@dataclass(frozen=True, slots=True, eq=False)
class Input:
    """Immutable view ``source[start:end]`` over a byte or text buffer.

    Key Design Decisions:
        1. Frozen dataclass - immutability enforced by Python
        2. Slots - views are created on every successful parse step
        3. Offsets, not copies - sub-views share the parent's buffer
        4. Content equality - ``Input.of(b"ab") == Input.of(b"xab")[1:]``
        5. ``complete`` marks the final piece of a stream

    Elements are ``int`` for binary buffers (like iterating ``bytes``) and
    one-character ``str`` for text buffers.

    Example:
        >>> view = Input.of(b"hello world")
        >>> head, tail = view.split_at(5)
        >>> head == b"hello", tail.position
        (True, 5)
        >>> tail.source is view.source  # Same buffer, no copy
        True
        >>> view[0]
        104
        >>> Input.of("abc")[1:]
        Input('bc', position=1)
    """

    source: Source
    start: int
    end: int
    complete: bool = False

    def __post_init__(self) -> None:
        """Validate view bounds.

        Raises:
            ValueError: If the bounds do not describe a range inside source
        """
        if not 0 <= self.start <= self.end <= len(self.source):
            msg = (
                f"Invalid view bounds [{self.start}:{self.end}] over a source "
                f"of length {len(self.source)}"
            )
            raise ValueError(msg)

    @classmethod
    def of(cls, data: Source | memoryview, *, complete: bool = False) -> "Input":
        """Create a view over a whole buffer.

        Args:
            data: Buffer to parse. A memoryview is converted once to bytes.
            complete: True if no more data will ever follow this buffer

        Returns:
            View covering the entire buffer

        Raises:
            TypeError: If data is not bytes, bytearray, memoryview or str
        """
        if isinstance(data, memoryview):
            data = data.tobytes()
        if not isinstance(data, (bytes, bytearray, str)):
            msg = f"Input source must be bytes, bytearray or str, got {type(data).__name__}"
            raise TypeError(msg)
        return cls(data, 0, len(data), complete)

    # ------------------------------------------------------------------
    # Size and position
    # ------------------------------------------------------------------

    @property
    def position(self) -> int:
        """Absolute offset of the first element in the underlying buffer."""
        return self.start

    @property
    def is_text(self) -> bool:
        """True for views over ``str`` buffers."""
        return isinstance(self.source, str)

    @property
    def is_empty(self) -> bool:
        """True when no element remains in the view."""
        return self.start >= self.end

    def __len__(self) -> int:
        return self.end - self.start

    @overload
    def __getitem__(self, key: int) -> Element: ...

    @overload
    def __getitem__(self, key: slice) -> "Input": ...

    def __getitem__(self, key: int | slice) -> "Element | Input":
        """Return one element, or a sub-view for a slice.

        Raises:
            IndexError: If an integer index is out of range
            ValueError: If a slice has a step other than 1
        """
        if isinstance(key, slice):
            if key.step not in (None, 1):
                msg = "Input views do not support stepped slices"
                raise ValueError(msg)
            first, last, _ = key.indices(len(self))
            last = max(first, last)
            return Input(self.source, self.start + first, self.start + last, self.complete)
        index = key + len(self) if key < 0 else key
        if not 0 <= index < len(self):
            msg = f"Input index {key} out of range for view of length {len(self)}"
            raise IndexError(msg)
        return self.source[self.start + index]

    def __iter__(self) -> Iterator[Element]:
        source = self.source
        for index in range(self.start, self.end):
            yield source[index]

    # ------------------------------------------------------------------
    # Navigation (all O(1), never copy)
    # ------------------------------------------------------------------

    def advance(self, count: int) -> "Input":
        """Return the suffix after ``count`` elements (clamped to the end)."""
        return Input(self.source, min(self.start + count, self.end), self.end, self.complete)

    def split_at(self, count: int) -> tuple["Input", "Input"]:
        """Split into ``(prefix, remainder)`` at ``count`` elements.

        Example:
            >>> prefix, rest = Input.of(b"abcdef").split_at(2)
            >>> prefix == b"ab", rest == b"cdef"
            (True, True)
        """
        middle = min(self.start + count, self.end)
        return (
            Input(self.source, self.start, middle, self.complete),
            Input(self.source, middle, self.end, self.complete),
        )

    def offset_to(self, other: "Input") -> int:
        """Number of elements between this view's start and ``other``'s start.

        Used to compute how much a parser consumed: ``input.offset_to(remainder)``.
        """
        return other.start - self.start

    def with_complete(self, complete: bool = True) -> "Input":
        """Return the same view with the end-of-stream flag set or cleared."""
        if complete == self.complete:
            return self
        return Input(self.source, self.start, self.end, complete)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def starts_with(self, literal: bytes | str) -> bool:
        """Check whether the view starts with ``literal`` (no copy)."""
        return len(literal) <= len(self) and self.source.startswith(
            literal,  # type: ignore[arg-type]
            self.start,
            self.end,
        )

    def compare(self, literal: bytes | str) -> Comparison:
        """Compare the view against a literal prefix.

        Returns:
            MATCH if the view starts with literal, PARTIAL if the whole view
            is a strict prefix of literal, MISMATCH otherwise.

        Example:
            >>> Input.of(b"ab").compare(b"abc")
            <Comparison.PARTIAL: 'partial'>
        """
        available = len(self)
        if available >= len(literal):
            if self.source.startswith(literal, self.start, self.end):  # type: ignore[arg-type]
                return Comparison.MATCH
            return Comparison.MISMATCH
        if self.source.startswith(literal[:available], self.start, self.end):  # type: ignore[arg-type]
            return Comparison.PARTIAL
        return Comparison.MISMATCH

    def compare_no_case(self, literal: bytes | str) -> Comparison:
        """Like compare(), ignoring case.

        Copies at most ``len(literal)`` elements to fold their case.
        """
        available = min(len(self), len(literal))
        head = self.source[self.start : self.start + available]
        if head.lower() != literal[:available].lower():
            return Comparison.MISMATCH
        if available == len(literal):
            return Comparison.MATCH
        return Comparison.PARTIAL

    def find(self, sub: bytes | str) -> int:
        """Relative offset of the first occurrence of ``sub``, or -1."""
        index = self.source.find(sub, self.start, self.end)  # type: ignore[arg-type]
        return -1 if index < 0 else index - self.start

    def find_first(self, predicate: Callable[[Element], bool]) -> int:
        """Relative offset of the first element satisfying ``predicate``, or -1."""
        source = self.source
        for index in range(self.start, self.end):
            if predicate(source[index]):
                return index - self.start
        return -1

    def partial_suffix(self, sub: bytes | str) -> int:
        """Length of the longest suffix of the view that is a strict prefix of ``sub``.

        A search for ``sub`` that failed on this view needs at least
        ``len(sub) - partial_suffix(sub)`` more elements before it can succeed.

        Example:
            >>> Input.of(b"xxab").partial_suffix(b"abc")
            2
        """
        limit = min(len(sub) - 1, len(self))
        for size in range(limit, 0, -1):
            if self.source.startswith(sub[:size], self.end - size, self.end):  # type: ignore[arg-type]
                return size
        return 0

    # ------------------------------------------------------------------
    # Materialization (the only copying operations)
    # ------------------------------------------------------------------

    def materialize(self) -> bytes | str:
        """Return an owned copy of the referenced elements."""
        if isinstance(self.source, str):
            return self.source[self.start : self.end]
        return bytes(memoryview(self.source)[self.start : self.end])

    def decode(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        """Decode the referenced bytes to text (text views return their content).

        Raises:
            UnicodeDecodeError: If the bytes are not valid in ``encoding``
        """
        if isinstance(self.source, str):
            return self.source[self.start : self.end]
        return str(memoryview(self.source)[self.start : self.end], encoding, errors)

    # ------------------------------------------------------------------
    # Content equality
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Input):
            if self.is_text != other.is_text or len(self) != len(other):
                return False
            if isinstance(self.source, str):
                return self.source.startswith(other.materialize(), self.start, self.end)  # type: ignore[arg-type]
            return memoryview(self.source)[self.start : self.end] == memoryview(
                other.source  # type: ignore[arg-type]
            )[other.start : other.end]
        if isinstance(other, (bytes, bytearray, str)):
            if self.is_text != isinstance(other, str):
                return False
            return len(other) == len(self) and self.starts_with(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.materialize())

    def __repr__(self) -> str:
        content = self[:_REPR_LIMIT].materialize()
        suffix = "..." if len(self) > _REPR_LIMIT else ""
        flag = ", complete" if self.complete else ""
        return f"Input({content!r}{suffix}, position={self.start}{flag})"


@dataclass(frozen=True, slots=True)
class BitInput:
    """Bit-granular cursor over a binary Input.

    ``data`` is positioned at the byte holding the next bit; ``bit_offset``
    (0-7) counts bits already consumed from that byte, most significant bit
    first.

    Example:
        >>> cursor = BitInput(Input.of(bytes([0b1011_0010])))
        >>> cursor.read(3)
        5
        >>> cursor.advance(3).bit_offset
        3
    """

    data: Input
    bit_offset: int = 0

    def __post_init__(self) -> None:
        """Validate the cursor.

        Raises:
            TypeError: If data is a text view
            ValueError: If bit_offset is outside 0-7, or points into a byte
                that the view does not contain
        """
        if self.data.is_text:
            msg = "Bit-level parsing requires a binary input"
            raise TypeError(msg)
        if not 0 <= self.bit_offset < BITS_PER_BYTE:
            msg = f"bit_offset must be in 0..7, got {self.bit_offset}"
            raise ValueError(msg)
        if self.bit_offset and self.data.is_empty:
            msg = "bit_offset must be 0 on an exhausted input"
            raise ValueError(msg)

    @property
    def position(self) -> int:
        """Absolute bit index into the underlying buffer."""
        return self.data.position * BITS_PER_BYTE + self.bit_offset

    @property
    def complete(self) -> bool:
        """End-of-stream flag of the underlying byte view."""
        return self.data.complete

    @property
    def is_aligned(self) -> bool:
        """True when the cursor sits on a byte boundary."""
        return self.bit_offset == 0

    def __len__(self) -> int:
        return len(self.data) * BITS_PER_BYTE - self.bit_offset

    def read(self, count: int) -> int:
        """Read ``count`` bits (MSB first) as an unsigned integer, without advancing.

        The caller guarantees ``count <= len(self)``.
        """
        if count == 0:
            return 0
        last_bit = self.bit_offset + count
        byte_count = (last_bit + BITS_PER_BYTE - 1) // BITS_PER_BYTE
        start = self.data.start
        chunk = int.from_bytes(memoryview(self.data.source)[start : start + byte_count], "big")  # type: ignore[arg-type]
        return (chunk >> (byte_count * BITS_PER_BYTE - last_bit)) & ((1 << count) - 1)

    def advance(self, count: int) -> "BitInput":
        """Return the cursor moved ``count`` bits forward."""
        byte_step, bit_offset = divmod(self.bit_offset + count, BITS_PER_BYTE)
        return BitInput(self.data.advance(byte_step), bit_offset)


type Stream = Input | BitInput


@dataclass(frozen=True, slots=True)
class Literal:
    """A literal held in both binary and text form.

    Parsers are built before they see any input, so a literal given as
    ``str`` may later be matched against a binary view (it is UTF-8 encoded)
    and an ASCII ``bytes`` literal may be matched against a text view.

    Attributes:
        binary: Encoded form used against binary views
        text: Text form used against text views (None for non-ASCII bytes)
    """

    binary: bytes
    text: str | None

    @classmethod
    def of(cls, value: bytes | bytearray | str) -> "Literal":
        """Build a Literal from bytes or text."""
        if isinstance(value, str):
            return cls(value.encode("utf-8"), value)
        binary = bytes(value)
        try:
            text: str | None = binary.decode("ascii")
        except UnicodeDecodeError:
            text = None
        return cls(binary, text)

    def for_input(self, view: Input) -> bytes | str:
        """Return the form of the literal matching the view's element type.

        Raises:
            TypeError: If a non-ASCII byte literal meets a text view
        """
        if not view.is_text:
            return self.binary
        if self.text is None:
            msg = f"Byte literal {self.binary!r} is not ASCII and cannot match text input"
            raise TypeError(msg)
        return self.text


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in O(n) single pass, then provides
    O(log n) lookups using binary search. Works for text and binary buffers
    (``\\n`` / ``0x0A`` is the line delimiter).

    Example:
        >>> source = "line1\\nline2\\nline3"
        >>> cache = LineOffsetCache(source)
        >>> cache.get_line_col(0)   # Start of line 1
        (1, 1)
        >>> cache.get_line_col(6)   # Start of line 2
        (2, 1)
        >>> cache.get_line_col(8)   # Third char of line 2
        (2, 3)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: Source) -> None:
        """Build line offset cache from source.

        Args:
            source: Buffer to index

        Complexity:
            O(n) where n = len(source)
        """
        newline: bytes | str = "\n" if isinstance(source, str) else b"\n"
        # Line 1 starts at offset 0
        offsets = [0]
        index = source.find(newline)  # type: ignore[arg-type]
        while index >= 0:
            offsets.append(index + 1)
            index = source.find(newline, index + 1)  # type: ignore[arg-type]
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get line and column for position using binary search.

        Args:
            pos: Element position in source (0-indexed)

        Returns:
            (line, column) tuple (1-indexed, like text editors)
        """
        pos = min(max(pos, 0), self._source_len)
        line_index = bisect.bisect_right(self._offsets, pos) - 1
        return (line_index + 1, pos - self._offsets[line_index] + 1)

    def line_bounds(self, line: int) -> tuple[int, int]:
        """Return ``(start, end)`` offsets of a 1-based line, newline excluded."""
        start = self._offsets[line - 1]
        if line < len(self._offsets):
            return (start, self._offsets[line] - 1)
        return (start, self._source_len)
