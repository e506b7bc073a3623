"""Tests for the zero-copy input views.

Validates Input slicing, matching, content equality and the complete flag,
BitInput cursors, Literal encodings and LineOffsetCache lookups.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gnaw.core.input import BitInput, Input, LineOffsetCache, Literal
from gnaw.enums import Comparison

# ============================================================================
# CONSTRUCTION AND SLICING
# ============================================================================


class TestInputConstruction:
    """Test Input.of() and bound validation."""

    def test_of_bytes_covers_whole_buffer(self) -> None:
        """Input.of() views the entire buffer from offset 0."""
        view = Input.of(b"hello")
        assert (view.start, view.end, len(view)) == (0, 5, 5)
        assert not view.complete

    def test_of_memoryview_is_converted(self) -> None:
        """A memoryview is accepted and converted to bytes."""
        view = Input.of(memoryview(b"abc"))
        assert isinstance(view.source, bytes)
        assert view == b"abc"

    def test_of_rejects_other_types(self) -> None:
        """Non-buffer sources raise TypeError."""
        with pytest.raises(TypeError, match="bytes, bytearray or str"):
            Input.of([1, 2, 3])  # type: ignore[arg-type]

    def test_invalid_bounds_rejected(self) -> None:
        """Bounds outside the source raise ValueError."""
        with pytest.raises(ValueError, match="Invalid view bounds"):
            Input(b"abc", 2, 5)

    def test_complete_flag(self) -> None:
        """complete=True is stored on the view."""
        assert Input.of("x", complete=True).complete


class TestInputSlicing:
    """Test indexing, slicing and navigation without copies."""

    def test_binary_elements_are_ints(self) -> None:
        """Binary views yield int elements."""
        view = Input.of(b"AB")
        assert view[0] == 65
        assert list(view) == [65, 66]

    def test_text_elements_are_strings(self) -> None:
        """Text views yield one-character strings."""
        view = Input.of("AB")
        assert view[-1] == "B"
        assert list(view) == ["A", "B"]

    def test_index_out_of_range(self) -> None:
        """Indexing past the view raises IndexError."""
        with pytest.raises(IndexError):
            Input.of(b"abc")[1:][2]

    def test_slice_shares_buffer(self) -> None:
        """Slices are views over the same source object."""
        source = b"hello world"
        view = Input.of(source)
        tail = view[6:]
        assert tail.source is source
        assert tail.position == 6
        assert tail == b"world"

    def test_stepped_slice_rejected(self) -> None:
        """Only contiguous slices are supported."""
        with pytest.raises(ValueError, match="stepped"):
            Input.of(b"abcdef")[::2]

    def test_split_at(self) -> None:
        """split_at() returns prefix and remainder views."""
        prefix, rest = Input.of(b"abcdef").split_at(2)
        assert prefix == b"ab"
        assert rest == b"cdef"
        assert rest.position == 2

    def test_advance_is_clamped(self) -> None:
        """advance() past the end yields an empty view at the end."""
        view = Input.of(b"abc").advance(10)
        assert view.is_empty
        assert view.position == 3

    def test_offset_to(self) -> None:
        """offset_to() counts consumed elements."""
        view = Input.of(b"abcdef")
        assert view.offset_to(view.advance(4)) == 4

    def test_complete_flag_propagates(self) -> None:
        """Sub-views inherit the complete flag."""
        view = Input.of(b"abc", complete=True)
        assert view[1:].complete
        assert view.advance(1).complete
        assert all(part.complete for part in view.split_at(1))

    def test_with_complete(self) -> None:
        """with_complete() toggles the flag and keeps bounds."""
        view = Input.of(b"abc")[1:]
        flagged = view.with_complete()
        assert flagged.complete
        assert (flagged.start, flagged.end) == (1, 3)
        assert flagged.with_complete(False) == view


# ============================================================================
# MATCHING
# ============================================================================


class TestInputMatching:
    """Test literal comparison and searching."""

    def test_compare_match(self) -> None:
        """A view starting with the literal is a MATCH."""
        assert Input.of(b"abcdef").compare(b"abc") is Comparison.MATCH

    def test_compare_partial(self) -> None:
        """A view that is a strict prefix of the literal is PARTIAL."""
        assert Input.of(b"ab").compare(b"abc") is Comparison.PARTIAL

    def test_compare_mismatch(self) -> None:
        """Differing content is a MISMATCH."""
        assert Input.of(b"abx").compare(b"abc") is Comparison.MISMATCH
        assert Input.of(b"x").compare(b"abc") is Comparison.MISMATCH

    def test_compare_respects_view_end(self) -> None:
        """Elements past the view end are not compared."""
        view = Input.of(b"abcdef")[:2]
        assert view.compare(b"abc") is Comparison.PARTIAL

    def test_compare_no_case(self) -> None:
        """Case-insensitive comparison."""
        assert Input.of("HeLLo").compare_no_case("hello") is Comparison.MATCH
        assert Input.of("HE").compare_no_case("hello") is Comparison.PARTIAL
        assert Input.of("HX").compare_no_case("hello") is Comparison.MISMATCH

    def test_find_is_relative(self) -> None:
        """find() returns offsets relative to the view start."""
        view = Input.of(b"xx::yy::")[3:]
        assert view.find(b"::") == 3
        assert view.find(b"zz") == -1

    def test_find_first(self) -> None:
        """find_first() locates the first element matching a predicate."""
        view = Input.of("abc1")
        assert view.find_first(str.isdigit) == 3
        assert view.find_first(str.isupper) == -1

    def test_partial_suffix(self) -> None:
        """partial_suffix() measures a cut-off occurrence at the end."""
        assert Input.of(b"xxab").partial_suffix(b"abc") == 2
        assert Input.of(b"xxa").partial_suffix(b"abc") == 1
        assert Input.of(b"xxx").partial_suffix(b"abc") == 0


# ============================================================================
# CONTENT EQUALITY
# ============================================================================


class TestInputEquality:
    """Test equality and hashing by content."""

    def test_views_over_different_buffers(self) -> None:
        """Views with the same content are equal regardless of buffer."""
        assert Input.of(b"ab") == Input.of(b"xab")[1:]

    def test_equal_to_raw_bytes_and_str(self) -> None:
        """Views compare equal to raw buffers with the same content."""
        assert Input.of(b"ab") == b"ab"
        assert Input.of("ab") == "ab"

    def test_text_never_equals_bytes(self) -> None:
        """Text and binary content never compare equal."""
        assert Input.of("ab") != b"ab"
        assert Input.of("ab") != Input.of(b"ab")

    def test_hash_matches_raw_content(self) -> None:
        """Hashing by content makes views usable as dict keys."""
        table = {b"GET": 1}
        assert table[Input.of(b"xGET")[1:]] == 1

    @given(st.binary(max_size=32), st.integers(min_value=0, max_value=32))
    def test_split_reassembles(self, data: bytes, cut: int) -> None:
        """PROPERTY: prefix + remainder reproduce the view."""
        prefix, rest = Input.of(data).split_at(cut)
        assert prefix.materialize() + rest.materialize() == data

    def test_materialize_and_decode(self) -> None:
        """materialize() copies; decode() returns text."""
        view = Input.of(bytearray(b"caf\xc3\xa9"))
        assert view.materialize() == b"caf\xc3\xa9"
        assert view.decode() == "café"
        with pytest.raises(UnicodeDecodeError):
            Input.of(b"\xff").decode()

    def test_repr_shows_position(self) -> None:
        """repr() shows content and absolute position."""
        assert repr(Input.of("abc")[1:]) == "Input('bc', position=1)"
        assert repr(Input.of(b"a", complete=True)) == "Input(b'a', position=0, complete)"


# ============================================================================
# BIT CURSOR
# ============================================================================


class TestBitInput:
    """Test the MSB-first bit cursor."""

    def test_read_msb_first(self) -> None:
        """The first three bits of 0b10110010 are 0b101."""
        cursor = BitInput(Input.of(bytes([0b1011_0010])))
        assert cursor.read(3) == 0b101

    def test_advance_within_byte(self) -> None:
        """Advancing three bits stays on the same byte."""
        cursor = BitInput(Input.of(bytes([0b1011_0010]))).advance(3)
        assert cursor.bit_offset == 3
        assert cursor.data.position == 0
        assert cursor.position == 3
        assert len(cursor) == 5

    def test_read_across_bytes(self) -> None:
        """Reads crossing a byte boundary concatenate bits."""
        cursor = BitInput(Input.of(bytes([0x0F, 0xF0]))).advance(4)
        assert cursor.read(8) == 0xFF

    def test_advance_to_boundary(self) -> None:
        """Advancing to a byte boundary realigns the cursor."""
        cursor = BitInput(Input.of(b"\x00\x00")).advance(8)
        assert cursor.is_aligned
        assert cursor.data.position == 1

    def test_read_zero_bits(self) -> None:
        """Reading zero bits yields zero."""
        assert BitInput(Input.of(b"")).read(0) == 0

    def test_rejects_text(self) -> None:
        """Bit cursors require binary views."""
        with pytest.raises(TypeError, match="binary"):
            BitInput(Input.of("abc"))

    def test_rejects_bad_offset(self) -> None:
        """Bit offsets outside 0-7 are rejected."""
        with pytest.raises(ValueError, match="bit_offset"):
            BitInput(Input.of(b"a"), 8)

    @given(st.binary(min_size=1, max_size=8), st.data())
    def test_read_matches_integer_view(self, data: bytes, draw: st.DataObject) -> None:
        """PROPERTY: bit reads agree with the big-endian integer of the buffer."""
        total = len(data) * 8
        start = draw.draw(st.integers(min_value=0, max_value=total))
        count = draw.draw(st.integers(min_value=0, max_value=total - start))
        cursor = BitInput(Input.of(data)).advance(start)
        expected = (int.from_bytes(data, "big") >> (total - start - count)) & ((1 << count) - 1)
        assert cursor.read(count) == expected


# ============================================================================
# LITERALS AND LINE OFFSETS
# ============================================================================


class TestLiteral:
    """Test dual-encoding literals."""

    def test_text_literal_against_binary(self) -> None:
        """Text literals are UTF-8 encoded for binary views."""
        assert Literal.of("é").for_input(Input.of(b"")) == b"\xc3\xa9"

    def test_ascii_bytes_against_text(self) -> None:
        """ASCII byte literals are usable on text views."""
        assert Literal.of(b"let").for_input(Input.of("")) == "let"

    def test_non_ascii_bytes_against_text(self) -> None:
        """Non-ASCII byte literals cannot match text."""
        with pytest.raises(TypeError, match="not ASCII"):
            Literal.of(b"\xff").for_input(Input.of("x"))


class TestLineOffsetCache:
    """Test line/column lookups."""

    def test_line_col(self) -> None:
        """Positions map to 1-based line and column."""
        cache = LineOffsetCache("line1\nline2\nline3")
        assert cache.get_line_col(0) == (1, 1)
        assert cache.get_line_col(6) == (2, 1)
        assert cache.get_line_col(8) == (2, 3)

    def test_binary_source(self) -> None:
        """Binary buffers use 0x0A as the delimiter."""
        cache = LineOffsetCache(b"ab\ncd")
        assert cache.get_line_col(4) == (2, 2)

    def test_line_bounds(self) -> None:
        """line_bounds() excludes the newline."""
        cache = LineOffsetCache("ab\ncde")
        assert cache.line_bounds(1) == (0, 2)
        assert cache.line_bounds(2) == (3, 6)
