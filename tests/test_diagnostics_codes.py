"""Tests for error discriminants, frames and chains."""

import pytest

from gnaw.diagnostics.codes import Custom, ErrorChain, ErrorKind, Frame


class TestErrorKind:
    """Test the discriminant table."""

    def test_families_are_numbered(self) -> None:
        """Codes are grouped by family."""
        assert 1000 < ErrorKind.TAG.value < 2000
        assert 2000 < ErrorKind.ALT.value < 3000
        assert 3000 < ErrorKind.TAG_BITS.value < 4000
        assert 4000 < ErrorKind.REGEXP_MATCH.value < 5000

    def test_codes_are_unique(self) -> None:
        """No two kinds share a code."""
        values = [kind.value for kind in ErrorKind]
        assert len(values) == len(set(values))

    def test_describe(self) -> None:
        """describe() has curated text and a readable fallback."""
        assert ErrorKind.TAG.describe() == "literal did not match"
        assert ErrorKind.REGEXP_CAPTURES.describe() == "regexp captures"


class TestFrame:
    """Test frame positions and labels."""

    def test_byte_frame(self) -> None:
        """Byte frames show plain offsets."""
        frame = Frame(ErrorKind.TAG, 12)
        assert frame.location() == "12"
        assert frame.label() == "TAG@12"
        assert frame.byte_position == 12

    def test_bit_frame(self) -> None:
        """Bit frames show byte.bit locations."""
        frame = Frame(ErrorKind.TAG_BITS, 29, in_bits=True)
        assert frame.location() == "3.5"
        assert frame.byte_position == 3

    def test_custom_label(self) -> None:
        """Custom codes appear in the label."""
        assert Frame(ErrorKind.CUSTOM, 0, code=42).label() == "CUSTOM(42)@0"


class TestErrorChain:
    """Test the append-only chain."""

    def test_push_appends_outermost(self) -> None:
        """push() keeps existing frames and appends the new one last."""
        chain = ErrorChain.start(Frame(ErrorKind.TAG, 0))
        longer = chain.push(Frame(ErrorKind.ALT, 0))
        assert chain.kinds == (ErrorKind.TAG,)
        assert longer.kinds == (ErrorKind.TAG, ErrorKind.ALT)
        assert longer.innermost.kind is ErrorKind.TAG
        assert longer.outermost.kind is ErrorKind.ALT
        assert len(longer) == 2

    def test_empty_chain_rejected(self) -> None:
        """A chain always has an innermost frame."""
        with pytest.raises(ValueError, match="at least one frame"):
            ErrorChain(())

    def test_custom_kind(self) -> None:
        """Custom payloads report the CUSTOM kind."""
        assert Custom("bad magic").kind is ErrorKind.CUSTOM
