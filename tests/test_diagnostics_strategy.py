"""Tests for the simple and verbose error strategies.

Covers payload construction in both modes, frame accumulation, bit
positions, and the guarantee that the error mode never changes whether a
parse succeeds.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gnaw.core.input import BitInput, Input
from gnaw.core.result import Done, Error
from gnaw.diagnostics import strategy
from gnaw.diagnostics.codes import Custom, ErrorChain, ErrorKind, Frame
from gnaw.diagnostics.strategy import SimpleErrors, VerboseErrors, strategy_for
from gnaw.enums import ErrorMode
from gnaw.parser import alt, delimited, digit, eof, many0, opt, tag, terminated, with_error


class TestStrategySelection:
    """Test how a strategy is chosen."""

    def test_strategy_for(self) -> None:
        """Each mode maps to its implementation."""
        assert isinstance(strategy_for(ErrorMode.SIMPLE), SimpleErrors)
        assert isinstance(strategy_for(ErrorMode.VERBOSE), VerboseErrors)

    @pytest.mark.usefixtures("verbose_errors")
    def test_active_follows_fixture(self) -> None:
        """active() reflects the swapped strategy."""
        assert strategy.active().mode is ErrorMode.VERBOSE


@pytest.mark.usefixtures("simple_errors")
class TestSimpleErrors:
    """Test single-discriminant payloads."""

    def test_fail_returns_kind(self) -> None:
        """fail() carries the kind itself."""
        outcome = strategy.fail(ErrorKind.TAG, Input.of(b"x"))
        assert outcome == Error(ErrorKind.TAG)

    def test_wrap_replaces_discriminant(self) -> None:
        """wrap() replaces the child's kind; nothing accumulates."""
        inner = strategy.fail(ErrorKind.TAG, Input.of(b"x"))
        assert strategy.wrap(ErrorKind.ALT, Input.of(b"x"), inner).error is ErrorKind.ALT

    def test_custom_code(self) -> None:
        """Custom codes become Custom payloads."""
        outcome = strategy.fail(ErrorKind.CUSTOM, Input.of(b""), "bad")
        assert outcome.error == Custom("bad")
        assert strategy.error_kind(outcome.error) is ErrorKind.CUSTOM


@pytest.mark.usefixtures("verbose_errors")
class TestVerboseErrors:
    """Test chained payloads."""

    def test_fail_starts_chain(self) -> None:
        """fail() records kind and absolute position."""
        outcome = strategy.fail(ErrorKind.DIGIT, Input.of(b"abc")[2:])
        assert isinstance(outcome.error, ErrorChain)
        frame = outcome.error.innermost
        assert (frame.kind, frame.position, frame.in_bits) == (ErrorKind.DIGIT, 2, False)

    def test_wrap_appends_frame(self) -> None:
        """wrap() appends the combinator's frame after the child's."""
        stream = Input.of(b"abc")
        inner = strategy.fail(ErrorKind.TAG, stream[1:])
        chain = strategy.wrap(ErrorKind.ALT, stream, inner).error
        assert chain.kinds == (ErrorKind.TAG, ErrorKind.ALT)
        assert [frame.position for frame in chain] == [1, 0]

    def test_wrap_over_simple_payload(self) -> None:
        """A hand-built simple payload becomes the innermost frame."""
        chain = strategy.wrap(ErrorKind.ALT, Input.of(b""), Error(ErrorKind.TAG)).error
        assert chain.kinds == (ErrorKind.TAG, ErrorKind.ALT)

    def test_wrap_positions_of_hand_built_payloads(self) -> None:
        """A hand-built Frame keeps its position; bare kinds take the wrapper's."""
        stream = Input.of(b"abcd")[1:]
        chain = strategy.wrap(ErrorKind.ALT, stream, Error(Frame(ErrorKind.TAG, 3))).error
        assert [frame.position for frame in chain] == [3, 1]
        chain = strategy.wrap(ErrorKind.ALT, stream, Error(ErrorKind.TAG)).error
        assert [frame.position for frame in chain] == [1, 1]

    def test_wrap_keeps_custom_code(self) -> None:
        """A hand-built Custom payload keeps its code in the innermost frame."""
        chain = strategy.wrap(ErrorKind.ALT, Input.of(b"x"), Error(Custom("bad"))).error
        assert chain.kinds == (ErrorKind.CUSTOM, ErrorKind.ALT)
        assert chain.innermost.code == "bad"

    def test_bit_positions(self) -> None:
        """Frames built on a bit cursor record bit indices."""
        cursor = BitInput(Input.of(b"\x00\x00")).advance(11)
        frame = strategy.fail(ErrorKind.TAG_BITS, cursor).error.innermost
        assert frame.in_bits
        assert frame.position == 11

    def test_nested_chain_order(self) -> None:
        """Frames are innermost first, outermost last."""
        parser = with_error("outer", delimited(tag("("), alt(tag("a"), tag("b")), tag(")")))
        outcome = parser(Input.of("(c)"))
        assert outcome.error.kinds == (ErrorKind.TAG, ErrorKind.ALT, ErrorKind.CUSTOM)
        assert outcome.error.innermost.position == 1
        assert outcome.error.outermost.code == "outer"


# ============================================================================
# MODE INDEPENDENCE
# ============================================================================


def _grammar():
    item = alt(tag("ab"), digit, tag("c"))
    return terminated(many0(delimited(opt(tag(" ")), item, opt(tag(";")))), eof)


class TestModeIndependence:
    """Verbose chains are diagnostic only."""

    @given(st.text(alphabet="abc12 ;x", max_size=24))
    def test_same_outcome_in_both_modes(self, text: str) -> None:
        """PROPERTY: success, output and remainder agree across modes."""
        parser = _grammar()
        view = Input.of(text, complete=True)
        with pytest.MonkeyPatch.context() as patch:
            patch.setattr(strategy, "_active", SimpleErrors())
            simple = parser(view)
            patch.setattr(strategy, "_active", VerboseErrors())
            verbose = parser(view)
        assert type(simple) is type(verbose)
        if isinstance(simple, Done):
            assert simple.output == verbose.output  # type: ignore[union-attr]
            assert simple.remainder == verbose.remainder  # type: ignore[union-attr]
        else:
            assert strategy.error_kind(simple.error) is verbose.error.outermost.kind  # type: ignore[union-attr]
