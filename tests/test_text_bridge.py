"""Tests for text and number conversion bridges.

Locale-aware tests need Babel and are skipped without it; the error path
for a missing Babel installation is tested by patching the availability
check.
"""

import logging
from decimal import Decimal

import pytest

from gnaw.bridges import decode, locale_decimal, to_float, to_int
from gnaw.core import babel_compat
from gnaw.core.babel_compat import BabelImportError
from gnaw.core.input import Input
from gnaw.diagnostics.codes import ErrorKind
from gnaw.diagnostics.errors import ConfigurationError
from gnaw.parser import alpha, digit, hex_digit, is_a, is_not, take
from tests.helpers.outcomes import assert_done, assert_error


class TestDecode:
    """Test decode()."""

    def test_utf8(self) -> None:
        """The slice is decoded to str."""
        remainder, output = assert_done(decode(take(5))(Input.of("café!".encode())))
        assert output == "café"
        assert remainder == b"!"

    def test_invalid_bytes(self) -> None:
        """Undecodable bytes fail with MAP_RES."""
        assert assert_error(decode(take(1))(Input.of(b"\xff"))) is ErrorKind.MAP_RES


class TestNumbers:
    """Test to_int() and to_float()."""

    def test_to_int(self) -> None:
        """Decimal and other bases."""
        assert assert_done(to_int(digit)(Input.of(b"42;")))[1] == 42
        assert assert_done(to_int(hex_digit, 16)(Input.of("ff;")))[1] == 255

    def test_to_int_rejects(self) -> None:
        """Text the conversion rejects is a MAP_RES Error."""
        assert assert_error(to_int(alpha)(Input.of("ab;"))) is ErrorKind.MAP_RES

    def test_to_float(self) -> None:
        """Floats parse from their slice."""
        number = to_float(is_a("0123456789."))
        assert assert_done(number(Input.of("3.25;")))[1] == 3.25
        assert assert_error(number(Input.of("1.2.3;"))) is ErrorKind.MAP_RES


class TestLocaleDecimal:
    """Test the Babel-backed decimal bridge."""

    @pytest.fixture(autouse=True)
    def _require_babel(self) -> None:
        pytest.importorskip("babel")

    def test_latvian(self) -> None:
        """Comma is the decimal separator in lv_LV."""
        amount = locale_decimal(is_not(" ;"), "lv_LV")
        remainder, output = assert_done(amount(Input.of("1234,56;")))
        assert output == Decimal("1234.56")
        assert remainder == ";"

    def test_hyphenated_locale(self) -> None:
        """BCP-47 style identifiers are accepted."""
        amount = locale_decimal(is_not(" ;"), "de-DE")
        assert assert_done(amount(Input.of("1.234,5;")))[1] == Decimal("1234.5")

    def test_rejected_text(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unparseable text fails with LOCALE_DECIMAL and is logged at DEBUG."""
        amount = locale_decimal(is_not(" ;"), "en_US")
        with caplog.at_level(logging.DEBUG, logger="gnaw.bridges.text"):
            outcome = amount(Input.of("abc;"))
        assert assert_error(outcome) is ErrorKind.LOCALE_DECIMAL
        assert "Rejected number" in caplog.text

    def test_strict_grouping(self) -> None:
        """strict=True rejects misplaced grouping separators."""
        amount = locale_decimal(is_not(" ;"), "de_DE", strict=True)
        assert assert_error(amount(Input.of("12.34,5;"))) is ErrorKind.LOCALE_DECIMAL

    def test_unknown_locale(self) -> None:
        """Unknown locales are rejected at construction."""
        with pytest.raises(ConfigurationError, match="Unknown locale 'xx_YY'"):
            locale_decimal(is_not(";"), "xx_YY")


class TestBabelMissing:
    """Test behaviour without Babel."""

    def test_construction_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """locale_decimal names itself in the install hint."""
        monkeypatch.setattr(babel_compat, "_check_babel_available", lambda: False)
        with pytest.raises(BabelImportError, match=r"locale_decimal requires Babel"):
            locale_decimal(is_not(";"), "en_US")

    def test_is_babel_available(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Availability reflects the import check."""
        monkeypatch.setattr(babel_compat, "_check_babel_available", lambda: False)
        assert not babel_compat.is_babel_available()
