"""Conversions from raw parser output to higher-level text and number types.

Each bridge wraps a slice-producing parser and converts its output. A value
the conversion rejects becomes an Error at the parser's input
(``MAP_RES``, or ``LOCALE_DECIMAL`` for the locale bridge), never an
exception.

Babel Dependency:
    ``locale_decimal`` needs Babel for CLDR number symbols. Babel is imported
    at construction time; parser-only installations never import it.

Python 3.13+.
"""

import logging
from decimal import Decimal, InvalidOperation

from gnaw.core.babel_compat import (
    get_babel_numbers,
    get_locale_class,
    get_unknown_locale_error,
    require_babel,
)
from gnaw.core.input import Input
from gnaw.core.result import Done, Outcome, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind
from gnaw.diagnostics.errors import ConfigurationError
from gnaw.parser.combinator import transform

__all__ = ["decode", "locale_decimal", "to_float", "to_int"]

logger = logging.getLogger(__name__)


def decode(parser: Parser[Input], encoding: str = "utf-8") -> Parser[str]:
    """Decode the produced slice to ``str`` (invalid bytes fail with ``MAP_RES``)."""

    def convert(view: Input) -> str:
        return view.decode(encoding)

    return transform(parser, convert)


def to_int(parser: Parser[Input], base: int = 10) -> Parser[int]:
    """Convert the produced slice to ``int`` in ``base``.

    Example:
        >>> to_int(hex_digit, 16)(Input.of(b"ff;")).output
        255
    """

    def convert(view: Input) -> int:
        return int(view.decode("ascii"), base)

    return transform(parser, convert)


def to_float(parser: Parser[Input]) -> Parser[float]:
    """Convert the produced slice to ``float``."""

    def convert(view: Input) -> float:
        return float(view.decode("ascii"))

    return transform(parser, convert)


def locale_decimal(
    parser: Parser[Input], locale_code: str, *, strict: bool = False
) -> Parser[Decimal]:
    """Convert the produced slice to ``Decimal`` using a locale's number symbols.

    Args:
        parser: Parser producing the number text (e.g. ``is_not(" ;")``)
        locale_code: Locale identifier (``lv_LV``, ``de-DE``, ...)
        strict: Reject grouping separators in unexpected positions

    Returns:
        Parser whose output is a Decimal; unparseable text fails with
        ``LOCALE_DECIMAL``

    Raises:
        BabelImportError: If Babel is not installed
        ConfigurationError: If the locale is unknown

    Example:
        >>> amount = locale_decimal(is_not(" ;"), "lv_LV")
        >>> amount(Input.of("1234,56;")).output
        Decimal('1234.56')
    """
    require_babel("locale_decimal")
    locale_class = get_locale_class()
    unknown_locale_error = get_unknown_locale_error()
    numbers = get_babel_numbers()

    try:
        locale = locale_class.parse(locale_code.replace("-", "_"))
    except (unknown_locale_error, ValueError) as e:
        msg = f"Unknown locale '{locale_code}': {e}"
        raise ConfigurationError(msg) from e

    def parse_locale_decimal(stream: Input) -> Outcome[Decimal]:
        outcome = parser(stream)
        if not isinstance(outcome, Done):
            return outcome
        try:
            amount = numbers.parse_decimal(outcome.output.decode(), locale=locale, strict=strict)
        except (ValueError, InvalidOperation) as e:
            logger.debug("Rejected number %r for locale %s: %s", outcome.output, locale_code, e)
            return errors.fail(ErrorKind.LOCALE_DECIMAL, stream)
        return Done(outcome.remainder, amount)

    return parse_locale_decimal
