"""gnaw exception hierarchy.

Parsers never raise on mismatch: they return Error or Incomplete outcomes.
Exceptions are raised only where a caller asks for a value out of an outcome
(``unwrap``, ``parse_all``, the streaming driver) and on misuse.

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gnaw.core.input import Input
    from gnaw.core.result import Needed

__all__ = [
    "ConfigurationError",
    "ConversionError",
    "GnawError",
    "IncompleteInput",
    "ParseFailure",
    "TrailingInput",
]


class GnawError(Exception):
    """Base exception for all gnaw errors."""


class ParseFailure(GnawError):
    """An Error outcome was turned into an exception.

    Attributes:
        error: Error payload (ErrorKind/Custom in simple mode, ErrorChain in
            verbose mode)
        source: Input the parser ran on, when known
    """

    def __init__(self, error: object, *, source: "Input | None" = None) -> None:
        """Initialize ParseFailure.

        Args:
            error: Error payload from the failed outcome
            source: Input the parser ran on (enables positioned rendering)
        """
        from .formatter import DiagnosticFormatter, OutputFormat  # noqa: PLC0415 - circular

        self.error = error
        self.source = source
        super().__init__(
            DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(error, source)
        )


class TrailingInput(ParseFailure):
    """The parser succeeded but did not consume the whole input.

    Attributes:
        output: Value produced before the trailing input
        remainder: Unconsumed input
    """

    def __init__(
        self, error: object, *, output: object, remainder: "Input", source: "Input | None" = None
    ) -> None:
        super().__init__(error, source=source)
        self.output = output
        self.remainder = remainder


class IncompleteInput(GnawError):
    """An Incomplete outcome was turned into an exception.

    Attributes:
        needed: Lower bound on the additional input required
    """

    def __init__(self, needed: "Needed") -> None:
        self.needed = needed
        if needed.size is None:
            message = "Incomplete input: more data needed (unknown amount)"
        else:
            message = f"Incomplete input: at least {needed.size} more element(s) needed"
        super().__init__(message)


class ConversionError(GnawError, ValueError):
    """Raised by conversion functions passed to transform().

    transform() also accepts plain ValueError and ArithmeticError; this
    class exists so conversion code can signal failure explicitly.
    """


class ConfigurationError(GnawError, ValueError):
    """Invalid engine configuration, or use of a disabled facility.

    Examples:
    - GNAW_COLLECT=0 and a collecting repetition combinator is constructed
    - GNAW_REGEX=0 and a regex bridge parser is constructed
    """
