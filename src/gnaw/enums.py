"""Enumerations for gnaw type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ErrorMode(StrEnum):
    """Shape of the payload carried by Error outcomes.

    StrEnum provides automatic string conversion: str(ErrorMode.SIMPLE) == "simple"
    """

    SIMPLE = "simple"
    """One discriminant per failure: the ErrorKind (or Custom code) itself."""

    VERBOSE = "verbose"
    """Innermost-first ErrorChain of (kind, position) frames."""


class TrailingSeparator(StrEnum):
    """Policy for a separator that is not followed by another element.

    StrEnum provides automatic string conversion: str(TrailingSeparator.LEAVE) == "leave"
    """

    LEAVE = "leave"
    """Stop before the separator; it stays in the remainder: a,b, -> [a, b] + ","."""

    ALLOW = "allow"
    """Consume and drop the separator: a,b, -> [a, b] + ""."""

    REJECT = "reject"
    """Fail the whole list with the list's own error kind."""


class Comparison(StrEnum):
    """Result of comparing an input view against a literal prefix.

    StrEnum provides automatic string conversion: str(Comparison.MATCH) == "match"
    """

    MATCH = "match"
    """The input starts with the literal."""

    PARTIAL = "partial"
    """The input is a strict prefix of the literal: more data may still match."""

    MISMATCH = "mismatch"
    """The input diverges from the literal."""


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


__all__ = [
    "Comparison",
    "ErrorMode",
    "OutputFormat",
    "TrailingSeparator",
]
