"""Diagnostic system for gnaw parse failures.

Provides error discriminants, verbose error chains, the exception hierarchy,
and rendering of failures against their input. The active error strategy
lives in :mod:`gnaw.diagnostics.strategy` (imported on demand, it depends on
the result model).

Python 3.13+. Zero external dependencies.
"""

from .codes import Custom, ErrorChain, ErrorKind, Frame
from .errors import (
    ConfigurationError,
    ConversionError,
    GnawError,
    IncompleteInput,
    ParseFailure,
    TrailingInput,
)
from .formatter import DiagnosticFormatter, OutputFormat

__all__ = [
    "ConfigurationError",
    "ConversionError",
    "Custom",
    "DiagnosticFormatter",
    "ErrorChain",
    "ErrorKind",
    "Frame",
    "GnawError",
    "IncompleteInput",
    "OutputFormat",
    "ParseFailure",
    "TrailingInput",
]
