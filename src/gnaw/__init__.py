"""gnaw - streaming, zero-copy parser combinators for binary and text formats.

Grammars are assembled by composing small parsers. Every parser is a plain
function from an input view to one of three outcomes:

    Done(remainder, output) - matched; remainder is the unconsumed suffix
    Error(error) - no match here; error is a terse discriminant or a
        verbose chain, depending on GNAW_ERROR_MODE
    Incomplete(needed) - undecidable until more data arrives

Public API:
    Input, BitInput - zero-copy views (bytes/str, and bit cursors)
    Done, Error, Incomplete, Needed - parse outcomes
    parse_all - run a parser over a whole input and return its output
    StreamParser, parse_chunks - incremental driver for chunked input
    gnaw.parser.* - primitives and combinators (re-exported here)
    gnaw.bridges.* - whitespace, text conversion and regex bridges

Exceptions:
    GnawError - Base exception class
    ParseFailure - An Error outcome where a value was required
    IncompleteInput - An Incomplete outcome where a value was required
    TrailingInput - parse_all() left input unconsumed
    ConfigurationError - Invalid configuration or disabled facility

Example:
    >>> from gnaw import char, digit, parse_all, separated_list, transform
    >>> number = transform(digit, lambda view: int(view.decode()))
    >>> parse_all(separated_list(char(","), number), "4,8,15")
    [4, 8, 15]
"""

from .bridges import (
    decode,
    locale_decimal,
    re_capture,
    re_captures,
    re_find,
    re_match,
    re_matches,
    sp,
    to_float,
    to_int,
    ws,
    ws_sequence,
)
from .config import CONFIG, EngineConfig
from .core import BitInput, Done, Error, Incomplete, Input, Needed, Outcome, Parser, Stream
from .diagnostics import (
    ConfigurationError,
    ConversionError,
    Custom,
    DiagnosticFormatter,
    ErrorChain,
    ErrorKind,
    Frame,
    GnawError,
    IncompleteInput,
    ParseFailure,
    TrailingInput,
)
from .enums import ErrorMode, OutputFormat, TrailingSeparator
from .parser import *  # noqa: F403 - the combinator vocabulary is the public API
from .parser import __all__ as _parser_all
from .streaming import StreamParser, parse_all, parse_chunks

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("gnaw")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CONFIG",
    "BitInput",
    "ConfigurationError",
    "ConversionError",
    "Custom",
    "DiagnosticFormatter",
    "Done",
    "EngineConfig",
    "Error",
    "ErrorChain",
    "ErrorKind",
    "ErrorMode",
    "Frame",
    "GnawError",
    "Incomplete",
    "IncompleteInput",
    "Input",
    "Needed",
    "Outcome",
    "OutputFormat",
    "ParseFailure",
    "Parser",
    "Stream",
    "StreamParser",
    "TrailingInput",
    "TrailingSeparator",
    "__version__",
    "decode",
    "locale_decimal",
    "parse_all",
    "parse_chunks",
    "re_capture",
    "re_captures",
    "re_find",
    "re_match",
    "re_matches",
    "sp",
    "to_float",
    "to_int",
    "ws",
    "ws_sequence",
    *_parser_all,
]
