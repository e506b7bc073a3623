"""Shared constants for gnaw.

This module provides centralized configuration constants used across the
core, the diagnostics layer, and the bridges. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Environment: variable names read once at import time by gnaw.config
- Bit engine: width limits for bit extraction
- Diagnostics: rendering defaults for error reports

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Environment
    "ENV_ERROR_MODE",
    "ENV_REGEX",
    "ENV_COLLECT",
    "FALSE_VALUES",
    # Bit engine
    "BITS_PER_BYTE",
    "MAX_BIT_WIDTH",
    # Number extraction
    "MAX_HEX_U32_DIGITS",
    # Diagnostics
    "DEFAULT_CONTEXT_WIDTH",
    "DEFAULT_DBG_PREVIEW",
]

# ============================================================================
# ENVIRONMENT
# ============================================================================
#
# The engine has no runtime switches. Error representation, the regex bridge
# and owned-collection support are chosen once per process, when gnaw.config
# is first imported. Parsers built afterwards never consult the environment.
#
# ============================================================================

# "simple" (one discriminant per failure) or "verbose" (chained frames).
ENV_ERROR_MODE: str = "GNAW_ERROR_MODE"

# Set to a false value to build without the regular-expression bridge.
ENV_REGEX: str = "GNAW_REGEX"

# Set to a false value for the reduced environment: repetition combinators
# that collect outputs into owned lists are unavailable, folds still work.
ENV_COLLECT: str = "GNAW_COLLECT"

# Values treated as "off" for boolean environment switches.
FALSE_VALUES: frozenset[str] = frozenset({"0", "false", "no", "off"})

# ============================================================================
# BIT ENGINE
# ============================================================================

BITS_PER_BYTE: int = 8

# take_bits() returns a plain unsigned integer; wider fields are read in
# several steps and combined by the caller.
MAX_BIT_WIDTH: int = 64

# ============================================================================
# NUMBER EXTRACTION
# ============================================================================

# hex_u32 reads at most eight hexadecimal digits.
MAX_HEX_U32_DIGITS: int = 8

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Elements shown on each side of a failure position in rendered reports.
DEFAULT_CONTEXT_WIDTH: int = 16

# Elements of input echoed in dbg() log records.
DEFAULT_DBG_PREVIEW: int = 32
