"""Bridges between the core vocabulary and external facilities.

Submodules:
    whitespace - whitespace-skipping wrappers (``sp``, ``ws``)
    text - conversions to str, int, float and locale-aware Decimal (Babel)
    regex - standard library ``re`` bridge

Bridges add no evaluation semantics of their own: they consume and produce
the same Done / Error / Incomplete outcomes as the core.

Python 3.13+.
"""

from .regex import re_capture, re_captures, re_find, re_match, re_matches
from .text import decode, locale_decimal, to_float, to_int
from .whitespace import sp, ws, ws_sequence

__all__ = [
    "decode",
    "locale_decimal",
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
]
