"""Core data model: input views and parse outcomes.

Python 3.13+.
"""

from .input import BitInput, Input, LineOffsetCache, Literal, Stream
from .result import Done, Error, Incomplete, Needed, Outcome, Parser

__all__ = [
    "BitInput",
    "Done",
    "Error",
    "Incomplete",
    "Input",
    "LineOffsetCache",
    "Literal",
    "Needed",
    "Outcome",
    "Parser",
    "Stream",
]
