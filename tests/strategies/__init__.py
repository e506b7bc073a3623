"""Hypothesis strategies for gnaw property-based testing.

Usage:
    from tests.strategies import literals, literal_with_prefix, chunkings

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - literal_with_prefix, buffers, chunkings, arithmetic_expressions
"""

from .inputs import (
    arithmetic_expressions,
    buffers,
    chunkings,
    digit_runs,
    literal_with_prefix,
    literals,
)

__all__ = [
    "arithmetic_expressions",
    "buffers",
    "chunkings",
    "digit_runs",
    "literal_with_prefix",
    "literals",
]
