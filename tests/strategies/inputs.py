"""Hypothesis strategies for parser inputs.

Provides reusable, event-emitting strategies for generating literals,
buffers, chunkings of a buffer, and small arithmetic expressions with their
expected values.

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - input_kind: Element type of a generated buffer (binary|text)
    - literal_prefix: Length class of a strict literal prefix (one|most|other)
    - chunk_count: Number of chunks a buffer was split into (one|few|many)
    - expr_depth: Nesting class of an arithmetic expression (flat|nested)
"""

from __future__ import annotations

from hypothesis import event
from hypothesis import strategies as st

__all__ = [
    "arithmetic_expressions",
    "buffers",
    "chunkings",
    "digit_runs",
    "literal_with_prefix",
    "literals",
]


def literals(max_size: int = 12) -> st.SearchStrategy[bytes]:
    """Non-empty byte literals."""
    return st.binary(min_size=1, max_size=max_size)


@st.composite
def literal_with_prefix(draw: st.DrawFn) -> tuple[bytes, bytes]:
    """A literal of length >= 2 and one of its strict, non-empty prefixes.

    Events emitted:
    - literal_prefix={one|most|other}: Prefix length classification
    """
    literal = draw(st.binary(min_size=2, max_size=16))
    size = draw(st.integers(min_value=1, max_value=len(literal) - 1))
    if size == 1:
        event("literal_prefix=one")
    elif size == len(literal) - 1:
        event("literal_prefix=most")
    else:
        event("literal_prefix=other")
    return literal, literal[:size]


@st.composite
def buffers(draw: st.DrawFn, max_size: int = 64) -> bytes | str:
    """A binary or text buffer.

    Events emitted:
    - input_kind={binary|text}: Element type
    """
    if draw(st.booleans()):
        event("input_kind=text")
        return draw(st.text(max_size=max_size))
    event("input_kind=binary")
    return draw(st.binary(max_size=max_size))


def digit_runs(min_size: int = 1, max_size: int = 20) -> st.SearchStrategy[str]:
    """Strings of ASCII decimal digits."""
    return st.text(alphabet="0123456789", min_size=min_size, max_size=max_size)


@st.composite
def chunkings(draw: st.DrawFn, data: bytes) -> list[bytes]:
    """Split ``data`` into consecutive chunks at random cut points.

    Events emitted:
    - chunk_count={one|few|many}: Number of chunks
    """
    if not data:
        event("chunk_count=one")
        return [data]
    cuts = draw(
        st.lists(st.integers(min_value=1, max_value=len(data) - 1), unique=True, max_size=8)
        if len(data) > 1
        else st.just([])
    )
    bounds = [0, *sorted(cuts), len(data)]
    chunks = [data[start:end] for start, end in zip(bounds, bounds[1:], strict=False)]
    if len(chunks) == 1:
        event("chunk_count=one")
    elif len(chunks) <= 3:
        event("chunk_count=few")
    else:
        event("chunk_count=many")
    return chunks


def _combine(children: st.SearchStrategy[tuple[str, int]]) -> st.SearchStrategy[tuple[str, int]]:
    def build(parts: tuple[tuple[str, int], str, tuple[str, int]]) -> tuple[str, int]:
        (left, left_value), operator, (right, right_value) = parts
        value = left_value + right_value if operator == "+" else left_value - right_value
        return f"({left}{operator}{right})", value

    return st.tuples(children, st.sampled_from("+-"), children).map(build)


@st.composite
def arithmetic_expressions(draw: st.DrawFn) -> tuple[str, int]:
    """A fully parenthesized +/- expression over naturals, with its value.

    Events emitted:
    - expr_depth={flat|nested}: Whether the expression contains parentheses
    """
    numbers = st.integers(min_value=0, max_value=10_000).map(lambda n: (str(n), n))
    source, value = draw(st.recursive(numbers, _combine, max_leaves=12))
    event("expr_depth=nested" if "(" in source else "expr_depth=flat")
    return source, value
