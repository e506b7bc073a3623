"""Quickstart - building grammars from gnaw combinators.

Demonstrates the core workflow:

1. Match text with primitives and convert slices to values
2. Compose a recursive grammar (an arithmetic calculator)
3. Decode a binary, length-prefixed frame with bit fields
4. Render a failure with verbose diagnostics

Run with GNAW_ERROR_MODE=verbose to see the full error chain in example 4.

Python 3.13+.
"""

from __future__ import annotations

from gnaw import (
    DiagnosticFormatter,
    Input,
    ParseFailure,
    alt,
    be_u16,
    bits,
    char,
    delimited,
    digit,
    length_value,
    many0,
    one_of,
    pair,
    parse_all,
    separated_list,
    sequence,
    tag,
    take,
    take_bits,
    to_int,
    transform,
    ws,
)


def example_1_primitives() -> None:
    """Match a list of numbers and convert each slice."""
    print("=" * 60)
    print("Example 1: Primitives")
    print("=" * 60)

    numbers = separated_list(char(","), to_int(digit))
    print(parse_all(numbers, "4,8,15,16,23,42"))

    # Outcomes are plain values; a streaming view may ask for more data
    print(digit(Input.of(b"123")))
    print(digit(Input.of(b"123", complete=True)))
    print()


def _evaluate(parts):  # type: ignore[no-untyped-def]
    total, steps = parts
    for operator, operand in steps:
        total = total + operand if operator == "+" else total - operand
    return total


def build_calculator():  # type: ignore[no-untyped-def]
    """Return a parser for +/- expressions with parentheses."""

    def parenthesized(stream):  # type: ignore[no-untyped-def]
        return group(stream)

    term = ws(alt(to_int(digit), parenthesized))
    expression = transform(pair(term, many0(pair(one_of("+-"), term))), _evaluate)
    group = delimited(char("("), expression, char(")"))
    return expression


def example_2_calculator() -> None:
    """Evaluate arithmetic with a recursive grammar."""
    print("=" * 60)
    print("Example 2: Recursive Grammar")
    print("=" * 60)

    calculator = build_calculator()
    for source in ("1 + 2", "10 - (2 + 3)", "((7))"):
        print(f"{source} = {parse_all(calculator, source)}")
    print()


def example_3_binary_frame() -> None:
    """Decode a frame: magic, version/flags nibbles, length-prefixed payload."""
    print("=" * 60)
    print("Example 3: Binary Frame")
    print("=" * 60)

    header = bits(pair(take_bits(4), take_bits(4)))
    frame = sequence(tag(b"GN"), header, length_value(be_u16, take(5)))

    magic, (version, flags), payload = parse_all(frame, b"GN\x21\x00\x05hello")
    print(f"magic={magic.materialize()!r} version={version} flags={flags}")
    print(f"payload={payload.materialize()!r}")
    print()


def example_4_diagnostics() -> None:
    """Render a parse failure."""
    print("=" * 60)
    print("Example 4: Diagnostics")
    print("=" * 60)

    try:
        parse_all(build_calculator(), "1 + (2 -")
    except ParseFailure as failure:
        print(DiagnosticFormatter().format(failure.error, failure.source))
    print()


if __name__ == "__main__":
    example_1_primitives()
    example_2_calculator()
    example_3_binary_frame()
    example_4_diagnostics()
