#!/usr/bin/env python3
"""Combinator Outcome Fuzzer (Atheris).

Targets: gnaw.parser, gnaw.streaming (parse_all, parse_chunks)

Concern boundary: This fuzzer drives a fixed pool of grammars (text records,
length-prefixed binary frames, bit fields, escaped strings) with arbitrary
input and chunkings. It checks outcome contracts rather than values:
- No exception other than the gnaw hierarchy escapes parse_all/parse_chunks
- Done remainders are suffixes of the input view
- Complete views never produce Incomplete
- parse_chunks yields the same items for every chunking

Requires Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

_atheris_mod: Any = None

try:  # noqa: SIM105 - need module ref for the dependency check
    import atheris as _atheris_mod  # type: ignore[no-redef]
except ImportError:
    pass

if _atheris_mod is None:
    print("-" * 80, file=sys.stderr)
    print("ERROR: Missing required dependency: atheris", file=sys.stderr)
    print("Install with: pip install 'gnaw[fuzz]'", file=sys.stderr)
    print("-" * 80, file=sys.stderr)
    sys.exit(1)

import atheris  # noqa: E402

logging.getLogger("gnaw").setLevel(logging.CRITICAL)

with atheris.instrument_imports(include=["gnaw"]):
    from gnaw import (
        Done,
        GnawError,
        Incomplete,
        Input,
        alt,
        be_u16,
        bits,
        char,
        digit,
        escaped,
        is_not,
        length_value,
        many0,
        one_of,
        pair,
        parse_all,
        parse_chunks,
        separated_list,
        take,
        take_bits,
        tag,
        terminated,
    )


class CombinatorFuzzError(Exception):
    """Raised when an outcome contract is breached."""


_GRAMMARS: tuple[tuple[str, Any], ...] = (
    ("records", separated_list(char(";"), pair(digit, many0(one_of(b"abc"))))),
    ("frames", many0(length_value(be_u16, take(2)))),
    ("bit_fields", many0(bits(pair(take_bits(3), take_bits(5))))),
    ("escaped", escaped(is_not(b'"\\'), b"\\", one_of(b'"n\\'))),
    ("keywords", many0(alt(tag(b"GET"), tag(b"PUT"), tag(b" ")))),
)

_RECORD = terminated(digit, char(";"))


def _check_outcome(name: str, parser: Any, data: bytes, complete: bool) -> None:
    stream = Input.of(data, complete=complete)
    outcome = parser(stream)
    if isinstance(outcome, Done):
        remainder = outcome.remainder
        if remainder.source is not stream.source or remainder.end != stream.end:
            msg = f"{name}: remainder is not a suffix of the input"
            raise CombinatorFuzzError(msg)
        if remainder.start < stream.start:
            msg = f"{name}: remainder starts before the input"
            raise CombinatorFuzzError(msg)
    elif isinstance(outcome, Incomplete) and complete:
        msg = f"{name}: Incomplete on a complete view"
        raise CombinatorFuzzError(msg)


def _check_chunking(data: bytes, cuts: list[int]) -> None:
    bounds = [0, *sorted({min(cut, len(data)) for cut in cuts}), len(data)]
    chunks = [data[start:end] for start, end in zip(bounds, bounds[1:], strict=False)]
    try:
        whole = [bytes(item.materialize()) for item in parse_chunks(_RECORD, [data])]
    except GnawError:
        whole = None
    try:
        split = [bytes(item.materialize()) for item in parse_chunks(_RECORD, chunks)]
    except GnawError:
        split = None
    if whole != split:
        msg = f"parse_chunks depends on chunking: {whole!r} != {split!r}"
        raise CombinatorFuzzError(msg)


def test_one_input(data: bytes) -> None:
    """Atheris entry point."""
    fdp = atheris.FuzzedDataProvider(data)
    name, parser = _GRAMMARS[fdp.ConsumeIntInRange(0, len(_GRAMMARS) - 1)]
    complete = fdp.ConsumeBool()
    cuts = [fdp.ConsumeIntInRange(0, 64) for _ in range(fdp.ConsumeIntInRange(0, 4))]
    payload = fdp.ConsumeBytes(fdp.remaining_bytes())

    _check_outcome(name, parser, payload, complete)
    try:
        parse_all(parser, payload)
    except GnawError:
        pass
    _check_chunking(payload, cuts)


def main() -> None:
    """Run the combinator fuzzer with CLI support."""
    parser = argparse.ArgumentParser(
        description="Combinator outcome fuzzer using Atheris/libFuzzer",
        epilog="All unrecognized arguments are passed to libFuzzer.",
    )
    _, remaining = parser.parse_known_args()

    # Inject -rss_limit_mb default if not already specified
    if not any(arg.startswith("-rss_limit_mb") for arg in remaining):
        remaining.append("-rss_limit_mb=4096")

    sys.argv = [sys.argv[0], *remaining]
    atheris.Setup(sys.argv, test_one_input)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
