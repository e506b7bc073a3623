"""Performance benchmarks for gnaw combinators.

Measures throughput of common grammar shapes to detect regressions.

Python 3.13+.
"""

from __future__ import annotations

from gnaw import (
    Input,
    be_u16,
    bits,
    char,
    count,
    digit,
    fold_many0,
    length_value,
    many0,
    parse_all,
    parse_chunks,
    separated_list,
    tag,
    take,
    take_bits,
    terminated,
    to_int,
)


class TestParserBenchmarks:
    """Benchmark combinator throughput."""

    def test_separated_numbers(self, benchmark) -> None:
        """Benchmark a comma-separated list of 1000 integers."""
        source = ",".join(str(i) for i in range(1000))
        numbers = separated_list(char(","), to_int(digit))

        result = benchmark(parse_all, numbers, source)

        assert len(result) == 1000

    def test_fold_without_collecting(self, benchmark) -> None:
        """Benchmark summing records with a fold."""
        source = b"7;" * 1000
        record = to_int(terminated(digit, char(";")))
        total = fold_many0(record, int, lambda acc, n: acc + n)

        result = benchmark(parse_all, total, source)

        assert result == 7000

    def test_length_prefixed_frames(self, benchmark) -> None:
        """Benchmark decoding 500 length-prefixed binary frames."""
        frame = b"\x00\x04ping"
        source = frame * 500
        frames = many0(length_value(be_u16, take(4)))

        result = benchmark(parse_all, frames, source)

        assert len(result) == 500
        assert result[0] == b"ping"

    def test_bit_fields(self, benchmark) -> None:
        """Benchmark splitting 1000 bytes into nibbles."""
        source = bytes(range(256)) * 4
        nibbles = count(bits(count(take_bits(4), 2)), 1024)

        result = benchmark(parse_all, nibbles, source)

        assert len(result) == 1024

    def test_streaming_records(self, benchmark) -> None:
        """Benchmark the incremental driver over small chunks."""
        data = b"12345;" * 500
        chunks = [data[i : i + 7] for i in range(0, len(data), 7)]
        record = terminated(digit, char(";"))

        def run() -> int:
            return sum(1 for _ in parse_chunks(record, chunks))

        assert benchmark(run) == 500

    def test_tag_on_view(self, benchmark) -> None:
        """Benchmark a single literal match on a large view."""
        view = Input.of(b"HEADER" + bytes(1_000_000), complete=True)
        header = tag(b"HEADER")

        result = benchmark(header, view)

        assert result.is_done
