"""Streaming - parsing records as chunks arrive.

Feeds a newline-delimited "key=value" log in arbitrary chunks to a
StreamParser. Records split across chunk boundaries are retried once the
rest arrives; parsed records stay valid after later chunks are fed.

Python 3.13+.
"""

from __future__ import annotations

import logging

from gnaw import (
    StreamParser,
    alpha,
    char,
    decode,
    is_not,
    line_ending,
    separated_pair,
    terminated,
)

RECORD = terminated(separated_pair(decode(alpha), char("="), decode(is_not(b"\r\n"))), line_ending)


def main() -> None:
    """Feed a log in small chunks and print each record."""
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    log = b"user=ada\nlevel=debug\r\nmode=stream\n"
    records = StreamParser(RECORD)
    for start in range(0, len(log), 5):
        for key, value in records.feed(log[start : start + 5]):
            print(f"{key} -> {value}")
    records.finish()


if __name__ == "__main__":
    main()
