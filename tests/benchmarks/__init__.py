"""Performance benchmarks for gnaw.

Benchmarks use pytest-benchmark to measure and track performance of critical operations.
Prevents performance regressions in primitives, repetition, bit fields and streaming.

Python 3.13+.
"""

from __future__ import annotations

__all__: list[str] = []
