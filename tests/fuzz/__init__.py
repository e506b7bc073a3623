"""Fuzz testing infrastructure for gnaw.

This package contains:
- test_combinator_properties: Outcome contracts over a pool of grammars,
  checked against arbitrary binary and text buffers

Python 3.13+.
"""
