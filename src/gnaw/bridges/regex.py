"""Regular-expression bridge (standard library ``re``).

Patterns are compiled once, at construction, for the element type they are
given in (``str`` patterns for text views, ``bytes`` patterns for binary
views); an ASCII-compatible pattern is compiled in both forms. Matching runs
directly on the view's buffer with ``pos``/``endpos``, so no slice is copied,
and every matched span comes back as a view.

A regular expression cannot tell whether more input would change its
answer, so these parsers never return Incomplete: they decide on the data
present. Run them on complete views (or behind ``complete()``) when that
matters.

The bridge can be disabled for an environment with ``GNAW_REGEX=0``.

Python 3.13+.
"""

import re
from collections.abc import Iterator

from gnaw.config import require_regex
from gnaw.core.input import Input
from gnaw.core.result import Done, Outcome, Parser
from gnaw.diagnostics import strategy as errors
from gnaw.diagnostics.codes import ErrorKind

__all__ = ["re_capture", "re_captures", "re_find", "re_match", "re_matches"]

type Pattern = str | bytes | re.Pattern[str] | re.Pattern[bytes]


class _CompiledPattern:
    """A pattern compiled for text views, binary views, or both."""

    __slots__ = ("binary", "source", "text")

    def __init__(self, pattern: Pattern) -> None:
        self.source = pattern
        self.text: re.Pattern[str] | None = None
        self.binary: re.Pattern[bytes] | None = None
        if isinstance(pattern, re.Pattern):
            if isinstance(pattern.pattern, str):
                self.text = pattern
            else:
                self.binary = pattern
            return
        if isinstance(pattern, str):
            self.text = re.compile(pattern)
            if pattern.isascii():
                self.binary = re.compile(pattern.encode("ascii"))
        else:
            self.binary = re.compile(pattern)
            if pattern.isascii():
                self.text = re.compile(pattern.decode("ascii"))

    def for_input(self, view: Input) -> re.Pattern[str] | re.Pattern[bytes]:
        compiled = self.text if view.is_text else self.binary
        if compiled is None:
            kind = "text" if view.is_text else "binary"
            msg = f"Pattern {self.source!r} cannot be applied to {kind} input"
            raise TypeError(msg)
        return compiled


def _view(stream: Input, start: int, end: int) -> Input:
    """Sub-view for an absolute ``[start:end]`` match span."""
    return Input(stream.source, start, end, stream.complete)


def _group_views(stream: Input, match: re.Match[str] | re.Match[bytes]) -> list[Input | None]:
    groups: list[Input | None] = []
    for index in range(len(match.groups()) + 1):
        start, end = match.span(index)
        groups.append(None if start < 0 else _view(stream, start, end))
    return groups


def _all_matches(
    compiled: re.Pattern[str] | re.Pattern[bytes], stream: Input
) -> Iterator[re.Match[str] | re.Match[bytes]]:
    return compiled.finditer(stream.source, stream.start, stream.end)  # type: ignore[arg-type]


def _after(stream: Input, end: int) -> Input:
    return stream.advance(end - stream.start)


def re_match(pattern: Pattern) -> Parser[Input]:
    """Match ``pattern`` anchored at the start of the view; output the matched slice.

    Example:
        >>> identifier = re_match(r"[A-Za-z_]\\w*")
        >>> identifier(Input.of("snake_case = 1")).output
        Input('snake_case', position=0)

    Raises:
        ConfigurationError: If the regex bridge is disabled
        re.error: If the pattern does not compile
    """
    require_regex("re_match")
    compiled = _CompiledPattern(pattern)

    def parse_re_match(stream: Input) -> Outcome[Input]:
        match = compiled.for_input(stream).match(stream.source, stream.start, stream.end)  # type: ignore[arg-type]
        if match is None:
            return errors.fail(ErrorKind.REGEXP_MATCH, stream)
        return Done(_after(stream, match.end()), _view(stream, *match.span()))

    return parse_re_match


def re_find(pattern: Pattern) -> Parser[Input]:
    """Find the first match anywhere in the view; output it, resume after it.

    Raises:
        ConfigurationError: If the regex bridge is disabled
    """
    require_regex("re_find")
    compiled = _CompiledPattern(pattern)

    def parse_re_find(stream: Input) -> Outcome[Input]:
        match = compiled.for_input(stream).search(stream.source, stream.start, stream.end)  # type: ignore[arg-type]
        if match is None:
            return errors.fail(ErrorKind.REGEXP_FIND, stream)
        return Done(_after(stream, match.end()), _view(stream, *match.span()))

    return parse_re_find


def re_matches(pattern: Pattern) -> Parser[list[Input]]:
    """Output every non-overlapping match; resume after the last one.

    Raises:
        ConfigurationError: If the regex bridge is disabled
    """
    require_regex("re_matches")
    compiled = _CompiledPattern(pattern)

    def parse_re_matches(stream: Input) -> Outcome[list[Input]]:
        found = [_view(stream, *match.span()) for match in _all_matches(compiled.for_input(stream), stream)]
        if not found:
            return errors.fail(ErrorKind.REGEXP_MATCHES, stream)
        return Done(_after(stream, found[-1].end), found)

    return parse_re_matches


def re_capture(pattern: Pattern) -> Parser[list[Input | None]]:
    """Output the groups of the first match (group 0 first; None for unmatched groups).

    Example:
        >>> version = re_capture(rb"v(\\d+)\\.(\\d+)")
        >>> [group.materialize() for group in version(Input.of(b"app v1.12")).output]
        [b'v1.12', b'1', b'12']

    Raises:
        ConfigurationError: If the regex bridge is disabled
    """
    require_regex("re_capture")
    compiled = _CompiledPattern(pattern)

    def parse_re_capture(stream: Input) -> Outcome[list[Input | None]]:
        match = compiled.for_input(stream).search(stream.source, stream.start, stream.end)  # type: ignore[arg-type]
        if match is None:
            return errors.fail(ErrorKind.REGEXP_CAPTURE, stream)
        return Done(_after(stream, match.end()), _group_views(stream, match))

    return parse_re_capture


def re_captures(pattern: Pattern) -> Parser[list[list[Input | None]]]:
    """Output the groups of every non-overlapping match.

    Raises:
        ConfigurationError: If the regex bridge is disabled
    """
    require_regex("re_captures")
    compiled = _CompiledPattern(pattern)

    def parse_re_captures(stream: Input) -> Outcome[list[list[Input | None]]]:
        matches = list(_all_matches(compiled.for_input(stream), stream))
        if not matches:
            return errors.fail(ErrorKind.REGEXP_CAPTURES, stream)
        groups = [_group_views(stream, match) for match in matches]
        return Done(_after(stream, matches[-1].end()), groups)

    return parse_re_captures
