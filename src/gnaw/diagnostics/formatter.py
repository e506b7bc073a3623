"""Diagnostic formatting service.

Renders Error payloads (simple discriminants or verbose chains) against the
input they came from. Text inputs get ``line:column`` locations and a source
excerpt with a caret; binary inputs get byte offsets and a hex window.
Python 3.13+. Zero external dependencies.
"""

import json
from dataclasses import dataclass

from gnaw.constants import DEFAULT_CONTEXT_WIDTH
from gnaw.core.input import Input, LineOffsetCache
from gnaw.enums import OutputFormat

from .codes import Custom, ErrorChain, ErrorKind, Frame

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# C0 controls and DEL are escaped in excerpts (log injection prevention).
_CONTROL_ESCAPES: dict[int, str] = {
    code: f"\\x{code:02x}" for code in (*range(0x20), 0x7F) if code != 0x09
}


def _frames_of(error: object) -> tuple[Frame | None, tuple[Frame, ...], str]:
    """Normalize a payload to ``(innermost, outer_frames, header_code)``.

    Simple payloads carry no position, so they yield ``innermost=None``.
    """
    if isinstance(error, ErrorChain):
        innermost = error.innermost
        return innermost, error.frames[1:], _frame_code(innermost)
    if isinstance(error, Custom):
        return None, (), f"CUSTOM({error.code!r})"
    if isinstance(error, ErrorKind):
        return None, (), error.name
    return None, (), type(error).__name__


def _frame_code(frame: Frame) -> str:
    if frame.code is None:
        return frame.kind.name
    return f"{frame.kind.name}({frame.code!r})"


def _kind_of(error: object) -> ErrorKind | None:
    if isinstance(error, ErrorChain):
        return error.innermost.kind
    if isinstance(error, Custom):
        return ErrorKind.CUSTOM
    if isinstance(error, ErrorKind):
        return error
    return None


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)
        context_width: Elements shown on each side of the failure position

    Example:
        >>> chain = ErrorChain((Frame(ErrorKind.TAG, 0), Frame(ErrorKind.ALT, 0)))
        >>> print(DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(chain))
        TAG@0 <- ALT@0
        >>> print(DiagnosticFormatter().format(chain, Input.of("xyz")))
        error[TAG]: literal did not match
          --> line 1, column 1 (offset 0)
           |
         1 | xyz
           | ^
          = in ALT at line 1, column 1 (offset 0)
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False
    context_width: int = DEFAULT_CONTEXT_WIDTH

    def format(self, error: object, source: Input | None = None) -> str:
        """Format a single Error payload.

        Args:
            error: Payload of an Error outcome
            source: Input the failing parser ran on (None omits excerpts)

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(error, source)
            case OutputFormat.SIMPLE:
                return self._format_simple(error)
            case OutputFormat.JSON:
                return self._format_json(error, source)

    # ------------------------------------------------------------------
    # Rust style
    # ------------------------------------------------------------------

    def _format_rust(self, error: object, source: Input | None) -> str:
        innermost, outer, code = _frames_of(error)
        kind = _kind_of(error)
        description = kind.describe() if kind is not None else str(error)

        label = "\033[1;31merror\033[0m" if self.color else "error"
        parts = [f"{label}[{code}]: {description}"]

        if innermost is None:
            return "\n".join(parts)

        cache = LineOffsetCache(source.source) if source is not None else None
        parts.append(f"  --> {self._locate(innermost, source, cache)}")
        if source is not None and cache is not None:
            parts.extend(self._excerpt(innermost, source, cache))
        for frame in outer:
            parts.append(f"  = in {_frame_code(frame)} at {self._locate(frame, source, cache)}")
        return "\n".join(parts)

    def _locate(self, frame: Frame, source: Input | None, cache: LineOffsetCache | None) -> str:
        if frame.in_bits:
            return f"bit {frame.location()} (byte {frame.byte_position})"
        if source is not None and source.is_text and cache is not None:
            line, column = cache.get_line_col(frame.position)
            return f"line {line}, column {column} (offset {frame.position})"
        return f"offset {frame.position}"

    def _excerpt(self, frame: Frame, source: Input, cache: LineOffsetCache) -> list[str]:
        position = min(frame.byte_position, len(source.source))
        if source.is_text:
            line, column = cache.get_line_col(position)
            start, end = cache.line_bounds(line)
            text = str(source.source[start:end])
            prefix = self._escape(text[: column - 1])
            gutter = " " * len(str(line))
            return [
                f" {gutter} |",
                f" {line} | {self._escape(text)}",
                f" {gutter} | {' ' * len(prefix)}^",
            ]
        window_start = max(0, position - self.context_width)
        window_end = min(len(source.source), position + self.context_width + 1)
        window = bytes(memoryview(source.source)[window_start:window_end])  # type: ignore[arg-type]
        caret = " " * (3 * (position - window_start)) + "^^"
        return [
            "   |",
            f"   | {window.hex(' ')}",
            f"   | {caret}",
        ]

    @staticmethod
    def _escape(text: str) -> str:
        return text.translate(_CONTROL_ESCAPES)

    # ------------------------------------------------------------------
    # Single line
    # ------------------------------------------------------------------

    def _format_simple(self, error: object) -> str:
        """Format payload on one line.

        Example output:
            TAG@0 <- ALT@0
        """
        if isinstance(error, ErrorChain):
            return " <- ".join(frame.label() for frame in error)
        return _frames_of(error)[2]

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def _format_json(self, error: object, source: Input | None) -> str:
        """Format payload as JSON.

        Example output:
            {"mode": "verbose", "frames": [{"code": "TAG", "code_value": 1001, ...}]}
        """
        if not isinstance(error, ErrorChain):
            kind = _kind_of(error)
            data: dict[str, object] = {
                "mode": "simple",
                "code": kind.name if kind is not None else type(error).__name__,
                "code_value": kind.value if kind is not None else None,
            }
            if isinstance(error, Custom):
                data["custom"] = repr(error.code)
            return json.dumps(data, ensure_ascii=False)

        cache = (
            LineOffsetCache(source.source) if source is not None and source.is_text else None
        )
        frames: list[dict[str, object]] = []
        for frame in error:
            entry: dict[str, object] = {
                "code": frame.kind.name,
                "code_value": frame.kind.value,
                "description": frame.kind.describe(),
                "position": frame.position,
                "in_bits": frame.in_bits,
            }
            if frame.code is not None:
                entry["custom"] = repr(frame.code)
            if cache is not None and not frame.in_bits:
                entry["line"], entry["column"] = cache.get_line_col(frame.position)
            frames.append(entry)
        return json.dumps({"mode": "verbose", "frames": frames}, ensure_ascii=False)
