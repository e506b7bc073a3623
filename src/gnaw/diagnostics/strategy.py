"""Error strategies: how Error payloads are built and extended.

Two implementations of the same capability:

- SimpleErrors: the payload is a single discriminant (an ErrorKind, or a
  Custom code). A combinator that reports its own failure replaces the
  child's discriminant; nothing accumulates.
- VerboseErrors: the payload is an ErrorChain. A combinator that reports its
  own failure appends a frame (its kind and the position it was invoked at)
  to the child's chain, giving an innermost-first trace.

Exactly one strategy is active per process. It is chosen when this module is
imported, from gnaw.config.CONFIG, so one parse never mixes payload shapes.
Parsers call the module functions ``fail`` and ``wrap`` below, which return
ready-made Error outcomes.

Python 3.13+.
"""

from typing import Protocol

from gnaw.config import CONFIG
from gnaw.core.input import BitInput, Stream
from gnaw.core.result import Error
from gnaw.enums import ErrorMode

from .codes import Custom, ErrorChain, ErrorKind, Frame

__all__ = [
    "ErrorStrategy",
    "SimpleErrors",
    "VerboseErrors",
    "active",
    "error_kind",
    "fail",
    "strategy_for",
    "wrap",
]


class ErrorStrategy(Protocol):
    """Capability shared by both error modes."""

    mode: ErrorMode

    def make(self, kind: ErrorKind, stream: Stream, code: object = None) -> object:
        """Build a fresh payload for a failure at ``stream``."""
        ...

    def extend(
        self, kind: ErrorKind, stream: Stream, inner: object, code: object = None
    ) -> object:
        """Report ``kind`` at ``stream`` on top of a child's payload."""
        ...

    def kind_of(self, payload: object) -> ErrorKind:
        """Outermost discriminant of a payload."""
        ...


class SimpleErrors:
    """Single-discriminant payloads: ``ErrorKind`` or ``Custom``."""

    __slots__ = ()

    mode = ErrorMode.SIMPLE

    def make(self, kind: ErrorKind, stream: Stream, code: object = None) -> object:  # noqa: ARG002
        if code is not None:
            return Custom(code)
        return kind

    def extend(
        self, kind: ErrorKind, stream: Stream, inner: object, code: object = None  # noqa: ARG002
    ) -> object:
        return self.make(kind, stream, code)

    def kind_of(self, payload: object) -> ErrorKind:
        if isinstance(payload, Custom):
            return ErrorKind.CUSTOM
        if isinstance(payload, ErrorChain):
            return payload.outermost.kind
        if isinstance(payload, Frame):
            return payload.kind
        return payload  # type: ignore[return-value]


class VerboseErrors:
    """Chained payloads: ``ErrorChain`` of ``Frame``, innermost first."""

    __slots__ = ()

    mode = ErrorMode.VERBOSE

    @staticmethod
    def _frame(kind: ErrorKind, stream: Stream, code: object) -> Frame:
        return Frame(kind, stream.position, code, isinstance(stream, BitInput))

    def make(self, kind: ErrorKind, stream: Stream, code: object = None) -> object:
        return ErrorChain.start(self._frame(kind, stream, code))

    def extend(
        self, kind: ErrorKind, stream: Stream, inner: object, code: object = None
    ) -> object:
        """Append this combinator's frame to the child's payload.

        A child that built its payload by hand may return a ``Frame``, which
        is kept with its own position. A bare ``ErrorKind`` or ``Custom``
        carries no position, so its frame is placed where the wrapping
        combinator was invoked.
        """
        frame = self._frame(kind, stream, code)
        match inner:
            case ErrorChain():
                return inner.push(frame)
            case Frame():
                return ErrorChain((inner, frame))
            case Custom(inner_code):
                return ErrorChain((self._frame(ErrorKind.CUSTOM, stream, inner_code), frame))
        return ErrorChain((self._frame(SimpleErrors().kind_of(inner), stream, None), frame))

    def kind_of(self, payload: object) -> ErrorKind:
        if isinstance(payload, ErrorChain):
            return payload.outermost.kind
        return SimpleErrors().kind_of(payload)


def strategy_for(mode: ErrorMode) -> ErrorStrategy:
    """Return the strategy implementing ``mode``."""
    if mode is ErrorMode.VERBOSE:
        return VerboseErrors()
    return SimpleErrors()


_active: ErrorStrategy = strategy_for(CONFIG.error_mode)


def active() -> ErrorStrategy:
    """The strategy selected for this process."""
    return _active


def fail(kind: ErrorKind, stream: Stream, code: object = None) -> Error[object]:
    """Error outcome for a failure of ``kind`` at ``stream``."""
    return Error(_active.make(kind, stream, code))


def wrap(kind: ErrorKind, stream: Stream, error: Error[object], code: object = None) -> Error[object]:
    """Error outcome reporting ``kind`` at ``stream`` on top of a child's Error."""
    return Error(_active.extend(kind, stream, error.error, code))


def error_kind(payload: object) -> ErrorKind:
    """Outermost discriminant of a payload, in either mode."""
    return _active.kind_of(payload)
