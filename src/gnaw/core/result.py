"""Three-way parse outcome: Done, Error, Incomplete.

Every parser in gnaw has the same signature::

    def parser(stream: Stream) -> Outcome[T]

and returns exactly one of:

- ``Done(remainder, output)``: success; ``remainder`` is a suffix of the input
- ``Error(error)``: the input does not match here; ``error`` is the payload
  built by the active error strategy (see gnaw.diagnostics.strategy)
- ``Incomplete(needed)``: no decision is possible yet; feed more data and
  re-run the same parser from the same starting offset

Outcomes are frozen dataclasses, so structural pattern matching works::

    match parser(Input.of(data)):
        case Done(remainder, output):
            ...
        case Incomplete(needed):
            ...
        case Error(error):
            ...

Python 3.13+.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal, NoReturn

from gnaw.core.input import Input, Stream
from gnaw.diagnostics.errors import IncompleteInput, ParseFailure

__all__ = [
    "Done",
    "Error",
    "Incomplete",
    "Needed",
    "Outcome",
    "Parser",
]


@dataclass(frozen=True, slots=True)
class Needed:
    """Lower bound on the additional input an Incomplete parser requires.

    Attributes:
        size: Minimum number of additional elements (bytes, characters, or
            bits inside the bit engine), or None when the amount is unknown.

    Example:
        >>> Needed.of(3)
        Needed(size=3)
        >>> Needed.unknown().is_known
        False
    """

    size: int | None = None

    def __post_init__(self) -> None:
        """Validate size.

        Raises:
            ValueError: If size is not positive
        """
        if self.size is not None and self.size <= 0:
            msg = f"Needed.size must be positive, got {self.size}"
            raise ValueError(msg)

    @classmethod
    def unknown(cls) -> "Needed":
        """An indeterminate amount of additional input."""
        return cls(None)

    @classmethod
    def of(cls, size: int) -> "Needed":
        """At least ``size`` additional elements."""
        return cls(size)

    @property
    def is_known(self) -> bool:
        """True when a lower bound is available."""
        return self.size is not None

    def map(self, func: Callable[[int], int]) -> "Needed":
        """Transform a known size (unknown stays unknown)."""
        if self.size is None:
            return self
        return Needed(func(self.size))


@dataclass(frozen=True, slots=True)
class Done[O]:
    """Successful parse.

    Attributes:
        remainder: Unconsumed suffix of the parser's input
        output: Produced value
    """

    remainder: Stream
    output: O

    @property
    def is_done(self) -> Literal[True]:
        return True

    @property
    def is_error(self) -> Literal[False]:
        return False

    @property
    def is_incomplete(self) -> Literal[False]:
        return False

    def map[R](self, func: Callable[[O], R]) -> "Done[R]":
        """Apply ``func`` to the output."""
        return Done(self.remainder, func(self.output))

    def map_error(self, func: Callable[[Any], Any]) -> "Done[O]":  # noqa: ARG002
        return self

    def map_needed(self, func: Callable[[Needed], Needed]) -> "Done[O]":  # noqa: ARG002
        return self

    def unwrap(self) -> tuple[Stream, O]:
        """Return ``(remainder, output)``."""
        return (self.remainder, self.output)

    def unwrap_output(self) -> O:
        """Return the output, ignoring the remainder."""
        return self.output


@dataclass(frozen=True, slots=True)
class Error[E]:
    """Failed parse.

    Carries no remainder: position information lives in the payload only
    (verbose mode frames record positions, simple mode does not).

    Attributes:
        error: Payload built by the active error strategy
    """

    error: E

    @property
    def is_done(self) -> Literal[False]:
        return False

    @property
    def is_error(self) -> Literal[True]:
        return True

    @property
    def is_incomplete(self) -> Literal[False]:
        return False

    def map(self, func: Callable[[Any], Any]) -> "Error[E]":  # noqa: ARG002
        return self

    def map_error[R](self, func: Callable[[E], R]) -> "Error[R]":
        """Apply ``func`` to the error payload."""
        return Error(func(self.error))

    def map_needed(self, func: Callable[[Needed], Needed]) -> "Error[E]":  # noqa: ARG002
        return self

    def unwrap(self, source: Input | None = None) -> NoReturn:
        """Raise ParseFailure carrying the payload.

        Args:
            source: Input the failing parser ran on, used to render positions
        """
        raise ParseFailure(self.error, source=source)

    def unwrap_output(self, source: Input | None = None) -> NoReturn:
        raise ParseFailure(self.error, source=source)


@dataclass(frozen=True, slots=True)
class Incomplete:
    """Undecided parse: more input is required.

    Attributes:
        needed: Lower bound on the additional input required
    """

    needed: Needed

    @property
    def is_done(self) -> Literal[False]:
        return False

    @property
    def is_error(self) -> Literal[False]:
        return False

    @property
    def is_incomplete(self) -> Literal[True]:
        return True

    def map(self, func: Callable[[Any], Any]) -> "Incomplete":  # noqa: ARG002
        return self

    def map_error(self, func: Callable[[Any], Any]) -> "Incomplete":  # noqa: ARG002
        return self

    def map_needed(self, func: Callable[[Needed], Needed]) -> "Incomplete":
        """Apply ``func`` to the Needed indicator."""
        return Incomplete(func(self.needed))

    def unwrap(self) -> NoReturn:
        """Raise IncompleteInput carrying the Needed indicator."""
        raise IncompleteInput(self.needed)

    def unwrap_output(self) -> NoReturn:
        raise IncompleteInput(self.needed)


type Outcome[O] = Done[O] | Error[Any] | Incomplete
type Parser[O] = Callable[[Any], Outcome[O]]
