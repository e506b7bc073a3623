"""Error discriminants and verbose error chains.

Defines the ErrorKind table shared by both error modes, the Frame record
used by verbose mode, and the append-only ErrorChain.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Custom",
    "ErrorChain",
    "ErrorKind",
    "Frame",
]


class ErrorKind(Enum):
    """Failure discriminants with unique identifiers.

    Organized by family:
        1000-1999: Byte and character primitives
        2000-2999: Combinators
        3000-3999: Bit engine
        4000-4999: External bridges (regex, text conversion)
        9000: User-defined codes (see Custom)
    """

    # Byte and character primitives (1000-1999)
    TAG = 1001
    TAG_NO_CASE = 1002
    EOF = 1003  # Fixed-length extraction ran past the end of a complete input
    TAKE_UNTIL = 1004
    TAKE_UNTIL_AND_CONSUME = 1005
    TAKE_UNTIL_EITHER = 1006
    TAKE_UNTIL_EITHER_AND_CONSUME = 1007
    TAKE_WHILE1 = 1008
    TAKE_TILL1 = 1009
    IS_A = 1010
    IS_NOT = 1011
    ESCAPED = 1012
    ESCAPED_TRANSFORM = 1013
    LENGTH_VALUE = 1014
    NON_EMPTY = 1015
    ALPHA = 1101
    DIGIT = 1102
    HEX_DIGIT = 1103
    OCT_DIGIT = 1104
    ALPHANUMERIC = 1105
    SPACE = 1106
    MULTISPACE = 1107
    CHAR = 1108
    ONE_OF = 1109
    NONE_OF = 1110
    CRLF = 1111
    LINE_ENDING = 1112
    HEX_U32 = 1201

    # Combinators (2000-2999)
    ALT = 2001
    SWITCH = 2002
    PERMUTATION = 2003
    MANY1 = 2101
    MANY_M_N = 2102
    MANY_TILL = 2103
    COUNT = 2104
    SEPARATED_LIST = 2105
    SEPARATED_NONEMPTY_LIST = 2106
    FOLD_MANY1 = 2107
    FOLD_MANY_M_N = 2108
    MAP_RES = 2201
    MAP_OPT = 2202
    VERIFY = 2203
    NOT = 2204
    COMPLETE = 2205
    EXACT = 2206
    COND = 2207
    EOF_EXPECTED = 2208

    # Bit engine (3000-3999)
    TAG_BITS = 3001
    BITS_ALIGNMENT = 3002

    # External bridges (4000-4999)
    REGEXP_MATCH = 4001
    REGEXP_FIND = 4002
    REGEXP_MATCHES = 4003
    REGEXP_CAPTURE = 4004
    REGEXP_CAPTURES = 4005
    LOCALE_DECIMAL = 4101

    # User-defined (see Custom)
    CUSTOM = 9000

    def describe(self) -> str:
        """Return a short human-readable description of the failure."""
        return _DESCRIPTIONS.get(self, self.name.lower().replace("_", " "))


_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.TAG: "literal did not match",
    ErrorKind.TAG_NO_CASE: "literal did not match (case-insensitive)",
    ErrorKind.EOF: "unexpected end of input",
    ErrorKind.TAKE_UNTIL: "delimiter not found",
    ErrorKind.TAKE_UNTIL_AND_CONSUME: "delimiter not found",
    ErrorKind.TAKE_WHILE1: "expected at least one matching element",
    ErrorKind.TAKE_TILL1: "expected at least one element before the terminator",
    ErrorKind.ALPHA: "expected an alphabetic character",
    ErrorKind.DIGIT: "expected a decimal digit",
    ErrorKind.HEX_DIGIT: "expected a hexadecimal digit",
    ErrorKind.OCT_DIGIT: "expected an octal digit",
    ErrorKind.ALPHANUMERIC: "expected an alphanumeric character",
    ErrorKind.SPACE: "expected a space or tab",
    ErrorKind.MULTISPACE: "expected whitespace",
    ErrorKind.CHAR: "unexpected character",
    ErrorKind.ONE_OF: "character not in the expected set",
    ErrorKind.NONE_OF: "character in the excluded set",
    ErrorKind.CRLF: "expected \\r\\n",
    ErrorKind.LINE_ENDING: "expected a line ending",
    ErrorKind.ALT: "no alternative matched",
    ErrorKind.SWITCH: "no case matched the selector",
    ErrorKind.PERMUTATION: "not every permutation member matched",
    ErrorKind.MANY1: "expected at least one repetition",
    ErrorKind.MANY_M_N: "repetition count out of range",
    ErrorKind.COUNT: "expected an exact number of repetitions",
    ErrorKind.MAP_RES: "conversion of the parsed value failed",
    ErrorKind.MAP_OPT: "conversion of the parsed value produced nothing",
    ErrorKind.VERIFY: "parsed value rejected by verification",
    ErrorKind.NOT: "unexpected match",
    ErrorKind.COMPLETE: "input ended before the parser could decide",
    ErrorKind.EXACT: "input remained after the parser",
    ErrorKind.EOF_EXPECTED: "expected end of input",
    ErrorKind.TAG_BITS: "bit pattern did not match",
    ErrorKind.BITS_ALIGNMENT: "bit cursor is not on a byte boundary",
    ErrorKind.CUSTOM: "custom error",
}


@dataclass(frozen=True, slots=True)
class Custom:
    """User-defined discriminant.

    Wraps any hashable value chosen by the grammar author, for example an
    application error enum member or an integer code.

    Example:
        >>> Custom(42).kind
        <ErrorKind.CUSTOM: 9000>
    """

    code: object

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.CUSTOM


@dataclass(frozen=True, slots=True)
class Frame:
    """One step of a verbose error trace.

    Attributes:
        kind: Which primitive or combinator failed
        position: Absolute input offset of the failure (bit index inside
            the bit engine)
        code: User-defined code for CUSTOM frames, None otherwise
        in_bits: True when position is a bit index
    """

    kind: ErrorKind
    position: int
    code: object = None
    in_bits: bool = False

    @property
    def byte_position(self) -> int:
        """Offset of the byte holding the failure position."""
        return self.position // 8 if self.in_bits else self.position

    def location(self) -> str:
        """Position as text: ``12`` for bytes, ``3.5`` (byte.bit) in the bit engine."""
        if self.in_bits:
            byte, bit = divmod(self.position, 8)
            return f"{byte}.{bit}"
        return str(self.position)

    def label(self) -> str:
        """Short label, e.g. ``TAG@0`` or ``CUSTOM(42)@3``."""
        if self.code is None:
            return f"{self.kind.name}@{self.location()}"
        return f"{self.kind.name}({self.code!r})@{self.location()}"


@dataclass(frozen=True, slots=True)
class ErrorChain:
    """Append-only, innermost-first sequence of failure frames.

    Frames are added as a failure propagates outward through nested
    combinators. ``push`` returns a new chain; existing frames are never
    reordered or removed.

    Example:
        >>> chain = ErrorChain.start(Frame(ErrorKind.TAG, 0))
        >>> chain = chain.push(Frame(ErrorKind.ALT, 0))
        >>> [frame.kind.name for frame in chain]
        ['TAG', 'ALT']
    """

    frames: tuple[Frame, ...]

    def __post_init__(self) -> None:
        """Validate the chain.

        Raises:
            ValueError: If the chain is empty
        """
        if not self.frames:
            msg = "ErrorChain requires at least one frame"
            raise ValueError(msg)

    @classmethod
    def start(cls, frame: Frame) -> "ErrorChain":
        """Create a chain holding a single (innermost) frame."""
        return cls((frame,))

    def push(self, frame: Frame) -> "ErrorChain":
        """Return a new chain with ``frame`` appended as the outermost frame."""
        return ErrorChain((*self.frames, frame))

    @property
    def innermost(self) -> Frame:
        """The frame where the failure originated."""
        return self.frames[0]

    @property
    def outermost(self) -> Frame:
        """The frame added last."""
        return self.frames[-1]

    @property
    def kinds(self) -> tuple[ErrorKind, ...]:
        """Discriminants of every frame, innermost first."""
        return tuple(frame.kind for frame in self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    def __len__(self) -> int:
        return len(self.frames)
