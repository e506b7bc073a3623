"""Parser primitives and combinators.

Submodules:
    bytes - literals, counted takes, searches, predicate scans, escapes
    character - character classes and single-character parsers
    number - fixed-width binary numbers and hex integers
    sequence - sequencing
    branch - ordered choice, keyed dispatch, permutations
    multi - repetition, folds, separated lists
    combinator - optionals, mapping, look-ahead, error annotation, dbg
    bits - bit-level parsing

Python 3.13+.
"""

from .bits import bits, byte_aligned, tag_bits, take_bits
from .branch import alt, permutation, switch
from .bytes import (
    escaped,
    escaped_transform,
    is_a,
    is_not,
    length_data,
    length_value,
    non_empty,
    tag,
    tag_no_case,
    take,
    take_till,
    take_till1,
    take_until,
    take_until_and_consume,
    take_until_either,
    take_until_either_and_consume,
    take_while,
    take_while1,
)
from .character import (
    alpha,
    alpha0,
    alphanumeric,
    alphanumeric0,
    anychar,
    char,
    crlf,
    digit,
    digit0,
    hex_digit,
    is_alphabetic,
    is_alphanumeric,
    is_digit,
    is_hex_digit,
    is_multispace,
    is_oct_digit,
    is_space,
    line_ending,
    multispace,
    multispace0,
    none_of,
    not_line_ending,
    oct_digit,
    one_of,
    space,
    space0,
)
from .combinator import (
    complete,
    cond,
    cond_reduce,
    dbg,
    eof,
    exact,
    flat_map,
    map_opt,
    negate,
    opt,
    peek,
    recognize,
    rest,
    transform,
    value,
    verify,
    with_error,
)
from .multi import (
    count,
    fold_many0,
    fold_many1,
    fold_many_m_n,
    length_count,
    many0,
    many1,
    many_m_n,
    many_till,
    separated_list,
    separated_nonempty_list,
)
from .number import (
    be_f32,
    be_f64,
    be_i8,
    be_i16,
    be_i32,
    be_i64,
    be_u8,
    be_u16,
    be_u32,
    be_u64,
    hex_u32,
    le_f32,
    le_f64,
    le_i8,
    le_i16,
    le_i32,
    le_i64,
    le_u8,
    le_u16,
    le_u32,
    le_u64,
)
from .sequence import delimited, pair, preceded, separated_pair, sequence, terminated

__all__ = [
    "alpha",
    "alpha0",
    "alphanumeric",
    "alphanumeric0",
    "alt",
    "anychar",
    "be_f32",
    "be_f64",
    "be_i8",
    "be_i16",
    "be_i32",
    "be_i64",
    "be_u8",
    "be_u16",
    "be_u32",
    "be_u64",
    "bits",
    "byte_aligned",
    "char",
    "complete",
    "cond",
    "cond_reduce",
    "count",
    "crlf",
    "dbg",
    "delimited",
    "digit",
    "digit0",
    "eof",
    "escaped",
    "escaped_transform",
    "exact",
    "flat_map",
    "fold_many0",
    "fold_many1",
    "fold_many_m_n",
    "hex_digit",
    "hex_u32",
    "is_a",
    "is_alphabetic",
    "is_alphanumeric",
    "is_digit",
    "is_hex_digit",
    "is_multispace",
    "is_not",
    "is_oct_digit",
    "is_space",
    "le_f32",
    "le_f64",
    "le_i8",
    "le_i16",
    "le_i32",
    "le_i64",
    "le_u8",
    "le_u16",
    "le_u32",
    "le_u64",
    "length_count",
    "length_data",
    "length_value",
    "line_ending",
    "many0",
    "many1",
    "many_m_n",
    "many_till",
    "map_opt",
    "multispace",
    "multispace0",
    "negate",
    "non_empty",
    "none_of",
    "not_line_ending",
    "oct_digit",
    "one_of",
    "opt",
    "pair",
    "peek",
    "permutation",
    "preceded",
    "recognize",
    "rest",
    "separated_list",
    "separated_nonempty_list",
    "separated_pair",
    "sequence",
    "space",
    "space0",
    "switch",
    "tag",
    "tag_bits",
    "tag_no_case",
    "take",
    "take_bits",
    "take_till",
    "take_till1",
    "take_until",
    "take_until_and_consume",
    "take_until_either",
    "take_until_either_and_consume",
    "take_while",
    "take_while1",
    "terminated",
    "transform",
    "value",
    "verify",
    "with_error",
]
