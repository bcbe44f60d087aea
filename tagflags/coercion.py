"""
Value coercion and no-value mutation for bound record fields.

- convert(kind, text): textual option value → field value, or ValueError.
- assign(record, descriptor, text): convert and store.
- bump(record, descriptor): apply a no-value option (set booleans, count integers).
"""
import re

from .descriptors import ValueKind

INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1
UINT_MAX = (1 << 64) - 1

TRUE = frozenset(("1", "t", "T", "TRUE", "true", "True"))
FALSE = frozenset(("0", "f", "F", "FALSE", "false", "False"))


def _integer(text, pattern, low, high, /):
    # int() alone would also take whitespace, underscores and non-ASCII digits
    if not re.fullmatch(pattern, text, re.ASCII):
        raise ValueError(f"invalid syntax: {text!r}")
    if not low <= (value := int(text, 10)) <= high:
        raise ValueError(f"value out of range: {text!r}")
    return value


def convert(kind, text, /):
    """
    Convert a textual value according to a ValueKind.

    - BOOLEAN: 1, t, T, TRUE, true, True / 0, f, F, FALSE, false, False.
    - SIGNED: base-10, optional leading sign, 64-bit signed range.
    - UNSIGNED: base-10 digits only, 64-bit unsigned range.
    - TEXT: returned verbatim.

    Raises
    - ValueError: the text does not represent a value of that kind.
    - TypeError: kind is not a ValueKind.
    """
    match kind:
        case ValueKind.BOOLEAN:
            if text in TRUE:
                return True
            if text in FALSE:
                return False
            raise ValueError(f"invalid syntax: {text!r}")
        case ValueKind.SIGNED:
            return _integer(text, r"[+-]?[0-9]+", INT_MIN, INT_MAX)
        case ValueKind.UNSIGNED:
            return _integer(text, r"[0-9]+", 0, UINT_MAX)
        case ValueKind.TEXT:
            return text
        case _:
            raise TypeError(f"unsupported value kind {kind!r}")


def assign(record, descriptor, text, /):
    setattr(record, descriptor.field, convert(descriptor.kind, text))


def bump(record, descriptor, /):
    """
    Apply a no-value option: booleans become True, integers count up by one.
    """
    match descriptor.kind:
        case ValueKind.BOOLEAN:
            setattr(record, descriptor.field, True)
        case ValueKind.SIGNED | ValueKind.UNSIGNED:
            setattr(record, descriptor.field, getattr(record, descriptor.field) + 1)
        case _:
            raise TypeError(f"option {descriptor.combined} of kind {descriptor.kind!r} cannot be given without a value")


__all__ = (
    "convert",
    "assign",
    "bump",
)
