r"""
tagflags option descriptors.

Overview
- ValueKind: the semantic type of the record field an option writes to
  (boolean, signed integer, unsigned integer, text).
- Descriptor: the compiled, read-only form of one field's tag: its short/long
  spellings, their value placeholders, whether a value is required, the help
  text, the target field name and its ValueKind.

Derived views
- combined: "-n, --num" (or whichever half exists); used for duplicate tracking,
  in fault messages and in help output, so it must stay deterministic.
- spelling: the long spelling when present, else the short one.
- metavar: the long placeholder when present, else the short one.

Validation highlights
- short spellings must match r"-[a-zA-Z0-9-]", long ones r"--[a-zA-Z0-9][a-zA-Z0-9-]+".
- at least one spelling is required.
- placeholders must be non-empty runs without commas or whitespace.
"""
import enum
import functools
import operator
import re

from .utils import *


class ValueKind(enum.Enum):
    """
    Semantic type of a bound field, derived from its declared type.
    """
    BOOLEAN = "boolean"
    SIGNED = "signed-integer"
    UNSIGNED = "unsigned-integer"
    TEXT = "text"

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


def _sanitize_spelling(name, value, pattern, /):
    if value is Unset or value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"descriptor {name!r} must be a string")
    if not re.fullmatch(pattern, value, re.ASCII):
        raise ValueError(f"descriptor {name!r} is not a valid option spelling: {value!r}")
    return value


def _sanitize_metavar(name, value, /):
    if value is Unset or value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"descriptor {name!r} must be a string")
    if re.search(r"[,\s]", value, re.ASCII):
        raise ValueError(f"descriptor {name!r} cannot contain commas or whitespace")
    return value


class Descriptor:
    """
    Compiled option descriptor, one per tagged record field.

    Instances are immutable: every attribute listed in __introspectable__ is a
    read-only property mirroring a private backing field. The table builder is
    the usual producer; compile_tag() builds one from a raw tag.
    """

    __introspectable__ = (
        "short",
        "short_metavar",
        "long",
        "long_metavar",
        "takes_value",
        "help",
        "field",
        "kind",
    )

    def __init__(
            self,
            short=Unset,
            short_metavar=Unset,
            long=Unset,
            long_metavar=Unset,
            help=Unset,
            *,
            field=Unset,
            kind=Unset,
    ):
        short = _sanitize_spelling("short", short, r"-[a-zA-Z0-9-]")
        long = _sanitize_spelling("long", long, r"--[a-zA-Z0-9][a-zA-Z0-9-]+")
        if not short and not long:
            raise TypeError("descriptor must specify at least one spelling")

        if not isinstance(help := coalesce(help), str | None):
            raise TypeError("descriptor 'help' must be a string")
        if not isinstance(field := coalesce(field), str | None):
            raise TypeError("descriptor 'field' must be a string")
        if not isinstance(kind := coalesce(kind), ValueKind | None):
            raise TypeError("descriptor 'kind' must be a ValueKind")

        self._short = short
        self._short_metavar = _sanitize_metavar("short_metavar", short_metavar)
        self._long = long
        self._long_metavar = _sanitize_metavar("long_metavar", long_metavar)
        self._takes_value = bool(self._short_metavar or self._long_metavar)
        self._help = help or None
        self._field = field
        self._kind = kind

    short = mirror("short")
    short_metavar = mirror("short_metavar")
    long = mirror("long")
    long_metavar = mirror("long_metavar")
    takes_value = mirror("takes_value")
    help = mirror("help")
    field = mirror("field")
    kind = mirror("kind")

    @property
    def combined(self):
        return combine(self._short, self._long)

    @property
    def spelling(self):
        return self._long or self._short

    @property
    def metavar(self):
        return self._long_metavar or self._short_metavar

    @property
    def spellings(self):
        """
        The non-empty spellings in table registration order (short first).
        """
        return tuple(filter(None, (self._short, self._long)))

    def __eq__(self, other):
        if not isinstance(other, Descriptor):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__introspectable__)

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in self.__introspectable__))

    def __repr__(self):
        return "descriptor(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "ValueKind",
    "Descriptor",
)
