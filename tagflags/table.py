"""
tagflags descriptor table: derive the parsing surface from a record declaration.

Declaring a record
- Dataclass field metadata under the "flags" key (the direct analogue of a
  struct tag), most conveniently through option():

      @dataclass
      class Options:
          quiet: bool = option("-q, --quiet             suppress output", default=False)
          num: int = option("-n, --num=NUMBER        specify number", default=0)

- Or an Annotated marker, which also works on plain (non-dataclass) classes:

      class Options:
          quiet: Annotated[bool, Flags("-q, --quiet  suppress output")] = False

Supported field types
- bool → ValueKind.BOOLEAN, int → ValueKind.SIGNED, UInt → ValueKind.UNSIGNED,
  str → ValueKind.TEXT. Anything else carrying a tag is a FieldTypeError.

Table contract
- descriptors: tuple in field declaration order (used for help ordering).
- spellings: read-only mapping from "-x"/"--xyz" to its descriptor.
- built by define() once per parse call, never mutated afterwards.
"""
import dataclasses
import typing
from types import MappingProxyType
from typing import Annotated, NewType

from .descriptors import Descriptor, ValueKind
from .faults import DefinitionError, FieldTypeError
from .grammar import compile_tag
from .utils import Unset

TAG_KEY = "flags"

UInt = NewType("UInt", int)
"""
Marker type for unsigned-integer fields (values must be >= 0, no sign accepted).
"""

_KINDS = {
    bool: ValueKind.BOOLEAN,
    int: ValueKind.SIGNED,
    UInt: ValueKind.UNSIGNED,
    str: ValueKind.TEXT,
}


class Flags:
    """
    Annotated marker carrying a field tag: Annotated[int, Flags("-v, --verbose")].
    """
    __slots__ = ("tag",)

    def __init__(self, tag, /):
        if not isinstance(tag, str):
            raise TypeError("Flags() argument must be a string")
        self.tag = tag

    def __eq__(self, other):
        if not isinstance(other, Flags):
            return NotImplemented
        return self.tag == other.tag

    def __hash__(self):
        return hash((Flags, self.tag))

    def __repr__(self):
        return f"Flags({self.tag!r})"


def option(tag, /, default=Unset, **kwargs):
    """
    Build a dataclass field tagged with an option definition.

    Parameters
    - tag: str, the option grammar (see tagflags.grammar).
    - default: the field default; when omitted the field has no default and
      must be passed to the dataclass constructor.
    - **kwargs: forwarded to dataclasses.field() (default_factory, repr, ...).
      Extra metadata is merged with the tag.
    """
    if not isinstance(tag, str):
        raise TypeError("option() first argument must be a string")
    metadata = dict(kwargs.pop("metadata", None) or {}) | {TAG_KEY: tag}
    if default is not Unset:
        kwargs["default"] = default
    return dataclasses.field(metadata=metadata, **kwargs)


class Table:
    """
    Ordered descriptors plus the spelling index used by the scanner.
    """
    __slots__ = ("_descriptors", "_spellings")

    def __init__(self, descriptors=(), /):
        spellings = {}
        for descriptor in (descriptors := tuple(descriptors)):
            if not isinstance(descriptor, Descriptor):
                raise TypeError("table entries must be descriptors")
            for spelling in descriptor.spellings:
                if (other := spellings.get(spelling)) is not None:
                    raise DefinitionError(
                        "option %s of field %r is already defined by field %r" % (spelling, descriptor.field, other.field)
                    )
                spellings[spelling] = descriptor
        self._descriptors = descriptors
        self._spellings = MappingProxyType(spellings)

    @property
    def descriptors(self):
        return self._descriptors

    @property
    def spellings(self):
        return self._spellings

    def get(self, spelling, default=None, /):
        return self._spellings.get(spelling, default)

    def __getitem__(self, spelling):
        return self._spellings[spelling]

    def __contains__(self, spelling):
        return spelling in self._spellings

    def __iter__(self):
        return iter(self._descriptors)

    def __len__(self):
        return len(self._descriptors)

    def __repr__(self):
        return "table(%s)" % ", ".join(descriptor.combined for descriptor in self._descriptors)

    def __rich_repr__(self):
        yield from self._descriptors


def _resolve(hint, /):
    """
    Split a resolved type hint into (underlying type, Flags marker or None).
    """
    marker = None
    while typing.get_origin(hint) is Annotated:
        for extra in hint.__metadata__:
            if isinstance(extra, Flags):
                marker = extra
        hint = hint.__origin__
    return hint, marker


def _kind(name, hint, /):
    # bool is a subclass of int, so look types up by identity, never issubclass
    for declared, kind in _KINDS.items():
        if hint is declared:
            return kind
    raise FieldTypeError("unable to handle type %r of field %r (not implemented)" % (hint, name))


def define(record, /):
    """
    Build the descriptor table for a record instance or class.

    Steps (per declared attribute, in declaration order)
    - find the tag (dataclass metadata "flags", else an Annotated Flags marker);
      untagged or empty-tagged attributes are ignored.
    - derive the ValueKind from the declared type (FieldTypeError otherwise).
    - compile the tag (GrammarError propagates).
    - reject text fields without a value placeholder.
    - register the spellings (DefinitionError on a clash).

    Raises
    - DefinitionError (or its GrammarError / FieldTypeError subclasses).
    """
    cls = record if isinstance(record, type) else type(record)
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as exception:
        raise DefinitionError(f"unable to resolve the annotations of {cls.__qualname__!r}: {exception}") from exception

    metadata = {}
    if dataclasses.is_dataclass(cls):
        metadata = {field.name: field.metadata for field in dataclasses.fields(cls)}

    descriptors = []
    for name, hint in hints.items():
        if typing.get_origin(hint) is typing.ClassVar:
            continue
        declared, marker = _resolve(hint)
        tag = metadata.get(name, {}).get(TAG_KEY) or (marker.tag if marker else "")
        if not tag:
            continue
        if not isinstance(tag, str):
            raise DefinitionError(f"tag of field {name!r} must be a string")

        kind = _kind(name, declared)
        descriptor = compile_tag(tag, field=name, kind=kind)

        if kind is ValueKind.TEXT and not descriptor.takes_value:
            raise DefinitionError(
                "text field %r needs a value placeholder (for example %s=VALUE)" % (name, descriptor.spelling)
            )
        descriptors.append(descriptor)

    return Table(descriptors)


__all__ = (
    "TAG_KEY",
    "UInt",
    "Flags",
    "option",
    "Table",
    "define",
)
