"""
Small helpers shared by the grammar, descriptor, scanner and help modules.

Contents
- Unset: the "argument omitted" marker used in signatures where None is a
  meaningful value of its own (a descriptor without help text, for instance).
- coalesce(value, default): swap Unset for a fallback; None, 0 and "" pass through.
- mirror(name): read-only property over self._<name>; descriptors are built from these.
- combine(short, long): the display form of an option ("-n, --num", "-n", "--num").
  Fault messages, duplicate tracking and help output all go through it.
- ordinal(position): "first" ... "tenth", then "11th", "22nd", "103rd".

Anything missing from __all__ is private to the package.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> combine("-n", "--num")
    '-n, --num'
    >>> ordinal(3)
    'third'
"""
import functools
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker: a falsy singleton that prints as "Unset" and
    refuses subclassing.
    """

    # str | Unset in isinstance() checks
    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")


def coalesce(object, default=None, /):
    """
    Return object, or default when object is Unset.

    Only the marker is replaced: coalesce(None, 1) is None and coalesce("", 1) is "".
    """
    return default if object is Unset else object


def mirror(name, /):
    """
    Build a read-only property returning self._<name>.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() expects the attribute name as a string")

    def read(self):
        return getattr(self, "_" + name)

    read.__name__ = read.__qualname__ = name
    return property(read)


def combine(short, long, /):
    """
    Join the short and long spellings of one option for display.

    Either part may be empty or None; the result is never empty as long as one
    of them is present.
    """
    if short and long:
        return short + ", " + long
    return short or long or ""


_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def ordinal(position, /):
    """
    Label a 1-based argv position for messages ("at third position").
    """
    if 1 <= position <= len(_WORDS):
        return _WORDS[position - 1]
    if position < 1:
        return str(position)
    # teens always take "th": 11th, 12th, 113th
    if position % 100 in (11, 12, 13):
        return "%dth" % position
    return "%d%s" % (position, {1: "st", 2: "nd", 3: "rd"}.get(position % 10, "th"))


Unset = UnsetType()


__all__ = (
    "coalesce",
    "mirror",
    "combine",
    "ordinal",
    "UnsetType",
    "Unset",
)
