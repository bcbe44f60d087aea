r"""
tagflags tag grammar: compile one field tag into a Descriptor.

A tag reads the way the option is shown in help output:

    "-n, --num=NUMBER        specify number"
     │   │     │             └─ help text (optional, omitted from help when absent)
     │   │     └─ value placeholder (makes the option take a value)
     │   └─ long spelling (optional)
     └─ short spelling (optional)

Grammar (informal)
    [ short [ "=" arg1 ] [ "," ]? ] [ long [ "=" arg2 ] ] [ sep help ]

- short: "-" followed by one character of [a-zA-Z0-9-].
- long:  "--" followed by [a-zA-Z0-9] and one or more of [a-zA-Z0-9-].
- arg1/arg2: a run of characters without commas or whitespace.
- the comma between short and long is optional (and may be padded by
  whitespace); "-q--quiet" is accepted, "-q --quiet" is not.
- help: everything after a run of commas/whitespace; it cannot start with "-"
  or whitespace and is at least two characters long.

The whole tag must match. Unmatched optional groups come back as empty strings
from match_tag(); compile_tag() additionally requires at least one spelling.
"""
import re

from .descriptors import Descriptor
from .faults import GrammarError
from .utils import Unset

# this matches "-a=ARG1, --long-opt=ARG2    help text"
# or variants thereof
TAG = re.compile(
    r"(?:"
    r"(?:(?P<short>-[a-zA-Z0-9-])(?:=(?P<arg1>[^,\s]+))?)?"
    r"(?:\s*,\s*)?"
    r")?"
    r"(?:(?P<long>--[a-zA-Z0-9][a-zA-Z0-9-]+)(?:=(?P<arg2>[^,\s]+))?)?"
    r"(?:[,\s]+(?P<help>[^-\s].+)?)?",
    re.ASCII
)


def match_tag(tag, /):
    """
    Match a raw tag against the grammar and return its groups.

    Returns
    - dict with the keys 'short', 'arg1', 'long', 'arg2' and 'help'; groups
      that did not participate in the match are empty strings.

    Raises
    - TypeError: tag is not a string.
    - GrammarError: the tag does not match the grammar.
    """
    if not isinstance(tag, str):
        raise TypeError("match_tag() argument must be a string")
    if not (match := TAG.fullmatch(tag)):
        raise GrammarError(tag)
    return match.groupdict(default="")


def compile_tag(tag, /, *, field=Unset, kind=Unset):
    """
    Compile a raw tag into a Descriptor.

    Parameters
    - tag: str, the annotation text.
    - field: name of the record attribute the descriptor will write to.
    - kind: ValueKind of that attribute.

    Raises
    - GrammarError: the tag does not match, or names neither a short nor a
      long spelling.
    """
    groups = match_tag(tag)
    if not groups["short"] and not groups["long"]:
        raise GrammarError(tag)

    return Descriptor(
        groups["short"],
        groups["arg1"],
        groups["long"],
        groups["arg2"],
        groups["help"],
        field=field,
        kind=kind,
    )


__all__ = (
    "match_tag",
    "compile_tag",
)
