"""
tagflags faults (errors and warnings) and rendering.

Scope
- DefinitionError family: programming mistakes in the bound record's declaration
  (bad tag grammar, unsupported field type, clashing spellings). Raised while the
  descriptor table is built, before any argument is scanned, and never rendered.
- FaultCode: canonical, stable numeric identifiers for user-facing parse issues.
- ParseError / ParseWarning: base types that carry message + options and know how
  to render themselves through rich.
- trigger(): central entry point to surface a fault (raise, warn, or print and exit).
- getdoc(): the host program's documentation link or text for a code, if any.

UX goals
- Position-first messages: parse faults name the argv position they come from
  (“at third position”).
- Short titles, one-sentence bodies and a single clear hint.
- Styling is configurable via __styles__ in __main__; the program name shown in
  the header comes from __prog__ in __main__ or the "prog" option.

Integration
- The scanner raises faults through trigger(fault, ...) in non-shell mode, so the
  caller catches them as ordinary exceptions.
- invoke() re-triggers a caught fault with shell=True to print it and exit.
"""
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class DefinitionError(Exception):
    """
    The bound record's declaration is malformed.

    This is a programmer error in the record, not a user input error; it is
    raised before scanning starts and should be treated as a startup failure.
    """


class GrammarError(DefinitionError, ValueError):
    """
    A tag does not follow the option grammar (or names no spelling at all).
    """

    def __init__(self, raw, /, message=Unset):
        self.raw = raw
        super().__init__(message if message is not Unset else "syntax error in tag flags:%r" % raw)


class FieldTypeError(DefinitionError, TypeError):
    """
    A tagged field is declared with a type the parser cannot bind.
    """


class FaultCode(IntEnum):
    """
    Stable numbers identifying each kind of parse fault.

    111xx are errors raised while scanning; 121xx are warnings. Hosts may
    relabel codes (see normalize()) but the numbers never change.
    """
    # user input errors
    UNKNOWN_OPTION              = 11112
    OPTION_TAKES_NO_VALUE       = 11113
    MISSING_VALUE_IN_CLUSTER    = 11114
    DUPLICATE_OPTION            = 11115
    INVALID_VALUE               = 11116
    TRUNCATED_OPTION            = 11117

    # soft issues
    EMPTY_INLINE_VALUE          = 12111

    def normalize(self):
        """
        Label shown in fault headers: the numeric code, or the host's label for it.

        A __codes__ mapping defined in __main__ (FaultCode -> label) takes
        precedence over the number.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    Build the rich renderable shared by errors and warnings.

    Palette keys: prog-name, code, title, message, hint-arrow, hint.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = getattr(main, "__prog__", options.get("prog") or "program")
    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(options["code"].normalize() if "code" in options else "", "code"),
        " | ",
        text(options.get("title", "").title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")

    parts = [message]
    if options.get("hint"):
        parts.append(Text.assemble(text(" → ", "hint-arrow"), text(options["hint"], "hint")))

    if fancy:
        return Panel(Group(*parts), title=header, title_align="left")
    return Group(header, *parts)


class ParseError(Exception):
    """
    Base class of every user-input fault raised while scanning arguments.

    Common options
    - code: FaultCode, title: short headline, hint: one actionable sentence.
    - token: the offending argv element, index: its 1-based argv position.
    - positionals: positional arguments collected before the failure.
    - shell/fancy/colorful/prog/console: rendering and triggering controls.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def positionals(self):
        return list(self.options.get("positionals", ()))

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        sys.exit(self.options.get("status", 2))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParseError): ...
class OptionTakesNoValueError(ParseError): ...
class MissingValueInClusterError(ParseError): ...
class DuplicateOptionError(ParseError): ...
class InvalidValueError(ParseError): ...
class TruncatedOptionError(ParseError): ...


class ParseWarning(Warning):
    """
    Base class of soft, non-terminating parse issues.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",  # warnings stand out in amber
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 4))
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInlineValueWarning(ParseWarning): ...


def trigger(fault, /, **options):
    """
    Merge options into a fault and surface it.

    - the fault needs __replace__ (copy with merged options) and __trigger__.
    - ParseError: raised, or printed followed by sys.exit() when shell=True.
    - ParseWarning: warnings.warn(), or printed when shell=True.
    """
    if not callable(getattr(fault, "__trigger__", None)) or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("trigger() expects a fault implementing __trigger__ and __replace__")
    return fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    Documentation for a code from the __docs__ mapping in __main__, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() expects a FaultCode")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "DefinitionError",
    "GrammarError",
    "FieldTypeError",
    "FaultCode",
    "ParseError",
    "UnknownOptionError",
    "OptionTakesNoValueError",
    "MissingValueInClusterError",
    "DuplicateOptionError",
    "InvalidValueError",
    "TruncatedOptionError",
    "ParseWarning",
    "EmptyInlineValueWarning",
    "trigger",
    "getdoc",
)
