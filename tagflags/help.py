"""
Help rendering for tagged records.

Layout (one entry per descriptor that has help text, in declaration order)

      -n, --num=NUMBER            specify number
      --a-really-long-option=VALUE
                                  help text goes on its own line

- two leading spaces, the combined spelling plus "=PLACEHOLDER" for options
  that take a value, padded to the column width, two spaces, the help text.
- when the spelling reaches the column width it gets a line of its own and the
  help text follows on the next line under a blank column.
- descriptors without help text are not shown.

Only the options are rendered: usage lines, descriptions and the like belong to
the host program.

Palette keys (override through __styles__ in __main__)
- option-name, metavar, argument-description
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.text import Text

from .table import define
from .utils import Unset, coalesce

COLUMN_WIDTH = 28


def _lines(table, width, styler):
    for descriptor in table:
        if not descriptor.help:
            continue

        spelling = Text(descriptor.combined, styler("option-name"))
        if descriptor.metavar:
            spelling.append("=").append(descriptor.metavar, styler("metavar"))
        help = Text(descriptor.help, styler("argument-description"))

        if len(spelling) >= width:
            yield Text.assemble("  ", spelling)
            spelling = Text(" ")
        yield Text.assemble("  ", spelling, " " * (width - len(spelling)), "  ", help)


def render(record, /, *, width=COLUMN_WIDTH, colorful=True):
    """
    Build the help lines for a record as rich Text objects.

    Raises
    - DefinitionError: the record's declaration is malformed.
    """
    if not isinstance(width, int) or width < 1:
        raise ValueError("render() 'width' must be a positive integer")

    styles = defaultdict(str, {
        "option-name": "bold #00E6FF",  # CYAN for options
        "metavar": "bold #FFD600",  # AMBER for parameters
        "argument-description": "#9CA3AF",  # Muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return list(_lines(define(record), width, styler))


def format_help(record, /, *, width=COLUMN_WIDTH):
    """
    Return the option help for a record as plain text (one line per row).
    """
    return "".join(line.plain + "\n" for line in render(record, width=width, colorful=False))


def print_help(record, /, *, width=COLUMN_WIDTH, colorful=True, console=Unset):
    """
    Print the option help for a record through a rich console (stdout by default).
    """
    console = coalesce(console) or Console()
    lines = render(record, width=width, colorful=colorful)
    if lines:
        console.print(Group(*lines), soft_wrap=True, highlight=False)


__all__ = (
    "COLUMN_WIDTH",
    "render",
    "format_help",
    "print_help",
)
