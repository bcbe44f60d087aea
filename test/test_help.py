# python
"""
Help rendering behavioral tests.

Scope
- Validate format_help() layout: padding, placeholders, declaration order, skipped entries.
- Validate the long-spelling layout (spelling on its own line, help below).
- Validate render() styling switches and print_help() console output.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from dataclasses import dataclass
from unittest import TestCase

from rich.console import Console
from rich.text import Text

from tagflags import UInt, format_help, option, print_help, render


@dataclass
class Options:
    help: bool = option("-h, --help", default=False)
    quiet: bool = option("-q, --quiet             suppress output", default=False)
    verbose: int = option("-v, --verbose           be more verbose (may be given multiple times)", default=0)
    num: int = option("-n, --num=NUMBER        specify number", default=0)
    unsigned: UInt = option("-u, --unsigned=NUMBER   specify number >= 0", default=UInt(0))
    file: str = option("-f, --file=FILE         specify filename", default="")


@dataclass
class Wide:
    long: str = option("--a-really-long-option=VALUE  help text goes below", default="")
    short: str = option("-s=SIZE, --size  size of the thing", default="")


@dataclass
class Silent:
    quiet: bool = option("-q, --quiet", default=False)


def row(spelling, help):
    return "  %-28s  %s\n" % (spelling, help)


class TestFormatHelp(TestCase):
    """Plain text layout."""

    def testOptions(self):
        self.assertEqual(format_help(Options()), "".join((
            row("-q, --quiet", "suppress output"),
            row("-v, --verbose", "be more verbose (may be given multiple times)"),
            row("-n, --num=NUMBER", "specify number"),
            row("-u, --unsigned=NUMBER", "specify number >= 0"),
            row("-f, --file=FILE", "specify filename"),
        )))

    def testLongSpellingOnItsOwnLine(self):
        self.assertEqual(format_help(Wide), "".join((
            "  --a-really-long-option=VALUE\n",
            row("", "help text goes below"),
            row("-s, --size=SIZE", "size of the thing"),
        )))

    def testNoHelpNoOutput(self):
        self.assertEqual(format_help(Silent), "")

    def testCustomWidth(self):
        lines = format_help(Options, width=16).splitlines()
        self.assertEqual(lines[0], "  %-16s  %s" % ("-q, --quiet", "suppress output"))
        self.assertEqual(lines[2], "  -n, --num=NUMBER")
        self.assertEqual(lines[3], "  %-16s  %s" % ("", "specify number"))

    def testWidthValidated(self):
        with self.assertRaises(ValueError):
            format_help(Options, width=0)


class TestRender(TestCase):
    """Rich rendering."""

    def testReturnsText(self):
        lines = render(Options)
        self.assertEqual(len(lines), 5)
        self.assertTrue(all(isinstance(line, Text) for line in lines))

    def testColorfulLinesAreStyled(self):
        self.assertTrue(render(Options)[0].spans)
        self.assertFalse(render(Options, colorful=False)[0].spans)

    def testPrintHelp(self):
        buffer = io.StringIO()
        print_help(Options(), console=Console(file=buffer, width=200), colorful=False)
        self.assertEqual(
            [line.rstrip() for line in buffer.getvalue().splitlines()],
            [line.rstrip() for line in format_help(Options).splitlines()],
        )

    def testPrintHelpSilent(self):
        buffer = io.StringIO()
        print_help(Silent, console=Console(file=buffer))
        self.assertEqual(buffer.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
