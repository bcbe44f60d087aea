# python
"""
Faults behavioral tests.

Scope
- Validate the DefinitionError hierarchy.
- Validate ParseError / ParseWarning options, replacement and triggering (raise, warn, print, exit).
- Validate FaultCode normalization and getdoc() lookups.
- Validate rich rendering (plain and fancy) into an in-memory console.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console
from rich.panel import Panel

from tagflags import (
    DefinitionError,
    EmptyInlineValueWarning,
    FaultCode,
    FieldTypeError,
    GrammarError,
    ParseError,
    ParseWarning,
    UnknownOptionError,
    getdoc,
    trigger,
)


class TestDefinitionErrors(TestCase):
    """Declaration faults."""

    def testHierarchy(self):
        self.assertTrue(issubclass(GrammarError, DefinitionError))
        self.assertTrue(issubclass(GrammarError, ValueError))
        self.assertTrue(issubclass(FieldTypeError, DefinitionError))
        self.assertTrue(issubclass(FieldTypeError, TypeError))
        self.assertFalse(issubclass(DefinitionError, ParseError))

    def testGrammarErrorKeepsRawTag(self):
        error = GrammarError("blurp")
        self.assertEqual(error.raw, "blurp")
        self.assertEqual(str(error), "syntax error in tag flags:'blurp'")

    def testGrammarErrorCustomMessage(self):
        self.assertEqual(str(GrammarError("", "no spelling")), "no spelling")


class TestFaultCode(TestCase):
    """Code normalization and documentation lookups."""

    def testNormalize(self):
        self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "11112")
        self.assertEqual(FaultCode.EMPTY_INLINE_VALUE.normalize(), "12111")

    def testGetdocDefaultsToNone(self):
        self.assertIsNone(getdoc(FaultCode.INVALID_VALUE))

    def testGetdocRejectsOtherValues(self):
        with self.assertRaises(TypeError):
            getdoc(11116)


class TestParseError(TestCase):
    """Error options and triggering."""

    def testOptionsAreReadOnly(self):
        error = ParseError("boom", code=FaultCode.INVALID_VALUE)
        with self.assertRaises(TypeError):
            error.options["code"] = FaultCode.UNKNOWN_OPTION

    def testDefaults(self):
        error = ParseError()
        self.assertEqual(str(error), "")
        self.assertEqual(error.positionals, [])
        self.assertIsNone(error.code)

    def testReplaceMergesOptions(self):
        error = UnknownOptionError("unknown", hint="first", token="-x")
        replaced = error.__replace__(hint="second")
        self.assertIsInstance(replaced, UnknownOptionError)
        self.assertEqual(replaced.message, "unknown")
        self.assertEqual(replaced.options["hint"], "second")
        self.assertEqual(replaced.options["token"], "-x")
        self.assertEqual(error.options["hint"], "first")

    def testTriggerRaises(self):
        with self.assertRaises(UnknownOptionError) as context:
            trigger(UnknownOptionError("unknown"), positionals=("a",))
        self.assertEqual(context.exception.positionals, ["a"])

    def testTriggerShellPrintsAndExits(self):
        buffer = io.StringIO()
        with self.assertRaises(SystemExit) as context:
            trigger(
                UnknownOptionError("unknown option '-x' at first position"),
                shell=True,
                prog="demo",
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                hint="check the spelling of the option",
                console=Console(file=buffer, width=200),
            )
        self.assertEqual(context.exception.code, 2)
        output = buffer.getvalue()
        self.assertIn("[ demo — 11112 | Unknown Option ]", output)
        self.assertIn("unknown option '-x' at first position", output)
        self.assertIn("check the spelling of the option", output)

    def testTriggerShellStatus(self):
        with self.assertRaises(SystemExit) as context:
            trigger(ParseError("boom"), shell=True, status=64, console=Console(file=io.StringIO()))
        self.assertEqual(context.exception.code, 64)

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("boom"))


class TestParseWarning(TestCase):
    """Warning triggering."""

    def testTriggerWarns(self):
        with self.assertWarns(EmptyInlineValueWarning) as context:
            trigger(EmptyInlineValueWarning("empty"), stacklevel=2)
        self.assertEqual(str(context.warning), "empty")

    def testTriggerShellPrints(self):
        buffer = io.StringIO()
        self.assertIsNone(trigger(
            ParseWarning("careful"),
            shell=True,
            colorful=False,
            console=Console(file=buffer, width=200),
        ))
        self.assertIn("careful", buffer.getvalue())


class TestRendering(TestCase):
    """Rich renderables."""

    def testFancyUsesPanel(self):
        self.assertIsInstance(ParseError("boom", fancy=True).__rich__(), Panel)
        self.assertNotIsInstance(ParseError("boom").__rich__(), Panel)

    def testPlainRendering(self):
        buffer = io.StringIO()
        Console(file=buffer, width=200).print(ParseError("boom", colorful=False, hint="try again"))
        self.assertIn("boom", buffer.getvalue())
        self.assertIn("→ try again", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
