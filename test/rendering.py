# python
"""
Help rendering tests.

Scope
- Validate the exact plain-text layout (usage line, column padding, long labels, multi-line descriptions).
- Validate default widths, width validation and purity of rendering.
- Validate sinks (rich Console and plain text streams) and opt-in styling.

Conventions
- Test method names follow CamelCase per project convention.
- Consoles are created with color disabled for deterministic comparisons.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from argspan import Flag, KeywordOption, PositionalOption, format_help, print_help


def options():
    return [
        Flag("-v", "--verbose", descr="verbose output"),
        KeywordOption("-o", "--output", descr="output file"),
        PositionalOption("SOURCE", "input file"),
        PositionalOption("DEST", required=False),
    ]


EXPECTED = "\n".join((
    "Usage: tool <options> SOURCE [DEST]",
    "",
    "-v, --verbose".ljust(25) + "verbose output",
    "-o, --output".ljust(25) + "output file",
    "SOURCE".ljust(25) + "input file",
    "[DEST]",
))


class TestFormatHelp(TestCase):
    """Layout of the rendered help text."""

    def testLayout(self):
        self.assertEqual(format_help("tool", options()).plain, EXPECTED)

    def testRenderingIsRepeatable(self):
        declared = options()
        first = format_help("tool", declared).plain
        second = format_help("tool", declared).plain
        self.assertEqual(first, second)
        self.assertFalse(any(option.is_set() for option in declared))

    def testNoOptions(self):
        self.assertEqual(format_help("tool", []).plain, "Usage: tool")

    def testKeywordOnlyDefaultWidth(self):
        render = format_help("tool", [Flag("-h", "--help", descr="show help")])
        self.assertEqual(render.plain, "Usage: tool <options>\n\n" + "-h, --help".ljust(15) + "show help")

    def testPositionalOnlyUsage(self):
        render = format_help("tool", [PositionalOption("FILE")])
        self.assertEqual(render.plain, "Usage: tool FILE\n\nFILE")

    def testExplicitWidth(self):
        render = format_help("tool", [Flag("-q", descr="quiet")], 4)
        self.assertEqual(render.plain, "Usage: tool <options>\n\n-q  quiet")

    def testLongLabelWrapsDescription(self):
        render = format_help("tool", [KeywordOption("--a-very-long-option-name", descr="details")], 25)
        self.assertEqual(
            render.plain,
            "Usage: tool <options>\n\n--a-very-long-option-name\n" + " " * 25 + "details"
        )

    def testLabelAsWideAsColumnWraps(self):
        render = format_help("tool", [Flag("--abc", descr="x")], 5)
        self.assertEqual(render.plain, "Usage: tool <options>\n\n--abc\n     x")

    def testMultiLineDescriptionIsIndented(self):
        render = format_help("tool", [Flag("-x", descr="first line\nsecond line")], 10)
        self.assertEqual(
            render.plain,
            "Usage: tool <options>\n\n" + "-x".ljust(10) + "first line\n" + " " * 10 + "second line"
        )

    def testWidthValidation(self):
        self.assertRaises(ValueError, format_help, "tool", [], -1)
        self.assertRaises(ValueError, format_help, "tool", [], True)
        self.assertRaises(ValueError, format_help, "tool", [], "25")

    def testPlainRenderHasNoStyles(self):
        self.assertEqual(format_help("tool", options()).spans, [])

    def testColorfulRenderKeepsText(self):
        render = format_help("tool", options(), colorful=True)
        self.assertEqual(render.plain, EXPECTED)
        self.assertTrue(render.spans)


class TestPrintHelp(TestCase):
    """Delivery of the help text to a sink."""

    def testTextStream(self):
        sink = io.StringIO()
        print_help(sink, "tool", options())
        self.assertEqual(sink.getvalue(), EXPECTED + "\n")

    def testRichConsole(self):
        console = Console(color_system=None, force_terminal=False, width=200)
        with console.capture() as capture:
            print_help(console, "tool", options())
        self.assertEqual(capture.get(), EXPECTED + "\n")

    def testRichConsoleDoesNotWrap(self):
        console = Console(color_system=None, force_terminal=False, width=20)
        with console.capture() as capture:
            print_help(console, "tool", [Flag("-x", descr="a description longer than the console")], 4)
        self.assertIn("-x  a description longer than the console", capture.get())


if __name__ == "__main__":
    unittest.main()
