"""
Command-line interpreter behavioral tests.

Scope
- Validate interpret(): token stream → invocation or first usage error.
- Validate main(): exit statuses and output for help/version/license, usage errors,
  configuration errors, and the status/news views with the network mocked out.

Conventions
- Test method names follow CamelCase per project convention.
- Consoles write into StringIO buffers; environments are passed explicitly.
"""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from unittest import TestCase, mock

from rich.console import Console

from milcheck import Parser, __version__
from milcheck.cli import Invocation, interpret, main
from milcheck.config import DEFAULT_NEWS_COUNT
from milcheck.faults import (
    FaultCode,
    FetchError,
    InvalidValueError,
    UnexpectedArgumentError,
    UnrecognizedLongFlagError,
    UnrecognizedShortFlagError,
)


def _tokens(*arguments):
    return Parser(["milcheck", *arguments]).help().version().license().news().debug().parse()


def _console():
    return Console(file=io.StringIO(), width=200, color_system=None)


class TestInterpret(TestCase):

    def testNoArgumentsChecksStatus(self):
        self.assertEqual(interpret(_tokens()), Invocation("status"))

    def testHelpVersionLicense(self):
        self.assertEqual(interpret(_tokens("-h")).action, "help")
        self.assertEqual(interpret(_tokens("--version")).action, "version")
        self.assertEqual(interpret(_tokens("-L")).action, "license")

    def testFirstDecisiveFlagWins(self):
        self.assertEqual(interpret(_tokens("-vh")).action, "version")
        self.assertEqual(interpret(_tokens("-h", "-x", "extra")).action, "help")

    def testEarlierUsageErrorWinsOverHelp(self):
        with self.assertRaises(UnrecognizedShortFlagError):
            interpret(_tokens("-x", "-h"))

    def testUnknownFlags(self):
        with self.assertRaises(UnrecognizedLongFlagError) as context:
            interpret(_tokens("--colour=always"), "tool")
        self.assertIn("--colour", context.exception.message)
        self.assertIn("tool --help", context.exception.hint)
        with self.assertRaises(UnrecognizedShortFlagError) as context:
            interpret(_tokens("-x"))
        self.assertEqual(context.exception.options["input"], "x")

    def testUnexpectedArguments(self):
        for arguments in (["foo"], ["-"], ["--", "-h"]):
            with self.subTest(arguments=arguments):
                with self.assertRaises(UnexpectedArgumentError):
                    interpret(_tokens(*arguments))

    def testNewsCount(self):
        self.assertEqual(interpret(_tokens("-n")), Invocation("news", count=DEFAULT_NEWS_COUNT))
        self.assertEqual(interpret(_tokens("-n5")).count, 5)
        self.assertEqual(interpret(_tokens("--news", "7")).count, 7)
        self.assertEqual(interpret(_tokens("--news=2")).count, 2)

    def testInvalidNewsCount(self):
        for arguments in (["--news=abc"], ["-n0"], ["--news", "--", "-1"]):
            with self.subTest(arguments=arguments):
                with self.assertRaises(InvalidValueError):
                    interpret(_tokens(*arguments))

    def testDebugFlag(self):
        self.assertEqual(interpret(_tokens("-d")), Invocation("status", debug=True))
        self.assertEqual(interpret(_tokens("-dn", "1")), Invocation("news", count=1, debug=True))


class TestMain(TestCase):

    def setUp(self):
        self.stdout = _console()
        self.stderr = _console()

    def run_main(self, *arguments, environ=None):
        return main(["/usr/bin/milcheck", *arguments], stdout=self.stdout, stderr=self.stderr, environ=environ or {})

    def testHelp(self):
        self.assertEqual(self.run_main("--help"), 0)
        output = self.stdout.file.getvalue()
        self.assertIn("USAGE:", output)
        self.assertIn("milcheck [FLAGS]", output)
        self.assertIn("-n, --news[=N]", output)
        self.assertIn("-L, --license", output)

    def testVersion(self):
        self.assertEqual(self.run_main("-v"), 0)
        self.assertEqual(self.stdout.file.getvalue(), "milcheck %s\n" % __version__)

    def testLicense(self):
        self.assertEqual(self.run_main("--license"), 0)
        self.assertEqual(self.stdout.file.getvalue(), "Mozilla Public License, v2.0\n")

    def testUsageErrorGoesToStderr(self):
        self.assertEqual(self.run_main("--bogus"), 1)
        self.assertEqual(self.stdout.file.getvalue(), "")
        output = self.stderr.file.getvalue()
        self.assertIn("unknown option \"--bogus\"", output)
        self.assertIn("milcheck --help", output)

    def testBinaryNameAppearsInErrors(self):
        main(["./bin/mc", "stray"], stdout=self.stdout, stderr=self.stderr, environ={})
        self.assertIn("mc --help", self.stderr.file.getvalue())

    def testConfigurationError(self):
        self.assertEqual(self.run_main(environ={"MILCHECK_TIMEOUT": "never"}), 1)
        output = self.stderr.file.getvalue()
        self.assertIn("MILCHECK_TIMEOUT", output)
        self.assertIn("[ milcheck — %d | Configuration Error ]" % FaultCode.INVALID_SETTING, output)

    def testInformationFlagsIgnoreBadSettings(self):
        environ = {"MILCHECK_TIMEOUT": "never"}
        for flag, expected in (("--help", "USAGE:"), ("-v", __version__), ("-L", "Mozilla")):
            with self.subTest(flag=flag):
                self.setUp()
                self.assertEqual(self.run_main(flag, environ=environ), 0)
                self.assertIn(expected, self.stdout.file.getvalue())
                self.assertEqual(self.stderr.file.getvalue(), "")

    def testMissingMirrorlist(self):
        with tempfile.TemporaryDirectory() as directory:
            status = self.run_main(environ={"MILCHECK_MIRRORLIST": os.path.join(directory, "missing")})
        self.assertEqual(status, 1)
        self.assertIn("Mirrorlist Error", self.stderr.file.getvalue())

    def testStatusView(self):
        page = (
            '<table id="outofsync_mirrors"><td>https://late.example.org/</td></table>'
            '<table id="successful_mirrors"></table><table></table>'
        )
        document = json.dumps({"urls": [
            {"url": "https://good.example.org/", "protocol": "https", "country": "Sweden",
             "completion_pct": 1.0, "delay": 60, "duration_avg": 0.2, "duration_stddev": 0.1, "score": 0.4},
            {"url": "https://late.example.org/", "protocol": "http", "country": "Chile",
             "completion_pct": 0.9, "delay": 9000, "duration_avg": 1.0, "duration_stddev": 0.5, "score": 3.0},
        ]})
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "mirrorlist")
            with open(path, "w", encoding="utf-8") as file:
                file.write(
                    "Server = https://good.example.org/$repo/os/$arch\n"
                    "Server = https://late.example.org/$repo/os/$arch\n"
                    "Server = https://gone.example.org/$repo/os/$arch\n"
                )
            with mock.patch("milcheck.cli.fetch_all", return_value=[page, document]) as fetch_all:
                status = self.run_main(environ={"MILCHECK_MIRRORLIST": path})
        self.assertEqual(status, 0, self.stderr.file.getvalue())
        fetch_all.assert_called_once()
        output = self.stdout.file.getvalue()
        self.assertIn("Ok", output)
        self.assertIn("Out of sync!", output)
        self.assertIn("Not found!", output)
        self.assertLess(output.index("good.example.org"), output.index("late.example.org"))

    def testNewsView(self):
        page = (
            '<div id="news"><h4><a href="/news/a/">Alpha</a></h4><p class="timestamp">2024-02-02</p>'
            '<div class="article-content"><p>Hello.</p></div>'
            '<h4><a href="/news/b/">Beta</a></h4><p class="timestamp">2024-01-01</p>'
            '<div class="article-content"><p>Bye.</p></div></div>'
        )
        with mock.patch("milcheck.cli.fetch", return_value=page) as fetch:
            status = self.run_main("--news=1", environ={"MILCHECK_NEWS_URL": "https://news.example.org/"})
        self.assertEqual(status, 0, self.stderr.file.getvalue())
        fetch.assert_called_once_with("https://news.example.org/", 30.0)
        output = self.stdout.file.getvalue()
        self.assertIn("Alpha", output)
        self.assertNotIn("Beta", output)

    def testNetworkFailure(self):
        with mock.patch("milcheck.cli.fetch", side_effect=FetchError("could not fetch https://x/: timed out")):
            self.assertEqual(self.run_main("-n"), 1)
        self.assertIn("could not fetch", self.stderr.file.getvalue())


if __name__ == "__main__":
    unittest.main()
