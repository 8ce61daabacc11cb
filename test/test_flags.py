"""
Flag declaration and FlagTable behavioral tests.

Scope
- Validate Flag construction constraints and display spellings.
- Validate FlagTable registration order, lookups and first-match-wins duplicates.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import dataclasses
import unittest
from unittest import TestCase

from rich.pretty import pretty_repr

from milcheck import Flag, FlagTable


class TestFlag(TestCase):
    """Behavioral tests for Flag declarations."""

    def testDefaults(self):
        flag = Flag("help", "h", "help")
        self.assertFalse(flag.takes_value)
        self.assertEqual(flag.names, ("-h", "--help"))

    def testShortOnlyAndLongOnly(self):
        self.assertEqual(Flag("x", "x").names, ("-x",))
        self.assertEqual(Flag("colour", long="colour").names, ("--colour",))

    def testNeedsAtLeastOneSpelling(self):
        with self.assertRaises(TypeError):
            Flag("nothing")

    def testIdentifierMustBeNonEmpty(self):
        with self.assertRaises(TypeError):
            Flag("", "x")

    def testShortMustBeOneCharacter(self):
        with self.assertRaises(TypeError):
            Flag("bad", "xy")

    def testShortCannotBeDash(self):
        with self.assertRaises(ValueError):
            Flag("bad", "-")

    def testLongCannotContainEquals(self):
        with self.assertRaises(ValueError):
            Flag("bad", long="a=b")

    def testLongCannotStartWithDash(self):
        with self.assertRaises(ValueError):
            Flag("bad", long="-bad")

    def testTakesValueMustBeBoolean(self):
        with self.assertRaises(TypeError):
            Flag("bad", "b", takes_value="yes")

    def testImmutableAndHashable(self):
        flag = Flag("news", "n", "news", True)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            flag.short = "m"
        self.assertEqual(len({flag, Flag("news", "n", "news", True)}), 1)


class TestFlagTable(TestCase):
    """Behavioral tests for the ordered flag registry."""

    def testRegisterReturnsFlag(self):
        table = FlagTable()
        flag = table.register("news", "n", "news", takes_value=True)
        self.assertEqual(flag, Flag("news", "n", "news", True))
        self.assertIn(flag, table)
        self.assertEqual(len(table), 1)

    def testIterationFollowsRegistrationOrder(self):
        table = FlagTable()
        for identifier in ("c", "a", "b"):
            table.register(identifier, identifier)
        self.assertEqual([flag.identifier for flag in table], ["c", "a", "b"])

    def testLookups(self):
        table = FlagTable([Flag("help", "h", "help"), Flag("license", "L", "license")])
        self.assertEqual(table.find_short("L").identifier, "license")
        self.assertEqual(table.find_long("help").identifier, "help")
        self.assertIsNone(table.find_short("l"))
        self.assertIsNone(table.find_long("hel"))

    def testDuplicatesAcceptedFirstWins(self):
        table = FlagTable()
        first = table.register("first", "x", "same")
        second = table.register("second", "x", "same")
        self.assertEqual(len(table), 2)
        self.assertIs(table.find_short("x"), first)
        self.assertIs(table.find_long("same"), first)
        self.assertIn(second, table)

    def testDuplicateIsLogged(self):
        table = FlagTable()
        table.register("first", "x")
        with self.assertLogs("milcheck.flags", level="DEBUG") as logs:
            table.register("second", "x")
        self.assertTrue(any("shadowed" in line for line in logs.output))

    def testRichRepr(self):
        self.assertEqual(pretty_repr(Flag("help", "h", "help")), "Flag(identifier='help', short='h', long='help')")
        self.assertEqual(pretty_repr(Flag("colour", long="colour")), "Flag(identifier='colour', long='colour')")
        self.assertEqual(pretty_repr(FlagTable([Flag("x", "x")])), "FlagTable(Flag(identifier='x', short='x'))")

    def testAddRejectsNonFlag(self):
        with self.assertRaises(TypeError):
            FlagTable().add(("help", "h", "help", False))


if __name__ == "__main__":
    unittest.main()
