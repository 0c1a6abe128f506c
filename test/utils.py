"""
Tests for the internal helpers.

This module verifies the guarantees the option layer relies on:
- The Unset sentinel is a falsy, final singleton usable in isinstance unions.
- coalesce() only replaces Unset.
- view() exposes backing fields as read-only, immutable views.
- rename() assigns stable names to callables.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from argspan.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the module singleton on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        """
        `X | Unset` builds a union usable with isinstance().
        """
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("text", str | Unset))
        self.assertFalse(isinstance(3, str | Unset))

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):
                pass


class CoalesceTest(TestCase):
    """
    Test suite for `coalesce`.
    """

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testKeepsFalseyValues(self) -> None:
        for value in (None, 0, "", []):
            self.assertIs(coalesce(value, "fallback"), value)


class ViewTest(TestCase):
    """
    Test suite for `view` read-only properties.
    """

    class Holder:
        items = view("items")
        table = view("table")
        tags = view("tags")
        name = view("name")

        def __init__(self):
            self._items = ["a", "b"]
            self._table = {"k": "v"}
            self._tags = {"x"}
            self._name = "holder"

    def testImmutableViews(self) -> None:
        holder = self.Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.tags, frozenset({"x"}))
        self.assertEqual(holder.name, "holder")

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.Holder().name = "other"

    def testRequiresString(self) -> None:
        self.assertRaises(TypeError, view, 1)


class RenameTest(TestCase):
    """
    Test suite for `rename`.
    """

    def testDirectForm(self) -> None:
        function = rename(lambda: None, "named")
        self.assertEqual((function.__name__, function.__qualname__), ("named", "named"))

    def testDecoratorForm(self) -> None:
        @rename("named")
        def function():
            pass

        self.assertEqual(function.__name__, "named")

    def testArgumentValidation(self) -> None:
        self.assertRaises(TypeError, rename, 1, "named")
        self.assertRaises(TypeError, rename, lambda: None, 1)
        self.assertRaises(TypeError, rename)


if __name__ == '__main__':
    unittest.main()
