"""
milcheck utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the parser facade and its collaborators.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as a fresh
    copy for sequences, so callers cannot mutate captured state through the public API.

- basename(path)
  • Text after the final '/' of a program path (the displayed binary name).

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> basename("/usr/bin/milcheck")
    'milcheck'
"""
import functools
from collections.abc import Sequence
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Used where None is a legitimate user value but the API still needs to tell
    “not provided” apart from “provided as None”. A single instance, Unset, is
    exposed for use as a parameter default.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns the given object unless it is Unset, in which case the default is
    returned. Falsey values like None, 0, "" or [] are preserved as-is.
    """
    return object if object is not Unset else default


def _immortalize(object):
    """copy of a sequence value; strings and scalars are returned as-is."""
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" on the instance and hands back a copy when it
    holds a sequence.

    Example
    - Given self._arguments, declare arguments = mirror("arguments").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


def basename(path, /):
    """text after the final '/' of `path` (the whole string when it has none)."""
    if not isinstance(path, str):
        raise TypeError("basename() argument must be a string")
    return path.rsplit("/", 1)[-1]


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Singleton, falsey, and distinct from None. Typical pattern:
value = coalesce(user_value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "mirror",
    "basename",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
