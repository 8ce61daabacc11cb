r"""
milcheck flag declarations.

Overview
- Flag: immutable declaration of one command-line flag.
  • identifier: caller-chosen stable name ("help"), distinct from the display strings.
  • short: single character for the "-x" form, or None.
  • long: name for the "--name" form (without dashes), or None.
  • takes_value: whether the flag accepts a value ("-n3", "--news=3", "--news 3").

- FlagTable: ordered registry of flags.
  • register(...) appends; registration order is lookup priority.
  • find_short(character) / find_long(name) are linear scans returning the first match.
  • Duplicated short characters or long names are accepted: the first registration wins
    and later ones are unreachable through lookups (a debug record is logged).

Tokens hold the Flag value itself, so a token stays meaningful after the table that
produced it is gone.

Quick example
    >>> table = FlagTable()
    >>> table.register("news", "n", "news", takes_value=True)
    Flag(identifier='news', short='n', long='news', takes_value=True)
    >>> table.find_long("news").takes_value
    True
"""
from dataclasses import dataclass

from .logs import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Flag:
    identifier: str
    short: str | None = None
    long: str | None = None
    takes_value: bool = False

    def __post_init__(self):
        if not isinstance(self.identifier, str) or not self.identifier:
            raise TypeError("flag identifier must be a non-empty string")
        if self.short is None and self.long is None:
            raise TypeError("flag %r must declare a short character or a long name" % self.identifier)
        if self.short is not None:
            if not isinstance(self.short, str) or len(self.short) != 1:
                raise TypeError("flag %r short form must be a single character" % self.identifier)
            if self.short == "-":
                raise ValueError("flag %r short form cannot be '-'" % self.identifier)
        if self.long is not None:
            if not isinstance(self.long, str) or not self.long:
                raise TypeError("flag %r long form must be a non-empty string" % self.identifier)
            if "=" in self.long or self.long.startswith("-"):
                raise ValueError("flag %r long form cannot contain '=' or start with '-'" % self.identifier)
        if not isinstance(self.takes_value, bool):
            raise TypeError("flag %r takes_value must be a boolean" % self.identifier)

    @property
    def names(self):
        """display spellings, short form first ("-n", "--news")."""
        names = []
        if self.short is not None:
            names.append("-" + self.short)
        if self.long is not None:
            names.append("--" + self.long)
        return tuple(names)

    def __rich_repr__(self):
        yield "identifier", self.identifier
        yield "short", self.short, None
        yield "long", self.long, None
        yield "takes_value", self.takes_value, False


class FlagTable:
    """
    Ordered registry of declared flags.

    The table is filled before parsing and only read afterwards. Lookups scan in
    registration order and return the first match, so an earlier registration
    always shadows a later duplicate.
    """

    def __init__(self, flags=()):
        self._flags = []
        for flag in flags:
            self.add(flag)

    def add(self, flag, /):
        if not isinstance(flag, Flag):
            raise TypeError("FlagTable.add() argument must be a flag")
        if flag.short is not None and self.find_short(flag.short) is not None:
            logger.debug("short form -%s of %r is shadowed by an earlier flag", flag.short, flag.identifier)
        if flag.long is not None and self.find_long(flag.long) is not None:
            logger.debug("long form --%s of %r is shadowed by an earlier flag", flag.long, flag.identifier)
        self._flags.append(flag)
        return flag

    def register(self, identifier, short=None, long=None, takes_value=False):
        return self.add(Flag(identifier, short, long, takes_value))

    def find_short(self, character, /):
        for flag in self._flags:
            if flag.short == character:
                return flag
        return None

    def find_long(self, name, /):
        for flag in self._flags:
            if flag.long == name:
                return flag
        return None

    def __iter__(self):
        return iter(tuple(self._flags))

    def __len__(self):
        return len(self._flags)

    def __contains__(self, flag):
        return flag in self._flags

    def __repr__(self):
        return "FlagTable(%r)" % (self._flags,)

    def __rich_repr__(self):
        yield from self._flags


__all__ = (
    "Flag",
    "FlagTable",
)
