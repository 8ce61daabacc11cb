"""
milcheck token types.

A parsed command line is a list of tokens, each one of:
- Argument(text): a literal positional argument, kept verbatim.
- Option(flag, value): a recognized flag; value is None when no value was supplied.
- UnknownLongFlag(name): a "--name" spelling that matches no declared flag.
- UnknownShortFlag(character): a short character that matches no declared flag.

Tokens are immutable, compare by type and value, and work with structural pattern
matching:

    match token:
        case Option(flag, value) if flag.identifier == "news": ...
        case UnknownShortFlag(character): ...
"""
from dataclasses import dataclass

from .flags import Flag


class Token:
    """common base of every token variant."""
    __slots__ = ()


@dataclass(frozen=True, slots=True)
class Argument(Token):
    text: str


@dataclass(frozen=True, slots=True)
class Option(Token):
    flag: Flag
    value: str | None = None

    @property
    def identifier(self):
        return self.flag.identifier


@dataclass(frozen=True, slots=True)
class UnknownLongFlag(Token):
    name: str

    def __str__(self):
        return "--" + self.name


@dataclass(frozen=True, slots=True)
class UnknownShortFlag(Token):
    character: str

    def __str__(self):
        return "-" + self.character


__all__ = (
    "Token",
    "Argument",
    "Option",
    "UnknownLongFlag",
    "UnknownShortFlag",
)
