r"""
milcheck parser facade.

What this module provides
- Parser: owns a FlagTable and the captured argument vector, derives the displayed
  binary name, and turns the arguments into tokens (tokenize, then normalize).

Lifecycle
- Build the parser (it copies the argument vector right away, so one-shot iterators
  are fine), register flags with the chaining builders, then call parse().
- parse() has no side effects: calling it again yields an equal token list.

Failure semantics
- parse() never raises. Unknown flags and stray positionals come back as tokens
  (UnknownLongFlag, UnknownShortFlag, Argument); deciding what is a usage error is
  the caller's job (see milcheck.cli).

Quick start
    >>> parser = Parser(["/usr/bin/milcheck", "-hn", "5"])
    >>> tokens = parser.help().version().license().news().parse()
    >>> parser.binary_name()
    'milcheck'
"""
import logging
import sys
from collections.abc import Iterable

from rich.pretty import pretty_repr

from .flags import FlagTable
from .logs import get_logger
from .normalizer import normalize
from .tokenizer import tokenize
from .utils import Unset, mirror, basename

logger = get_logger(__name__)

# Displayed name when the argument vector is empty
PROGRAM = __name__.partition(".")[0]


class Parser:
    """
    Command-line parser over a captured argument vector.

    Parameters
    - argv:
      • Unset or None: capture sys.argv.
      • Iterable[str]: full argument vector, program path first.

    Raises
    - TypeError: when argv is not an iterable of strings.
    """

    arguments = mirror("arguments")

    def __init__(self, argv=Unset, /):
        if argv is Unset or argv is None:
            argv = sys.argv
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("Parser() argument must be an iterable of strings")

        argv = list(argv)
        if not all(isinstance(item, str) for item in argv):
            raise TypeError("Parser() argument must be an iterable of strings")

        self._binary = basename(argv[0]) if argv else PROGRAM
        self._arguments = argv[1:]
        self._flags = FlagTable()

    @property
    def flags(self):
        return self._flags

    def binary_name(self):
        return self._binary

    def flag(self, identifier, short=None, long=None, takes_value=False):
        self._flags.register(identifier, short, long, takes_value)
        return self

    def help(self):
        return self.flag("help", "h", "help")

    def version(self):
        return self.flag("version", "v", "version")

    def license(self):
        return self.flag("license", "L", "license")

    def news(self):
        return self.flag("news", "n", "news", True)

    def debug(self):
        return self.flag("debug", "d", "debug")

    def parse(self):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("parsing %r against %s", self._arguments, pretty_repr(self._flags))
        tokens = normalize(tokenize(self._arguments, self._flags))
        logger.debug("parsed %d argument(s) into %d token(s)", len(self._arguments), len(tokens))
        return tokens

    def __repr__(self):
        return "Parser(binary=%r, arguments=%r, flags=%d)" % (self._binary, self._arguments, len(self._flags))


__all__ = (
    "Parser",
    "PROGRAM",
)
