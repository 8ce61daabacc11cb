"""
milcheck faults (usage and runtime errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing failure.
  Codes are grouped by domain so logs and searches stay predictable.
- MilcheckError: base exception carrying a message plus read-only options, and
  knowing how to render itself with rich in a short, actionable way.
  • UsageError family: produced by the command-line interpreter from the token
    stream (the parser itself never raises).
  • RuntimeFault family: produced by the mirror/news collaborators (file, network,
    scraping, decoding, environment settings).
- report(): print any fault to stderr and return the conventional exit status.

UX goals
- Short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling; plain text when colors are off.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - usage (111xx/112xx)
      • UNRECOGNIZED_LONG_FLAG, UNRECOGNIZED_SHORT_FLAG, INVALID_VALUE
      • UNEXPECTED_ARGUMENT
    - runtime (13xxx)
      • MIRRORLIST_UNREADABLE, MIRRORLIST_EMPTY
      • FETCH_FAILED, DECODING_FAILED
      • SCRAPING_FAILED
      • INVALID_SETTING

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- usage errors (11xxx) ---
    UNRECOGNIZED_LONG_FLAG      = 11111
    UNRECOGNIZED_SHORT_FLAG     = 11112
    INVALID_VALUE               = 11124
    UNEXPECTED_ARGUMENT         = 11121

    # --- runtime errors (13xxx) ---
    MIRRORLIST_UNREADABLE       = 13101
    MIRRORLIST_EMPTY            = 13102
    FETCH_FAILED                = 13111
    DECODING_FAILED             = 13112
    SCRAPING_FAILED             = 13121
    INVALID_SETTING             = 13131


class MilcheckError(Exception):
    """
    base of every milcheck fault.

    parameters
    - message: one-sentence, lowercased description.
    - code / title / hint: override the class defaults.
    - **options: extra context kept read-only (binary, input, url, path, ...).

    exit_status is the process status a caller should exit with.
    """
    code = Unset
    title = "error"
    hint = ""
    exit_status = 1

    def __init__(self, message, /, *, code=Unset, title=Unset, hint=Unset, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.code = coalesce(code, type(self).code)
        self.title = coalesce(title, type(self).title)
        self.hint = coalesce(hint, type(self).hint)
        self.options = MappingProxyType(options)

    def replace(self, **overrides):
        """return a copy of this fault with some fields or options overridden."""
        fields = {"code": self.code, "title": self.title, "hint": self.hint, **self.options}
        return type(self)(self.message, **{**fields, **overrides})

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ",
            text(self.options.get("binary", "milcheck"), "prog-name"),
            " — ",
            text(str(int(self.code)) if self.code is not Unset else "", "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        renders = [header, text(self.message, "error-message")]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))
        return Group(*renders)


class UsageError(MilcheckError):
    title = "usage error"


class UnrecognizedLongFlagError(UsageError):
    code = FaultCode.UNRECOGNIZED_LONG_FLAG
    title = "unknown option"


class UnrecognizedShortFlagError(UsageError):
    code = FaultCode.UNRECOGNIZED_SHORT_FLAG
    title = "unknown option"


class UnexpectedArgumentError(UsageError):
    code = FaultCode.UNEXPECTED_ARGUMENT
    title = "unexpected argument"


class InvalidValueError(UsageError):
    code = FaultCode.INVALID_VALUE
    title = "invalid value"


class RuntimeFault(MilcheckError):
    title = "runtime error"


class MirrorlistError(RuntimeFault):
    code = FaultCode.MIRRORLIST_UNREADABLE
    title = "mirrorlist error"


class FetchError(RuntimeFault):
    code = FaultCode.FETCH_FAILED
    title = "request failed"
    hint = "check your network connection and try again"


class DecodingError(RuntimeFault):
    code = FaultCode.DECODING_FAILED
    title = "bad response"


class ScrapingError(RuntimeFault):
    code = FaultCode.SCRAPING_FAILED
    title = "web scraping failed"
    hint = "the page layout may have changed"


class ConfigurationError(RuntimeFault):
    code = FaultCode.INVALID_SETTING
    title = "configuration error"
    hint = "check the MILCHECK_* environment variables"


def report(fault, /, console=console, **options):
    """
    print a fault to the given console (stderr by default) and return its exit status.

    options are merged into the fault before rendering (binary, colorful, ...).
    """
    if not isinstance(fault, MilcheckError):
        raise TypeError("report() argument must be a milcheck fault")
    if options:
        fault = fault.replace(**options)
    console.print(fault)
    return fault.exit_status


__all__ = (
    "FaultCode",
    "MilcheckError",
    "UsageError",
    "UnrecognizedLongFlagError",
    "UnrecognizedShortFlagError",
    "UnexpectedArgumentError",
    "InvalidValueError",
    "RuntimeFault",
    "MirrorlistError",
    "FetchError",
    "DecodingError",
    "ScrapingError",
    "ConfigurationError",
    "report",
)
