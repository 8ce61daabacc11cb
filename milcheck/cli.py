"""
milcheck command-line entry point.

What this module provides
- interpret(tokens): read the parser's token stream left to right and decide what
  to do (an Invocation), or raise the first usage error found.
  • help / version / license win as soon as they are reached.
  • unknown flags and positionals are usage errors.
  • --news[=N] selects the news view; N must be a positive integer (default 3).
  • --debug turns on debug logging.
- render_help(binary): rich usage screen.
- main(argv): build the parser and interpret its tokens; help, version and license
  are answered before settings are loaded, the other views run with them. Returns
  the exit status (0 on success, 1 for usage, configuration and runtime errors).
"""
import logging
from dataclasses import dataclass

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from . import __title__, __version__, __author__, __description__
from .config import DEFAULT_NEWS_COUNT, load_settings
from .faults import (
    MilcheckError,
    ConfigurationError,
    UnrecognizedLongFlagError,
    UnrecognizedShortFlagError,
    UnexpectedArgumentError,
    InvalidValueError,
    report,
)
from .logs import get_logger, set_level
from .mirrors import read_mirrorlist, decode_status, split_status_tables, classify, render_status
from .news import LINE_LENGTH, parse_news, render_news
from .parser import Parser
from .tokens import Argument, Option, UnknownLongFlag, UnknownShortFlag
from .utils import Unset
from .web import fetch, fetch_all

logger = get_logger(__name__)

LICENSE = "Mozilla Public License, v2.0"

DESCRIPTIONS = {
    "help": "Prints this message",
    "version": "Prints version information",
    "license": "Prints license information",
    "news": "Prints the N latest Arch Linux news (default %d)" % DEFAULT_NEWS_COUNT,
    "debug": "Prints debug information on stderr",
}


@dataclass(frozen=True)
class Invocation:
    action: str
    count: int | None = None
    debug: bool = False


def _count(value, binary):
    if value is None:
        return DEFAULT_NEWS_COUNT
    try:
        count = int(value)
    except ValueError:
        count = 0
    if count < 1:
        raise InvalidValueError(
            "invalid news count %r, expected a positive integer" % value,
            hint="try '%s --news=%d'" % (binary, DEFAULT_NEWS_COUNT),
            input=value,
        )
    return count


def interpret(tokens, binary=__title__):
    count = None
    debug = False
    for token in tokens:
        match token:
            case Option(flag, value) if flag.identifier in ("help", "version", "license"):
                return Invocation(flag.identifier, debug=debug)
            case Option(flag, value) if flag.identifier == "news":
                count = _count(value, binary)
            case Option(flag, value) if flag.identifier == "debug":
                debug = True
            case Option(flag, value):
                logger.debug("ignoring flag %r without a handler", flag.identifier)
            case UnknownLongFlag(name):
                raise UnrecognizedLongFlagError(
                    "unknown option \"--%s\"" % name,
                    hint="run '%s --help' to see all options" % binary,
                    input=name,
                )
            case UnknownShortFlag(character):
                raise UnrecognizedShortFlagError(
                    "unknown option \"-%s\"" % character,
                    hint="run '%s --help' to see all options" % binary,
                    input=character,
                )
            case Argument(text):
                raise UnexpectedArgumentError(
                    "unexpected argument \"%s\"" % text,
                    hint="run '%s --help' for usage" % binary,
                    input=text,
                )
    if count is not None:
        return Invocation("news", count=count, debug=debug)
    return Invocation("status", debug=debug)


def render_help(binary, flags):
    rows = Table.grid(padding=(0, 2))
    rows.add_column(no_wrap=True)
    rows.add_column()
    for flag in flags:
        names = ", ".join(flag.names)
        if flag.takes_value:
            names += "[=N]" if flag.long else " N"
        rows.add_row(Text(names, "bold cyan"), DESCRIPTIONS.get(flag.identifier, ""))

    return Group(
        Text.assemble((__title__, "bold magenta"), " ", (__version__, "bold cyan")),
        Text(__author__),
        Text(__description__, "italic"),
        Text(""),
        Text("USAGE:", "bold"),
        Text.assemble("    ", (binary, "bold"), " [FLAGS]"),
        Text(""),
        Text("FLAGS:", "bold"),
        rows,
    )


def _status(settings, console):
    with console.status("parsing local mirrorlist") as status:
        servers = read_mirrorlist(settings.mirrorlist)
        status.update("fetching mirror status list")
        html, document = fetch_all((settings.status_url, settings.status_json_url), settings.timeout)
        status.update("deserialize json data")
        mirrors = decode_status(document)
        status.update("web scraping")
        out_of_sync = split_status_tables(html)
        status.update("build data for rendering")
        states = classify(servers, mirrors, out_of_sync)
    console.print(render_status(states, settings.truecolor))
    console.print()


def _news(settings, count, console):
    with console.status("fetching news"):
        html = fetch(settings.news_url + "/", settings.timeout)
        articles = parse_news(html, settings.news_url, count)
    console.print(render_news(articles, settings.news_url), width=min(console.width, LINE_LENGTH))


def main(argv=Unset, /, *, stdout=None, stderr=None, environ=None):
    stdout = stdout or Console()
    stderr = stderr or Console(stderr=True)

    parser = Parser(argv).help().version().license().news().debug()
    binary = parser.binary_name()

    try:
        invocation = interpret(parser.parse(), binary)
    except MilcheckError as fault:
        return report(fault, stderr, binary=binary)

    if invocation.debug:
        set_level(logging.DEBUG)

    match invocation.action:
        case "help":
            stdout.print(render_help(binary, parser.flags))
            return 0
        case "version":
            stdout.print("%s %s" % (__title__, __version__), highlight=False)
            return 0
        case "license":
            stdout.print(LICENSE, highlight=False)
            return 0

    try:
        settings = load_settings(environ)
    except ValueError as exception:
        return report(ConfigurationError(str(exception)), stderr, binary=binary)

    if settings.debug:
        set_level(logging.DEBUG)
    logger.debug("running %r with %r", invocation, settings)

    try:
        if invocation.action == "news":
            _news(settings, invocation.count, stdout)
        else:
            _status(settings, stdout)
    except MilcheckError as fault:
        return report(fault, stderr, binary=binary)
    except KeyboardInterrupt:
        return 1
    return 0


__all__ = (
    "Invocation",
    "interpret",
    "render_help",
    "main",
)
