r"""
milcheck mirrors: local mirrorlist vs. the Arch Linux mirror status.

Overview
- parse_mirrorlist(text) / read_mirrorlist(path)
  • Server base URLs from "Server = " lines, with the "$repo/os/$arch" tail removed
    (the trailing '/' is kept so URLs line up with the status JSON).
- Mirror
  • One row of the status JSON, converted for display (completion in percent,
    delay as hours and minutes).
- NotFound / Synced / OutOfSync
  • Sync state of one configured server.
- split_status_tables(html)
  • The status page carries an out-of-sync table followed by a successful table;
    anything else means the page layout changed.
- classify(servers, mirrors, out_of_sync)
  • One state per server, in mirrorlist order, one worker per server.
- render_status(states, truecolor)
  • rich Table with per-cell warning colors.
"""
import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from rich.table import Table
from rich.text import Text

from .faults import FaultCode, MirrorlistError, DecodingError, ScrapingError
from .logs import get_logger

logger = get_logger(__name__)

SERVER_PREFIX = "Server = "
ARCH_SUFFIXES = ("/$repo/os/$arch", "/$repo/os/$arch/")
OUT_OF_SYNC_TABLE = '<table id="outofsync_mirrors"'
IN_SYNC_TABLE = '<table id="successful_mirrors"'

OK = "Ok"
NOT_FOUND = "Not found!"
OUT_OF_SYNC = "Out of sync!"
HEADERS = (
    "State",
    "Url",
    "Protocol",
    "Country",
    "Completion %",
    "Delay h:m",
    "Avg dur s",
    "Dev dur s",
    "Score",
)

PALETTES = {
    True: {"green": "rgb(129,199,132)", "red": "rgb(229,115,115)", "orange": "rgb(255,183,77)"},
    False: {"green": "color(2)", "red": "color(1)", "orange": "color(208)"},
}


def parse_mirrorlist(text, /, path="mirrorlist"):
    servers = []
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith(SERVER_PREFIX):
            continue
        server = line[len(SERVER_PREFIX):]
        for suffix in ARCH_SUFFIXES:
            if server.endswith(suffix):
                server = server[:len(server) - len(suffix) + 1]
                break
        servers.append(server)
    if not servers:
        raise MirrorlistError(
            "no server found in %s" % path,
            code=FaultCode.MIRRORLIST_EMPTY,
            hint="add at least one 'Server = ...' line to %s" % path,
            path=path,
        )
    logger.debug("found %d server(s) in %s", len(servers), path)
    return servers


def read_mirrorlist(path):
    try:
        with open(path, encoding="utf-8") as file:
            text = file.read()
    except OSError as exception:
        raise MirrorlistError(
            "an error occurred while reading the file %s: %s" % (path, exception.strerror or exception),
            code=FaultCode.MIRRORLIST_UNREADABLE,
            path=path,
        ) from exception
    return parse_mirrorlist(text, path=path)


@dataclass(frozen=True)
class Mirror:
    url: str
    protocol: str
    country: str
    completion: float | None = None
    delay: tuple[int, int] | None = None
    duration_avg: float | None = None
    duration_stddev: float | None = None
    score: float | None = None

    @classmethod
    def from_json(cls, entry):
        completion = entry.get("completion_pct")
        delay = entry.get("delay")
        if delay is not None:
            hours = delay / 3600
            delay = (int(hours), int((hours - int(hours)) * 60))
        return cls(
            url=entry["url"],
            protocol=entry.get("protocol") or "",
            country=entry.get("country") or "",
            completion=completion * 100 if completion is not None else None,
            delay=delay,
            duration_avg=entry.get("duration_avg"),
            duration_stddev=entry.get("duration_stddev"),
            score=entry.get("score"),
        )

    def completion_text(self):
        if self.completion is None:
            return ""
        if self.completion == 100:
            return "%.0f" % self.completion
        return "%.1f" % self.completion

    def delay_text(self):
        if self.delay is None:
            return ""
        return "%d:%02d" % self.delay

    def duration_avg_text(self):
        return "" if self.duration_avg is None else "%.2f" % self.duration_avg

    def duration_stddev_text(self):
        return "" if self.duration_stddev is None else "%.2f" % self.duration_stddev

    def score_text(self):
        return "" if self.score is None else "%.1f" % self.score


@dataclass(frozen=True)
class NotFound:
    server: str


@dataclass(frozen=True)
class Synced:
    mirror: Mirror


@dataclass(frozen=True)
class OutOfSync:
    mirror: Mirror


def decode_status(text):
    """parse the status JSON document into Mirror rows."""
    try:
        document = json.loads(text)
        return [Mirror.from_json(entry) for entry in document["urls"]]
    except (ValueError, KeyError, TypeError) as exception:
        raise DecodingError("json response parsing failed: %s" % exception) from exception


def split_status_tables(html):
    """return the out-of-sync table markup of the status page."""
    parts = html.split("</table>")
    if len(parts) != 4 or OUT_OF_SYNC_TABLE not in parts[0] or IN_SYNC_TABLE not in parts[1]:
        raise ScrapingError("web scraping failed: unexpected layout of the mirror status page")
    return parts[0]


def _state(server, mirrors, out_of_sync):
    for mirror in mirrors:
        if mirror.url == server:
            return OutOfSync(mirror) if server in out_of_sync else Synced(mirror)
    return NotFound(server)


def classify(servers, mirrors, out_of_sync):
    servers = list(servers)
    if not servers:
        return []
    with ThreadPoolExecutor(max_workers=len(servers), thread_name_prefix="milcheck-mirror") as pool:
        return list(pool.map(lambda server: _state(server, mirrors, out_of_sync), servers))


def _completion_color(mirror, palette):
    if mirror.completion is None:
        return ""
    if 95 <= mirror.completion < 100:
        return palette["orange"]
    if mirror.completion < 95:
        return palette["red"]
    return ""


def _delay_color(mirror, palette):
    if mirror.delay is None:
        return ""
    hours, minutes = mirror.delay
    if hours > 1:
        return palette["red"]
    if minutes > 30:
        return palette["orange"]
    return ""


def _score_color(mirror, palette):
    if mirror.score is None:
        return ""
    if mirror.score > 2:
        return palette["red"]
    if mirror.score > 1:
        return palette["orange"]
    return ""


def render_status(states, truecolor=False):
    palette = PALETTES[bool(truecolor)]

    table = Table(box=None, show_edge=False, pad_edge=False, header_style="bold")
    for index, header in enumerate(HEADERS):
        table.add_column(header, justify="left" if 1 <= index <= 3 else "right", no_wrap=True)

    for state in states:
        match state:
            case NotFound(server):
                table.add_row(Text(NOT_FOUND, "bold " + palette["orange"]), server)
            case Synced(mirror) | OutOfSync(mirror):
                label, color = (OK, palette["green"]) if isinstance(state, Synced) else (OUT_OF_SYNC, palette["red"])
                table.add_row(
                    Text(label, "bold " + color),
                    mirror.url,
                    mirror.protocol,
                    mirror.country,
                    Text(mirror.completion_text(), _completion_color(mirror, palette)),
                    Text(mirror.delay_text(), _delay_color(mirror, palette)),
                    mirror.duration_avg_text(),
                    mirror.duration_stddev_text(),
                    Text(mirror.score_text(), _score_color(mirror, palette)),
                )
            case _:
                raise TypeError("render_status() states must be NotFound, Synced or OutOfSync")
    return table


__all__ = (
    "Mirror",
    "NotFound",
    "Synced",
    "OutOfSync",
    "parse_mirrorlist",
    "read_mirrorlist",
    "decode_status",
    "split_status_tables",
    "classify",
    "render_status",
)
