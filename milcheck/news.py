r"""
milcheck news: latest Arch Linux news from the front page.

The front page keeps its news block in a `#news` container whose direct children
are, per article:

    <h4><a href="/news/...">title</a></h4>
    <p class="timestamp">2024-01-01</p>
    <div class="article-content">...</div>

parse_news() walks that block with html.parser and returns Article values; links
inside an article body become numbered references listed after the text.
render_news() builds the rich view printed by `milcheck --news`.
"""
import re
from dataclasses import dataclass
from html.parser import HTMLParser
from urllib.parse import urljoin

from rich.console import Group
from rich.text import Text

from .faults import ScrapingError
from .logs import get_logger

logger = get_logger(__name__)

# https://tachyons.io/docs/typography/measure/
LINE_LENGTH = 66

VOID = {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
BLOCKS = {"p", "div", "ul", "ol", "pre", "blockquote", "h1", "h2", "h3", "h4", "h5", "h6", "table", "tr"}
MARKS = {"em": "_", "i": "_", "strong": "*", "b": "*", "code": "`", "del": "~", "s": "~"}


@dataclass(frozen=True)
class Article:
    title: str
    link: str
    date: str
    content: str


class _NewsParser(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.stack = []  # (tag, role)
        self.depth = None  # stack index of the #news container
        self.titles = []
        self.dates = []
        self.contents = []
        self.buffer = []
        self.references = []
        self.href = None

    def _role(self):
        for tag, role in reversed(self.stack):
            if role in ("title", "timestamp", "content"):
                return role
        return None

    def _direct_child(self):
        return self.depth is not None and len(self.stack) == self.depth + 1

    def handle_starttag(self, tag, attrs):
        attrs = dict(attrs)
        classes = (attrs.get("class") or "").split()

        if tag in VOID:
            if tag == "br" and self._role() == "content":
                self.buffer.append("\n")
            return

        role = None
        if self.depth is None and attrs.get("id") == "news":
            role = "news"
            self.depth = len(self.stack)
        elif self._direct_child():
            if tag == "h4":
                role = "heading"
            elif "timestamp" in classes:
                role = "timestamp"
            elif "article-content" in classes:
                role = "content"
        elif self.depth is not None and tag == "a" and self.stack and self.stack[-1][1] == "heading":
            role = "title"
            self.href = attrs.get("href") or ""

        if role in ("title", "timestamp", "content"):
            self.buffer = []
            self.references = []
        elif self._role() == "content":
            if tag in BLOCKS:
                self.buffer.append("\n\n")
            elif tag == "li":
                self.buffer.append("\n* ")
            elif tag == "a":
                self.href = attrs.get("href")
            elif tag in MARKS:
                self.buffer.append(MARKS[tag])

        self.stack.append((tag, role))

    def handle_endtag(self, tag):
        if tag in VOID or not any(item == tag for item, _ in self.stack):
            return
        while self.stack:
            item, role = self.stack.pop()
            self._close(item, role)
            if item == tag:
                break

    def _close(self, tag, role):
        text = "".join(self.buffer)
        match role:
            case "news":
                self.depth = None
            case "title":
                self.titles.append((" ".join(text.split()), self.href))
                self.href = None
            case "timestamp":
                self.dates.append(" ".join(text.split()))
            case "content":
                self.contents.append(_tidy(text, self.references))
            case _ if self._role() == "content":
                if tag == "a" and self.href:
                    self.references.append(self.href)
                    self.buffer.append("[%d]" % len(self.references))
                    self.href = None
                elif tag in MARKS:
                    self.buffer.append(MARKS[tag])
                elif tag in BLOCKS:
                    self.buffer.append("\n\n")

    def handle_data(self, data):
        if self._role() is None:
            return
        if any(tag == "pre" for tag, _ in self.stack):
            self.buffer.append(data)
        else:
            self.buffer.append(re.sub(r"\s+", " ", data))


def _tidy(text, references):
    lines = [line.strip() for line in text.split("\n")]
    text = re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()
    if references:
        text += "\n\n" + "\n".join("[%d] %s" % (index, url) for index, url in enumerate(references, 1))
    return text


def parse_news(html, base_url, count=None):
    """
    extract the news articles of the front page.

    parameters
    - html: front page markup.
    - base_url: site root used to absolutize article links.
    - count: maximum number of articles to return (all when None).

    raises
    - ScrapingError when no news block is found or titles, dates and bodies
      do not line up.
    """
    parser = _NewsParser()
    parser.feed(html)
    parser.close()

    titles, dates, contents = parser.titles, parser.dates, parser.contents
    if not titles or not len(titles) == len(dates) == len(contents):
        raise ScrapingError(
            "failed to parse news data (%d titles, %d dates, %d bodies)" % (len(titles), len(dates), len(contents))
        )
    logger.debug("found %d news article(s)", len(titles))

    articles = [
        Article(title=title, link=urljoin(base_url.rstrip("/") + "/", href or ""), date=date, content=content)
        for (title, href), date, content in zip(titles, dates, contents)
    ]
    return articles if count is None else articles[:count]


def render_news(articles, base_url):
    renders = [
        Text("Latest News", "bold yellow"),
        Text(base_url.rstrip("/") + "/news", "underline blue"),
    ]
    for article in articles:
        renders.extend((
            Text(""),
            Text.assemble((article.date, "italic magenta"), " ", (article.title, "bold green")),
            Text(article.link, "underline blue"),
            Text(""),
            Text(article.content),
        ))
    return Group(*renders)


__all__ = (
    "Article",
    "LINE_LENGTH",
    "parse_news",
    "render_news",
)
