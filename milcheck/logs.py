"""
milcheck logging setup.

All package loggers live under the "milcheck" namespace. A single rich handler
writing to stderr is attached to the namespace root the first time a logger is
requested; records do not propagate to the host application's root logger.

Usage
    >>> logger = get_logger(__name__)
    >>> logger.debug("registered %d flags", 4)

The level defaults to WARNING so the parser stays silent; set_level() (driven by
--debug or MILCHECK_DEBUG) switches the whole namespace at once.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT = "milcheck"

handler = RichHandler(
    console=Console(stderr=True),
    show_path=False,
    rich_tracebacks=True,
)
handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))


def _root():
    logger = logging.getLogger(ROOT)
    if handler not in logger.handlers:
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """return a logger below the package namespace, installing the handler once."""
    _root()
    if name != ROOT and not name.startswith(ROOT + "."):
        name = ROOT + "." + name
    return logging.getLogger(name)


def set_level(level: int | str) -> None:
    _root().setLevel(level)


__all__ = (
    "get_logger",
    "set_level",
)
