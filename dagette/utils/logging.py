from __future__ import annotations
"""Logging helpers – the ``dagette`` logger plus an optional Rich handler.

dagette never touches the root logger.  Applications that want pretty output
call :func:`enable_rich_logging`; everything else goes through the standard
``logging`` configuration of the host program.  The logger level follows
``Settings.log_level`` from import time on.
"""
from logging import DEBUG, ERROR, INFO, WARNING, Handler, Logger, NullHandler, getLogger

from rich.console import Console
from rich.logging import RichHandler

from dagette.config import get_settings

__all__ = ["console", "log", "get", "enable_rich_logging", "disable_rich_logging"]

console = Console(stderr=True)

_LEVEL_MAP = {
    "info": INFO,
    "debug": DEBUG,
    "warning": WARNING,
    "error": ERROR,
}

log: Logger = getLogger("dagette")
log.addHandler(NullHandler())

_rich_handler: Handler | None = None


def get(level: str | None = None) -> Logger:  # noqa: D401
    """Return the dagette logger set to *level* (str, defaults to the settings)."""
    if level is None:
        level = get_settings().log_level
    lvl = _LEVEL_MAP.get(level.lower(), INFO)
    log.setLevel(lvl)
    return log


def enable_rich_logging(level: str | None = None) -> Logger:  # noqa: D401
    """Attach a :class:`rich.logging.RichHandler` to the dagette logger (once)."""
    global _rich_handler
    if _rich_handler is None:
        _rich_handler = RichHandler(console=console, rich_tracebacks=True, markup=False, show_path=False)
        log.addHandler(_rich_handler)
    return get(level)


def disable_rich_logging() -> None:  # noqa: D401
    """Detach the handler installed by :func:`enable_rich_logging`, if any."""
    global _rich_handler
    if _rich_handler is not None:
        log.removeHandler(_rich_handler)
        _rich_handler = None


get()
