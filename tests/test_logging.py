import logging

import anyio
from rich.logging import RichHandler

from dagette import run, task
from dagette.utils.logging import disable_rich_logging, enable_rich_logging, get, log


def test_logger_levels():
    logger = get("debug")
    assert logger.level == 10  # DEBUG
    logger = get("error")
    assert logger.level == 40  # ERROR


def test_enable_rich_logging_installs_handler_once():
    enable_rich_logging("info")
    enable_rich_logging("info")
    rich_handlers = [h for h in log.handlers if isinstance(h, RichHandler)]
    assert len(rich_handlers) == 1
    assert log.level == logging.INFO


def test_captured_exception_is_logged(caplog):
    def explode(h):
        raise ValueError("kaboom")

    get("debug")
    with caplog.at_level(logging.WARNING, logger="dagette"):
        anyio.run(run, task("explode", [], explode))
    assert any("explode" in rec.getMessage() and rec.levelno == logging.WARNING for rec in caplog.records)


def test_default_level_follows_settings(monkeypatch):
    import dagette.config as config

    assert get().level == logging.WARNING
    monkeypatch.setattr(config, "_SETTINGS", config.Settings(log_level="error"))
    assert get().level == logging.ERROR


def test_disable_rich_logging_detaches_handler():
    enable_rich_logging("debug")
    disable_rich_logging()
    disable_rich_logging()  # no-op when nothing is attached
    assert not any(isinstance(h, RichHandler) for h in log.handlers)
