import io
import logging

import pytest
from rich.logging import RichHandler

from marktree.config import Settings
from marktree.log import PACKAGE_LOGGER, LogConfig, get_logger, setup_logging


class _Tty(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_plain_handler_writes_module_records():
    out = io.StringIO()
    setup_logging(LogConfig(level="DEBUG"), out)
    get_logger("marktree.manager").info("Added folder 'Dev'.")
    assert "INFO marktree.manager: Added folder 'Dev'." in out.getvalue()


def test_level_filters_records():
    out = io.StringIO()
    setup_logging(LogConfig(level="warning"), out)
    log = get_logger("marktree.permissions")
    log.info("granted")
    log.warning("Unknown bookmark capability ignored: x")
    text = out.getvalue()
    assert "granted" not in text
    assert "Unknown bookmark capability ignored: x" in text


def test_repeated_setup_replaces_handler():
    first = setup_logging(LogConfig(), io.StringIO())
    second = setup_logging(LogConfig(), io.StringIO())
    assert logging.getLogger(PACKAGE_LOGGER).handlers == [second]
    assert first is not second


def test_root_logger_is_left_alone():
    root = logging.getLogger()
    before = list(root.handlers)
    setup_logging(LogConfig(), io.StringIO())
    assert root.handlers == before
    assert logging.getLogger(PACKAGE_LOGGER).propagate is False


def test_unknown_level_falls_back_to_info():
    out = io.StringIO()
    setup_logging(LogConfig(level="chatty"), out)
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO
    assert "Unknown log level 'chatty'" in out.getvalue()


def test_rich_only_on_tty_with_colour(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert isinstance(setup_logging(LogConfig(), _Tty()), RichHandler)
    assert not isinstance(setup_logging(LogConfig(no_color=True), _Tty()), RichHandler)
    assert not isinstance(setup_logging(LogConfig(), io.StringIO()), RichHandler)

    monkeypatch.setenv("NO_COLOR", "1")
    assert not isinstance(setup_logging(LogConfig(), _Tty()), RichHandler)


def test_config_from_settings():
    cfg = LogConfig.from_settings(Settings(log_level="DEBUG", no_color=True))
    assert cfg == LogConfig(level="DEBUG", no_color=True)
