from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import IO, Optional

from rich.logging import RichHandler

PACKAGE_LOGGER = "marktree"


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    no_color: bool = False

    @classmethod
    def from_settings(cls, settings) -> "LogConfig":
        return cls(level=settings.log_level, no_color=settings.no_color)


def _wants_rich(no_color: bool, stream: IO) -> bool:
    if no_color or os.getenv("NO_COLOR") is not None:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def setup_logging(cfg: LogConfig, stream: Optional[IO] = None) -> logging.Handler:
    """Attach one handler to the ``marktree`` logger and return it.

    Only the package logger is touched, so an application embedding the
    manager keeps its own root configuration. Calling this again replaces
    the previous handler.
    """
    stream = stream if stream is not None else sys.stderr
    level = logging.getLevelName(cfg.level.upper())
    unknown = not isinstance(level, int)
    if unknown:
        level = logging.INFO

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)

    if _wants_rich(cfg.no_color, stream):
        # Titles often carry [brackets]; never read them as rich markup.
        handler: logging.Handler = RichHandler(
            rich_tracebacks=True, show_time=False, show_level=True, show_path=False, markup=False
        )
        fmt = "%(message)s"
    else:
        handler = logging.StreamHandler(stream)
        fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    if unknown:
        logger.warning("Unknown log level %r, using INFO.", cfg.level)
    return handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
