"""
Log output for the server and the CLI.

Everything is written to stderr (or a caller-supplied stream): when the MCP
server runs over stdio, stdout carries the protocol and a stray log line would
corrupt it. The MCP SDK and httpx log through their own logger trees, which
are routed to the same handlers so their messages never reach stdout via the
root logger. Below DEBUG they are held at WARNING; at DEBUG they show their
per-request chatter too.
"""

import copy
import logging
import sys
from pathlib import Path
from typing import TextIO

from gmtools.config.settings import Settings

PACKAGE_LOGGER = "gmtools"
LIBRARY_LOGGERS = ("mcp", "httpx")

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name on a terminal."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color or record.levelname not in self.COLORS:
            return super().format(record)
        # The record is shared with the file handler, which must stay plain.
        colored = copy.copy(record)
        colored.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(colored)


def _console_handler(stream: TextIO) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    isatty = getattr(stream, "isatty", None)
    handler.setFormatter(
        ColoredFormatter(CONSOLE_FORMAT, DATE_FORMAT, use_color=bool(isatty and isatty()))
    )
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
    return handler


def setup_logging(settings: Settings, stream: TextIO | None = None) -> logging.Logger:
    """
    Route the package and library loggers to stderr and the optional log file.

    Safe to call more than once; each call replaces the handlers of the
    previous one.

    Args:
        settings: Application settings carrying the level and log file
        stream: Console stream, stderr when omitted

    Returns:
        The package logger
    """
    level = getattr(logging, settings.log_level)
    handlers = [_console_handler(stream if stream is not None else sys.stderr)]
    if settings.log_file:
        handlers.append(_file_handler(Path(settings.log_file)))

    library_level = level if level <= logging.DEBUG else max(level, logging.WARNING)
    levels = {PACKAGE_LOGGER: level, **{name: library_level for name in LIBRARY_LOGGERS}}

    for name, logger_level in levels.items():
        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        for handler in handlers:
            logger.addHandler(handler)
        logger.setLevel(logger_level)
        logger.propagate = False

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.info(f"Logging initialized - Level: {settings.log_level}")
    if settings.log_file:
        package_logger.info(f"Logging to file: {settings.log_file}")
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the package tree; module ``__name__`` values pass through."""
    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
