"""
Logging configuration for the Elasticsearch MCP server.

Every handler writes to stderr (or a file): stdout carries the MCP protocol
stream and must never receive log lines.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any

from pythonjsonlogger.json import JsonFormatter

STANDARD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER = "elastic_mcp"

# elastic_transport logs one INFO line per HTTP request
TRANSPORT_LOGGER = "elastic_transport"


def _make_formatter(structured: bool) -> logging.Formatter:
    if structured:
        return JsonFormatter(fmt=STRUCTURED_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)


def _package_configured(name: str) -> bool:
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        return False
    return bool(logging.getLogger(PACKAGE_LOGGER).handlers)


def setup_logging(
    name: str | None = None,
    level: str | None = None,
    structured: bool = False,
    log_file: Path | None = None
) -> logging.Logger:
    """Return a module logger with its own stderr handler.

    Loggers that already have handlers are returned untouched, so calling
    this at import time in every module is safe. Once the package logger
    has been configured by ``configure_root_logging``, package module
    loggers get no handler of their own and propagate to it.

    Args:
        name: Logger name, usually ``__name__``
        level: Optional level name; the logger inherits its level otherwise
        structured: Emit JSON lines instead of plain text
        log_file: Also write to this file
    """
    logger = logging.getLogger(name or PACKAGE_LOGGER)
    if logger.handlers:
        return logger

    if level is not None:
        logger.setLevel(getattr(logging, level.upper()))

    if _package_configured(logger.name):
        return logger

    formatter = _make_formatter(structured)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def build_logging_config(
    level: str = "INFO",
    structured: bool = False,
    log_file: Path | None = None
) -> dict[str, Any]:
    """Build the ``dictConfig`` mapping used by ``configure_root_logging``."""
    formatter = "structured" if structured else "standard"
    handler_names = ["console"]
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": formatter,
            "stream": "ext://sys.stderr",
        }
    }
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": level,
            "formatter": formatter,
            "filename": str(log_file),
        }
        handler_names.append("file")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": STANDARD_FORMAT, "datefmt": DATE_FORMAT},
            "structured": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": STRUCTURED_FORMAT,
                "datefmt": DATE_FORMAT,
            },
        },
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handler_names)},
        "loggers": {
            # dictConfig strips the handlers of existing module loggers, so
            # their records reach stderr through this logger.
            PACKAGE_LOGGER: {
                "level": level,
                "handlers": list(handler_names),
                "propagate": False,
            },
            TRANSPORT_LOGGER: {
                "level": "DEBUG" if level == "DEBUG" else "WARNING",
            },
        },
    }


def configure_root_logging(
    level: str = "INFO",
    structured: bool = False,
    log_file: Path | None = None
) -> None:
    """Configure logging for the whole server process.

    Args:
        level: Level for the root and package loggers
        structured: Enable JSON structured logging
        log_file: Optional log file path
    """
    logging.config.dictConfig(build_logging_config(level, structured, log_file))


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
