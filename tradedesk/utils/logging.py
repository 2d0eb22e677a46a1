"""Structured logging configuration using loguru."""

import logging
import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Library loggers routed through loguru, with the floor level for each.
# The scheduler executor logs every 1s tick at INFO.
LIBRARY_LOG_LEVELS: dict[str, int] = {
    "apscheduler.scheduler": logging.INFO,
    "apscheduler.executors.default": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
}


class InterceptHandler(logging.Handler):
    """Forward stdlib log records (apscheduler, sqlalchemy, aiosqlite) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that issued the logging call
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """Make loguru the only log sink.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: Emit serialized JSON records instead of colored lines.
    """
    logger.remove()

    sink_options = {"level": log_level.upper()}
    if json_output:
        sink_options["serialize"] = True
    else:
        sink_options.update(format=CONSOLE_FORMAT, colorize=True)
    logger.add(sys.stderr, **sink_options)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name, level in LIBRARY_LOG_LEVELS.items():
        lib_logger = logging.getLogger(name)
        lib_logger.handlers = [InterceptHandler()]
        lib_logger.propagate = False
        lib_logger.setLevel(level)
