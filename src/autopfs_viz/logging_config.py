"""Centralized loguru configuration for autopfs-viz.

Provides:
- Console and file sinks with rotation
- Standard logging interception for third-party libraries (httpx, websockets)
- Context binding for the job being watched

Example:
    >>> from autopfs_viz.logging_config import configure_logging, set_job_context
    >>> configure_logging(level="DEBUG", log_dir="/path/to/logs")
    >>> set_job_context("0f3c9a")
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Optional, Union

from loguru import logger

job_context: ContextVar[Optional[str]] = ContextVar("job_id", default=None)

THIRD_PARTY_LOGGERS = ["httpx", "httpcore", "websockets", "textual"]


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to loguru."""

    def emit(self, record):
        """Handle a log record from standard logging."""
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the log originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(
    level: str = "INFO",
    log_dir: Optional[Union[str, Path]] = None,
    console: bool = True,
    console_format: str = "default",
    rotation: str = "10 MB",
    retention: str = "7 days",
    intercept_standard_logging: bool = True,
    colorize: bool = True,
) -> None:
    """Configure loguru for autopfs-viz.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files (None = no file logging)
        console: Log to stderr; turned off while the full-screen UI runs
        console_format: Format preset for console ("default", "detailed", "minimal")
        rotation: When to rotate log files (size or time)
        retention: How long to keep old logs
        intercept_standard_logging: Capture logs from standard logging module
        colorize: Enable colored output in console
    """
    valid_levels = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
    level_upper = level.upper()
    if level_upper not in valid_levels:
        raise ValueError(
            f"Invalid log level: {level}. Must be one of {valid_levels}"
        )
    level = level_upper

    logger.remove()

    console_formats = {
        "minimal": "<level>{level: <8}</level> | <level>{message}</level>",
        "default": (
            "<green>{time:HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
            "<level>{message}</level>"
        ),
        "detailed": (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "{extra[job_id]:<12} | "
            "<level>{message}</level>"
        ),
    }
    file_format = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
        "{level: <8} | "
        "{name}:{function}:{line} | "
        "{extra[job_id]} | "
        "{message}"
    )

    def context_filter(record):
        record["extra"].setdefault("job_id", job_context.get() or "none")
        return True

    if console:
        logger.add(
            sys.stderr,
            level=level,
            format=console_formats.get(console_format, console_formats["default"]),
            colorize=colorize,
            filter=context_filter,
        )

    if log_dir:
        log_dir = Path(log_dir).expanduser()
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "autopfs_viz_{time:YYYY-MM-DD}.log",
            level=level,
            format=file_format,
            rotation=rotation,
            retention=retention,
            filter=context_filter,
        )

    if intercept_standard_logging:
        intercept_handler = InterceptHandler()
        logging.root.handlers = [intercept_handler]
        # stdlib logging has no TRACE/SUCCESS levels
        logging.root.setLevel({"TRACE": "DEBUG", "SUCCESS": "INFO"}.get(level, level))

        for logger_name in THIRD_PARTY_LOGGERS:
            lib_logger = logging.getLogger(logger_name)
            lib_logger.handlers = [intercept_handler]
            lib_logger.propagate = False


def set_job_context(job_id: str) -> None:
    """Set job_id for all subsequent logs in this context.

    Args:
        job_id: Job identifier
    """
    job_context.set(job_id)
