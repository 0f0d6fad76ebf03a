"""
Logging setup and configuration utilities.

Framework modules log through the standard ``logging`` module. This module
configures loguru sinks and, optionally, routes standard logging records
into loguru so both end up in the same outputs.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger as loguru_logger

from ..config.models import LoggingConfig


class InterceptHandler(logging.Handler):
    """Forwards standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Any = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller that issued the logging call
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        loguru_logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage())


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Setup application logging with the given configuration.

    Args:
        config: Logging configuration (defaults apply when omitted)
    """
    config = config or LoggingConfig()

    # Remove default handler
    loguru_logger.remove()

    if config.console_enabled:
        loguru_logger.add(
            sys.stderr,
            format=config.format,
            level=config.level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=False
        )

    if config.file_enabled:
        log_dir = Path(config.log_directory)
        log_dir.mkdir(parents=True, exist_ok=True)

        loguru_logger.add(
            log_dir / "ignis.log",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
                   "{name}:{function}:{line} - {message}",
            level=config.level.upper(),
            rotation=config.max_file_size,
            retention=config.backup_count,
            compression="zip",
            backtrace=True,
            diagnose=False
        )

    if config.intercept_standard_logging:
        logging.basicConfig(
            handlers=[InterceptHandler()],
            level=logging.getLevelName(config.level.upper()),
            force=True
        )
