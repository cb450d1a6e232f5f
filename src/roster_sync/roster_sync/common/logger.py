"""Logger configuration for roster-sync."""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    rotation: str = "10 MB",
    retention: str = "7 days",
    debug: bool = False,
) -> None:
    """Route loguru to stderr and, when configured, to a rotating file.

    Tracebacks show local variable values only when `debug` is set.
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True, backtrace=debug, diagnose=debug)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            encoding="utf-8",
            backtrace=debug,
            diagnose=debug,
        )

    logger.debug(f"Logger ready level={level} file={log_file or '-'}")


def setup_logger_from_settings(settings: Any) -> None:
    """Apply the LOG_* values of a settings module (config.development, ...)."""
    setup_logger(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        log_file=getattr(settings, "LOG_FILE", None),
        rotation=getattr(settings, "LOG_ROTATION", "10 MB"),
        retention=getattr(settings, "LOG_RETENTION", "7 days"),
        debug=bool(getattr(settings, "DEBUG", False)),
    )
