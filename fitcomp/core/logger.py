"""Logging for fitcomp.

The console sink shows everything at the chosen level. The optional file
sink keeps only records from fitcomp and its CLI, so a host application
that also logs through loguru does not fill the scoring log.
"""

import sys
from pathlib import Path

from loguru import logger

from fitcomp.config.settings import Settings

PROJECT_MODULES = ("fitcomp", "cli")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def is_project_record(record: dict) -> bool:
    name = record["name"] or ""
    return name.split(".", 1)[0] in PROJECT_MODULES


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Replace loguru's default handler with fitcomp's sinks.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file holding fitcomp records only
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            filter=is_project_record,
            rotation=rotation,
            retention=retention,
            compression="zip",
        )

    logger.debug(f"Logger initialized with level={level} file={log_file or '-'}")


def setup_logger_from_settings(settings: Settings, level: str | None = None) -> None:
    """Configure logging from FITCOMP_LOG_LEVEL / FITCOMP_LOG_FILE, with an optional level override."""
    setup_logger(level=(level or settings.log_level).upper(), log_file=settings.log_file)
