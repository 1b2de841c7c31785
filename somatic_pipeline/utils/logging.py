"""
Loguru sinks for transformer runs.

Several transformers log at once from pool threads, so every line carries
the thread name (``transformer_0``, ``transformer_1``, ...) and the file sink
is enqueued so concurrent writers never interleave within a line.

Set ``DISABLE_LOGGING=1`` to skip the import-time setup (the tests do).
"""

import os
import sys
from pathlib import Path

from loguru import logger

from somatic_pipeline.config import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<magenta>{thread.name: <14}</magenta> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {name}:{function}:{line} - {message}"


def setup_logging(
    level: str | None = None,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "1 week",
) -> None:
    """
    Replace loguru's handlers with a stderr sink and, optionally, a file sink.

    Args:
        level: Minimum level; defaults to SOMATIC_LOG_LEVEL
        log_file: Rotated, gzip-compressed log file; defaults to SOMATIC_LOG_FILE
        rotation: When to start a new log file
        retention: How long rotated files are kept
    """
    level = level or settings.pipeline.log_level
    log_file = log_file or settings.pipeline.log_file

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="gz",
            enqueue=True,
        )

    logger.debug(f"Logging at {level}" + (f", file {log_file}" if log_file else ""))


if os.environ.get("DISABLE_LOGGING") != "1":
    setup_logging()
