"""
Loguru setup for the parks pipeline.

Importing this module configures logging from ``settings.pipeline`` unless
``DISABLE_LOGGING=1`` is set (the test suite sets it).
"""

import os
import sys
from pathlib import Path

from loguru import logger

from parks_pipeline.config import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> "
    "<cyan>{name}</cyan> {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {thread.name} | {message}"


def setup_logging(
    level: str | None = None,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "1 week",
    serialize: bool | None = None,
) -> None:
    """
    Replace loguru's default sink with the pipeline's sinks.

    Args:
        level: Minimum level; defaults to ``PARKS_LOG_LEVEL``
        log_file: Also write to this file; defaults to ``PARKS_LOG_FILE``
        rotation: When to rotate the file (e.g. "10 MB", "1 day")
        retention: How long rotated files are kept
        serialize: Write the file sink as JSON lines; defaults to ``PARKS_LOG_JSON``
    """
    level = (level or settings.pipeline.log_level).upper()
    log_file = log_file or settings.pipeline.log_file
    serialize = settings.pipeline.log_json if serialize is None else serialize

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # enqueue: ingestion may log from worker threads
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            serialize=serialize,
            enqueue=True,
        )

    logger.debug(f"Logging at {level}" + (f", file {log_file}" if log_file else ""))


if os.environ.get("DISABLE_LOGGING") != "1":
    setup_logging()
