"""Logging setup for StreamHub with console and optional rotating file output"""

import logging
import logging.handlers
import re
import sys
from pathlib import Path

_SIZE_UNITS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def setup_logging(
    log_level: str = "INFO",
    log_file: str | None = None,
    log_to_console: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    log_format: str | None = None,
) -> logging.Logger:
    """
    Set up logging for the StreamHub application.

    This configures logging to write to:
    - Console (stdout)
    - File with rotation, when a log file is given

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file, or None to disable file logging
        log_to_console: Whether to log to console
        max_bytes: Maximum size of log file before rotation (default 10MB)
        backup_count: Number of backup files to keep
        log_format: Custom log format string

    Returns:
        Configured root logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

    root_logger.info(f"StreamHub logging initialized - Level: {log_level}")
    if log_file:
        root_logger.info(f"Log file: {log_file} (max {max_bytes / (1024*1024):.1f} MB, {backup_count} backups)")

    return root_logger


def setup_logging_from_config(logging_config) -> logging.Logger:
    """Configure logging from a ``LoggingConfig`` section."""
    return setup_logging(
        log_level=logging_config.level,
        log_file=logging_config.file,
        max_bytes=parse_size(logging_config.max_size),
        backup_count=logging_config.backup_count,
        log_format=logging_config.format,
    )


def parse_size(value: str) -> int:
    """
    Parse a human size such as "10MB" into bytes.

    Raises:
        ValueError: If the value cannot be parsed
    """
    match = re.fullmatch(r"\s*(\d+(?:\.\d+)?)\s*([KMG]?B)?\s*", value.upper())
    if not match:
        raise ValueError(f"Invalid size: {value!r}")
    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS[unit or "B"])

