# =============================================================================
# TELEWIND - LOGGING CONFIGURATION
# =============================================================================
#
# Console logging always, file logging under logs/ on request.
# All modules log through logging.getLogger(__name__).
#
# =============================================================================

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _get_project_root() -> Path:
    """Get the project root directory."""
    # This file is at shared/logging_config.py
    return Path(__file__).parent.parent


def _get_log_dir() -> Path:
    return _get_project_root() / "logs"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    console_output: bool = True,
    file_output: bool = False,
    log_dir: Optional[Path] = None,
) -> Optional[Path]:
    """
    Configure the root logger.

    Args:
        level: Logging level (int or name such as "DEBUG")
        console_output: Whether to log to console
        file_output: Whether to log to a timestamped file
        log_dir: Directory for the log file (default: logs/)

    Returns:
        Path of the log file, or None without file output
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    log_file = None
    if file_output:
        directory = log_dir or _get_log_dir()
        directory.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = directory / f"telewind_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # Reduce noise from urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    root.debug(f"Logging initialized at {logging.getLevelName(level)}")
    if log_file:
        root.info(f"Log file: {log_file}")
    return log_file
