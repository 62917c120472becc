"""Logging setup writing to stderr and a dated log file."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(name: Optional[str]) -> int:
    """Map a level name to a logging level, defaulting to INFO."""
    return LEVELS.get((name or "").strip().lower(), logging.INFO)


def setup_logging(log_dir: str = "log", level: Optional[str] = None, now: Optional[datetime] = None) -> Path:
    """
    Configure root logging for the server process.

    Log files are grouped by month and day: ``{log_dir}/YYYYMM/YYYYMMDD/app.log``.

    Args:
        log_dir: Base directory for log files
        level: Level name (debug, info, warn, error). Unknown names mean info.
        now: Date used to pick the log file. If None, uses the current time.

    Returns:
        Path of the log file being appended to
    """
    now = now or datetime.now()
    log_path = Path(log_dir) / now.strftime("%Y%m") / now.strftime("%Y%m%d") / "app.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
        ],
        force=True,
    )
    return log_path
