"""Logging initialization utilities using loguru."""

from __future__ import annotations

import os
from pathlib import Path
import subprocess
import sys

from loguru import logger

APP_DIR_NAME = "MemoryCalendar"

# Directory passed to the last init_logging call
_active_log_dir: Path | None = None


def get_app_data_directory() -> Path:
    """Per-user application data directory."""
    if os.name == "nt":
        return Path(os.path.expandvars("%LOCALAPPDATA%")) / APP_DIR_NAME
    return Path.home() / ".local" / "share" / APP_DIR_NAME


def get_log_directory() -> str:
    """Get the main log directory path."""
    if _active_log_dir is not None:
        return str(_active_log_dir)
    return str(get_app_data_directory() / "logs")


def init_logging(log_dir: str | None = None, level: str = "INFO") -> Path:
    """Initialize rotating file logging under the given directory."""
    global _active_log_dir
    log_path = Path(log_dir or get_log_directory())
    log_path.mkdir(parents=True, exist_ok=True)
    _active_log_dir = log_path

    logger.remove()
    logger.add(
        str(log_path / "memories_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
        level=level,
    )
    return log_path


def find_latest_log_file(log_dir: str | None = None) -> Path | None:
    """Find the latest log file in the specified directory."""
    try:
        log_path = Path(log_dir or get_log_directory())
        if not log_path.exists():
            return None
        log_files = list(log_path.glob("memories_*.log"))
        if not log_files:
            return None
        return max(log_files, key=lambda p: p.stat().st_mtime)
    except (OSError, ValueError):
        return None


def open_file_in_default_app(file_path: str) -> bool:
    """Open a file or directory in the default application for its type."""
    try:
        if os.name == "nt":
            os.startfile(file_path)  # type: ignore[attr-defined]
        elif sys.platform == "darwin":
            subprocess.run(["open", file_path], check=True)
        else:
            subprocess.run(["xdg-open", file_path], check=True)
        return True
    except (OSError, subprocess.CalledProcessError):
        return False


def open_latest_log() -> bool:
    """Open the latest log file in the default application."""
    log_file = find_latest_log_file()
    if log_file:
        return open_file_in_default_app(str(log_file))
    return False


def open_log_directory() -> bool:
    """Open the log directory in the file explorer."""
    return open_file_in_default_app(get_log_directory())
