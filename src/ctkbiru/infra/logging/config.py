from __future__ import annotations

"""
Logging Configuration Models.

The CLI writes two audiences: the terminal, which should only hear about
problems, and an optional persistent file, which keeps the full run history.
Each sink therefore carries its own threshold.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def parse_level(level: Optional[str], fallback: int = logging.INFO) -> int:
    """Map a level name such as 'debug' to its numeric constant."""
    if not level:
        return fallback
    return _LEVEL_MAP.get(str(level).strip().upper(), fallback)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Sinks and thresholds for one process.

    Attributes:
        console_level: Threshold for stderr output. None disables the console.
        log_file: Path of the rotating log file. None disables the file.
        file_level: Threshold for the log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files to keep.
        console_fmt: Terminal record format.
        file_fmt: Log file record format.
        datefmt: Timestamp format for the log file.
    """
    console_level: Optional[str] = "WARNING"
    log_file: Optional[str] = None
    file_level: str = "INFO"

    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
