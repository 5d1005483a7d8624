from __future__ import annotations

"""
Logging Configuration Model.

The CLI builds one LoggingConfig from its flags: `--debug` selects the
level and `--log-file` adds a rotating file next to the stderr console.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Accepted level names (case-insensitive); anything else means INFO
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for `configure_logging`.

    Attributes:
        level: Threshold for every handler (`DEBUG` under `--debug`).
        console: Emit to stderr, keeping stdout free for summaries and `--json`.
        log_file: Path given by `--log-file`, or None for console only.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept beside the log file.
        console_fmt: Record layout on stderr.
        file_fmt: Record layout in the log file (timestamped).
        datefmt: Timestamp layout for `file_fmt`.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%dT%H:%M:%S"
