"""
Logging configuration for rbexport.
"""

import os
import platform
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from rbexport.constants import LOG_FILE_NAME, LOG_RETENTION_DAYS, SENSITIVE_KEYS


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class LogConfig:
    """Settings consumed by ``setup_logging`` and ``rbexport logs``"""

    log_filename: str = f"{LOG_FILE_NAME}.log"
    log_retention_days: int = LOG_RETENTION_DAYS
    default_level: LogLevel = LogLevel.INFO
    # Exports report their own failures, so stderr stays quiet unless debugging
    console_level: LogLevel = LogLevel.ERROR
    include_timestamps: bool = True
    include_process_info: bool = False
    log_api_requests: bool = True
    sanitize_sensitive_data: bool = True
    sensitive_keys: tuple = SENSITIVE_KEYS


def get_log_directory() -> Path:
    """
    Return (and create) the per-user rbexport log directory.

    Windows uses %APPDATA%, macOS ~/Library/Logs and everything else
    $XDG_DATA_HOME (default ~/.local/share). Falls back to ./logs when the
    directory cannot be created.
    """
    system = platform.system().lower()
    if system == "darwin":
        log_dir = Path.home() / "Library" / "Logs" / LOG_FILE_NAME
    else:
        if system == "windows":
            root = os.environ.get("APPDATA") or str(Path.home())
        else:
            root = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
        log_dir = Path(root) / LOG_FILE_NAME / "logs"

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        log_dir = Path.cwd() / "logs"
        log_dir.mkdir(exist_ok=True)
    return log_dir


def get_log_file_path(config: Optional[LogConfig] = None) -> Path:
    return get_log_directory() / (config or LogConfig()).log_filename
