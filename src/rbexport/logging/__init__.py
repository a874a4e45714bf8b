"""
rbexport Logging Module

This module provides logging for the rbexport CLI. It writes a single log
file with daily rotation to a platform-specific directory, records every
API call with timing information, and sanitizes credentials before they
reach the log.
"""

from .logger import (
    get_logger,
    setup_logging,
    LogLevel,
    log_api_call,
    log_application_event,
)
from .config import LogConfig
from .utils import sanitize_data, get_log_directory

__all__ = [
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_application_event",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "get_log_directory"
]
