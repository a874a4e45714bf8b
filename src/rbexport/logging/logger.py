"""
Main logging module for rbexport.

This module provides the primary logging interface: logger setup with
daily rotation, logger lookup, and structured API call records.
"""

import logging
import logging.handlers
import os
import sys
from typing import Optional, Dict, Any

from rbexport.constants import ENV_LOG_LEVEL, SENSITIVE_KEYS
from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import RbExportFormatter, APICallFormatter
from .utils import cleanup_old_logs, sanitize_data


# Global logger registry
_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False
_log_config: Optional[LogConfig] = None


def _rotating_handler(log_file_path, config: LogConfig, level: int) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when='midnight',
        interval=1,
        backupCount=config.log_retention_days,
        encoding='utf-8',
        utc=False
    )
    handler.setLevel(level)
    # Rotated files get a YYYY-MM-DD suffix
    handler.suffix = "%Y-%m-%d"
    return handler


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the rbexport logging system.

    Args:
        config: LogConfig instance, uses default if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured, _log_config

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig()
        user_level = os.environ.get(ENV_LOG_LEVEL, "").upper()
        if user_level in [lev.value for lev in LogLevel]:
            config.default_level = LogLevel(user_level)

    _log_config = config
    log_file_path = get_log_file_path(config)
    level = getattr(logging, config.default_level.value)

    root_logger = logging.getLogger("rbexport")
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    file_handler = _rotating_handler(log_file_path, config, level)
    file_handler.setFormatter(
        RbExportFormatter(
            include_timestamps=config.include_timestamps,
            include_process_info=config.include_process_info,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys
        )
    )
    root_logger.addHandler(file_handler)

    # The CLI reports failures itself; stderr logging is for debug runs
    if config.console_level != LogLevel.ERROR or config.default_level == LogLevel.DEBUG:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.console_level.value))
        console_handler.setFormatter(
            RbExportFormatter(
                include_timestamps=False,
                sanitize_sensitive=config.sanitize_sensitive_data,
                sensitive_keys=config.sensitive_keys
            )
        )
        root_logger.addHandler(console_handler)

    api_logger = logging.getLogger("rbexport.api")
    api_logger.setLevel(logging.DEBUG)
    api_logger.handlers.clear()

    if config.log_api_requests:
        api_handler = _rotating_handler(log_file_path, config, logging.DEBUG)
        api_handler.setFormatter(
            APICallFormatter(
                sanitize_sensitive=config.sanitize_sensitive_data,
                sensitive_keys=config.sensitive_keys
            )
        )
        api_logger.addHandler(api_handler)

    # Prevent propagation to avoid duplicate entries
    api_logger.propagate = False

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError:
        pass

    _logging_configured = True

    get_logger("rbexport.setup").info(
        f"Logging initialized - File: {log_file_path}, "
        f"Level: {config.default_level.value}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'rbexport.api.fetcher')

    Returns:
        logging.Logger: Logger instance
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def log_api_call(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    attempt: Optional[int] = None,
    request_headers: Optional[Dict[str, str]] = None,
    error: Optional[str] = None,
    logger_name: str = "rbexport.api"
) -> None:
    """
    Log an API call with structured information.

    Args:
        method: HTTP method
        url: Request URL
        status_code: Response status code
        duration: Request duration in seconds
        attempt: Attempt number within a retried call
        request_headers: Request headers (sanitized before logging)
        error: Error message if request failed
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)

    extra = {
        "api_method": method,
        "api_url": url,
        "api_status": status_code,
        "api_duration": duration or 0,
    }
    if attempt is not None:
        extra["api_attempt"] = attempt
    if request_headers:
        extra["api_request_headers"] = sanitize_data(request_headers, SENSITIVE_KEYS)
    if error:
        extra["api_error"] = error

    if error or (status_code and status_code >= 500):
        logger.error("API call failed", extra=extra)
    elif status_code and 400 <= status_code < 500:
        logger.warning("API call client error", extra=extra)
    else:
        logger.debug("API call completed", extra=extra)


def log_application_event(
    event: str,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "rbexport.app"
) -> None:
    """
    Log application-level events at appropriate levels.

    Args:
        event: Description of the event
        level: Log level (debug, info, warning, error)
        details: Additional event details
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {"app_event": event}

    if details:
        extra["app_details"] = details

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(f"Application: {event}", extra=extra)
