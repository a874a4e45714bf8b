"""
Custom formatters for rbexport logging.

Two formatters are provided: a general one for application logs and a
compact one for API call records.
"""

import logging
from datetime import datetime
from .utils import sanitize_data, sanitize_string
from rbexport.constants import SENSITIVE_KEYS


class RbExportFormatter(logging.Formatter):
    """
    Formatter for rbexport log entries.

    Provides structured formatting with optional components and
    automatic sanitization of sensitive data.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_process_info: bool = False,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        self.include_timestamps = include_timestamps
        self.include_process_info = include_process_info
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        fmt_parts = []
        if include_timestamps:
            fmt_parts.append("%(asctime)s")
        fmt_parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])
        if include_process_info:
            fmt_parts.insert(-1, "[PID:%(process)d]")
        super().__init__(fmt=" ".join(fmt_parts), datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record, masking sensitive values in dict/list payloads.
        """
        if self.sanitize_sensitive:
            if isinstance(record.msg, (dict, list)):
                record.msg = sanitize_data(record.msg, self.sensitive_keys)
            elif isinstance(record.args, (tuple, list)):
                record.args = tuple(
                    sanitize_data(arg, self.sensitive_keys)
                    if isinstance(arg, (dict, list))
                    else arg
                    for arg in record.args
                )

        return super().format(record)


class APICallFormatter(logging.Formatter):
    """
    Formatter for API call records.

    Example line:
        2026-02-02 17:27:34 DEBUG [rbexport.api] GET https://.../links?... -> 200 (120.0ms)
    """

    def __init__(self, sanitize_sensitive: bool = True, sensitive_keys: tuple = None):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        super().__init__()
        self._plain = RbExportFormatter(
            sanitize_sensitive=sanitize_sensitive, sensitive_keys=self.sensitive_keys
        )

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "api_method"):
            # Plain messages logged under rbexport.api keep their text
            return self._plain.format(record)

        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        method = getattr(record, "api_method", "UNKNOWN")
        url = getattr(record, "api_url", "")
        status = getattr(record, "api_status", None) or "---"
        duration = round(getattr(record, "api_duration", 0) * 1000, 2)

        if self.sanitize_sensitive:
            url = sanitize_string(url, self.sensitive_keys)

        lines = [
            f"{timestamp} {record.levelname} [{record.name}] "
            f"{method} {url} -> {status} ({duration}ms)"
        ]

        attempt = getattr(record, "api_attempt", None)
        if attempt:
            lines[0] += f" [attempt {attempt}]"

        api_error = getattr(record, "api_error", None)
        if api_error:
            lines.append(f"    Error: {api_error}")

        return "\n".join(lines)
