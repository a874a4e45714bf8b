"""Custom exception classes for rbexport."""

from typing import Optional


class RbExportError(Exception):
    """Base exception for all rbexport errors."""

    pass


class ConfigurationError(RbExportError):
    """Raised when the resolved configuration cannot be used."""

    pass


class NoWorkspacesFound(ConfigurationError):
    """Raised when workspace discovery returns nothing to export."""

    def __init__(self, message: str = "No workspaces found."):
        super().__init__(message)


class ApiError(RbExportError):
    """Exception raised for Rebrandly API failures."""

    pass


class RequestFailed(ApiError):
    """Raised for a non-retryable API response.

    ``status`` is ``None`` when the request never produced a response
    (connection refused, timeout).
    """

    def __init__(self, status: Optional[int], body: str = "", url: str = ""):
        self.status = status
        self.body = body
        self.url = url
        if status is None:
            message = f"Request failed. {body}".strip()
        else:
            message = f"Request failed (status {status}). {body}".strip()
        super().__init__(message)


class RetriesExhausted(ApiError):
    """Raised when every attempt ended in a transient failure."""

    def __init__(self, url: str = "", attempts: int = 0):
        self.url = url
        self.attempts = attempts
        super().__init__(f"Request failed after {attempts} attempts.")
