"""
Export settings resolution.

Every setting is resolved once, with priority: command-line argument >
environment variable > default. The result is an immutable
``ExportSettings`` value handed to the export core.
"""

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from rbexport.constants import (
    API_KEY_PLACEHOLDER,
    DEFAULT_API_BASE_URL,
    DEFAULT_OUTPUT_BASE,
    DEFAULT_PAGE_SIZE,
    ENV_API_BASE_URL,
    ENV_API_KEY,
    ENV_EXPORT_BASE,
    ENV_MAX_PAGE_SIZE,
    ENV_WORKSPACES,
    REQUEST_TIMEOUT,
    RETRY_BASE_DELAY,
)
from rbexport.exceptions import ConfigurationError


@dataclass(frozen=True)
class ExportSettings:
    """Resolved configuration for one export run"""

    api_key: str
    workspaces: Tuple[str, ...] = ()
    output_base: str = DEFAULT_OUTPUT_BASE
    max_page_size: int = DEFAULT_PAGE_SIZE
    api_base_url: str = DEFAULT_API_BASE_URL
    retry_base_delay: float = RETRY_BASE_DELAY
    request_timeout: float = REQUEST_TIMEOUT


def parse_workspace_list(value: Optional[str]) -> List[str]:
    """Split a comma separated workspace list, dropping blanks"""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_page_size(value) -> int:
    """Parse the page size, which must be a positive integer"""
    try:
        page_size = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid max page size: {value!r}")
    if page_size <= 0:
        raise ConfigurationError(f"Max page size must be positive, got {page_size}")
    return page_size


def validate_api_key(api_key: Optional[str]) -> str:
    """Reject a missing or placeholder API key"""
    if not api_key or api_key == API_KEY_PLACEHOLDER:
        raise ConfigurationError(
            f"Missing API key. Set {ENV_API_KEY} environment variable or pass --api-key."
        )
    return api_key


def resolve_settings(
    workspaces: Optional[List[str]] = None,
    out: Optional[str] = None,
    max_page_size: Optional[int] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ExportSettings:
    """
    Resolve export settings from arguments and environment.

    Args:
        workspaces: Workspace ids given on the command line
        out: Base output filename
        max_page_size: Links requested per page
        api_key: Rebrandly API key
        base_url: API base URL
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        ExportSettings

    Raises:
        ConfigurationError: Missing credential or invalid page size
    """
    if environ is None:
        environ = os.environ

    resolved_workspaces = [w for w in (workspaces or []) if w]
    if not resolved_workspaces:
        resolved_workspaces = parse_workspace_list(environ.get(ENV_WORKSPACES))

    page_size = max_page_size
    if page_size is None:
        page_size = environ.get(ENV_MAX_PAGE_SIZE, DEFAULT_PAGE_SIZE)

    return ExportSettings(
        api_key=validate_api_key(
            api_key or environ.get(ENV_API_KEY) or API_KEY_PLACEHOLDER
        ),
        workspaces=tuple(resolved_workspaces),
        output_base=out or environ.get(ENV_EXPORT_BASE) or DEFAULT_OUTPUT_BASE,
        max_page_size=parse_page_size(page_size),
        api_base_url=base_url or environ.get(ENV_API_BASE_URL) or DEFAULT_API_BASE_URL,
    )
