"""
URL utilities.

Builds API request URLs and splits Rebrandly short URLs into the
host and slashtag shown in the export.
"""

from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode


def construct_api_url(base_url: str, endpoint: str) -> str:
    """
    Join an API base URL and an endpoint path without doubling slashes.

    Args:
        base_url: The base URL (e.g. https://api.rebrandly.com/v1)
        endpoint: The API endpoint (e.g. /links)

    Returns:
        Full API URL
    """
    base_url = base_url.rstrip("/")
    endpoint = endpoint or ""

    if not endpoint.startswith("/"):
        endpoint = "/" + endpoint

    return f"{base_url}{endpoint}"


def build_url_with_params(url: str, params: Dict[str, Any]) -> str:
    """
    Build a URL with additional query parameters.

    Existing parameters are kept and overridden by ``params``. ``None``
    values are dropped; empty strings are kept (``last=`` is meaningful).

    Args:
        url: Original URL or path
        params: Parameters to add/update

    Returns:
        Updated URL
    """
    parts = urlsplit(url)
    query_params = dict(parse_qsl(parts.query, keep_blank_values=True))
    query_params.update({k: str(v) for k, v in params.items() if v is not None})
    query_string = urlencode(query_params, doseq=True)

    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, query_string, parts.fragment)
    )


def _parse_short_url(short_url: Optional[str]):
    if not short_url:
        return None
    value = str(short_url)
    # Rebrandly returns short URLs without a scheme
    if not value.startswith("http"):
        value = f"https://{value}"
    try:
        parts = urlsplit(value)
        # Accessing port validates the netloc
        parts.port
    except ValueError:
        return None
    if not parts.hostname:
        return None
    return parts


def extract_domain(short_url: Optional[str]) -> str:
    """Return the host of a short URL, or "" when it cannot be parsed."""
    parts = _parse_short_url(short_url)
    return parts.hostname if parts else ""


def extract_slashtag(short_url: Optional[str]) -> str:
    """Return the path of a short URL without its leading slash."""
    parts = _parse_short_url(short_url)
    if not parts:
        return ""
    return parts.path[1:] if parts.path.startswith("/") else parts.path
