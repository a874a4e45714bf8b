"""
Workspace discovery.
"""

from typing import Dict, List

from rbexport.constants import DEFAULT_API_BASE_URL, DEFAULT_HEADERS, WORKSPACE_LIST_LIMIT
from rbexport.utils.url import build_url_with_params, construct_api_url
from rbexport.logging import get_logger
from .fetcher import RetryingFetcher


class WorkspaceLister:
    """Lists the workspace ids visible to an API key.

    Only the first page of up to 100 workspaces is read.
    """

    def __init__(
        self,
        fetcher: RetryingFetcher,
        api_key: str,
        base_url: str = DEFAULT_API_BASE_URL,
    ):
        self.fetcher = fetcher
        self.api_key = api_key
        self.base_url = base_url
        self.logger = get_logger("rbexport.workspaces")

    def headers(self) -> Dict[str, str]:
        return {**DEFAULT_HEADERS, "apikey": self.api_key}

    def list(self) -> List[str]:
        url = build_url_with_params(
            construct_api_url(self.base_url, "/workspaces"),
            {
                "orderBy": "createdAt",
                "orderDir": "desc",
                "limit": WORKSPACE_LIST_LIMIT,
            },
        )
        workspaces = self.fetcher.fetch(url, self.headers()) or []
        ids = [workspace["id"] for workspace in workspaces]
        self.logger.info(f"Discovered {len(ids)} workspaces")
        return ids
