"""
Pagination handler for the links endpoint.

The links endpoint is paged with a cursor: each request asks for records
older than the id of the last record already seen. Results are ordered by
creation time, newest first.

Pages chain without gaps or overlaps only while the remote collection is
not modified during the export.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional

from rbexport.api.fetcher import RetryingFetcher
from rbexport.constants import DEFAULT_API_BASE_URL, DEFAULT_HEADERS, DEFAULT_PAGE_SIZE
from rbexport.exceptions import ApiError
from rbexport.logging import get_logger
from rbexport.utils.url import build_url_with_params, construct_api_url


class LinkPager:
    """Produces pages of link records for one workspace"""

    def __init__(
        self,
        fetcher: RetryingFetcher,
        api_key: str,
        base_url: str = DEFAULT_API_BASE_URL,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.fetcher = fetcher
        self.api_key = api_key
        self.base_url = base_url
        self.page_size = page_size
        self.logger = get_logger("rbexport.utils.export.pagination")

    def headers(self, workspace_id: Optional[str]) -> Dict[str, str]:
        """Build request headers, scoping to ``workspace_id`` when set"""
        headers = {**DEFAULT_HEADERS, "apikey": self.api_key}
        if workspace_id:
            headers["workspace"] = workspace_id
        return headers

    def page_url(self, last: str) -> str:
        """Build the URL for the page following the record ``last``"""
        return build_url_with_params(
            construct_api_url(self.base_url, "/links"),
            {
                "limit": self.page_size,
                "last": last,
                "orderBy": "createdAt",
                "orderDir": "desc",
            },
        )

    def produce_pages(self, workspace_id: Optional[str]) -> Iterator[List[Dict[str, Any]]]:
        """
        Lazily fetch pages until the API returns an empty page.

        Args:
            workspace_id: Workspace to scope to, or None for the default one

        Yields:
            Non-empty lists of link records, newest first
        """
        headers = self.headers(workspace_id)
        last = ""
        page_number = 0

        while True:
            page = self.fetcher.fetch(self.page_url(last), headers)
            if not page:
                self.logger.debug(
                    f"Workspace {workspace_id or 'default'}: "
                    f"end of links after {page_number} pages"
                )
                return

            page_number += 1
            last = page[-1].get("id") if isinstance(page[-1], Mapping) else None
            if not last:
                # Without an id there is no cursor to continue from
                raise ApiError(
                    f"Link without id on page {page_number}; cannot continue pagination"
                )
            yield page
