"""
Retrying HTTP fetcher.

Performs one logical GET against the Rebrandly API, retrying rate-limit
and server errors with a linear backoff.
"""

import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

import httpx

from rbexport.constants import MAX_ATTEMPTS, RETRY_BASE_DELAY, REQUEST_TIMEOUT
from rbexport.exceptions import ApiError, RequestFailed, RetriesExhausted
from rbexport.logging import get_logger, log_api_call


class ResponseKind(Enum):
    """Outcome classes for an HTTP status code"""
    SUCCESS = "success"
    TRANSIENT = "transient"
    FATAL = "fatal"


def classify_status(status_code: int) -> ResponseKind:
    """
    Classify an HTTP status code.

    2xx is a success, 429 and 5xx are worth retrying, anything else is fatal.
    """
    if 200 <= status_code < 300:
        return ResponseKind.SUCCESS
    if status_code == 429 or status_code >= 500:
        return ResponseKind.TRANSIENT
    return ResponseKind.FATAL


def _read_text(response: httpx.Response) -> str:
    try:
        return response.text
    except Exception:
        return ""


class RetryingFetcher:
    """GET JSON documents with bounded retry on transient failures"""

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        max_attempts: int = MAX_ATTEMPTS,
        base_delay: float = RETRY_BASE_DELAY,
        timeout: float = REQUEST_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._client = client
        self._owns_client = client is None
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.timeout = timeout
        self._sleep = sleep
        self.logger = get_logger("rbexport.fetcher")

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def close(self) -> None:
        """Close the underlying client if this fetcher created it"""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "RetryingFetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch(self, url: str, headers: Dict[str, str]) -> Any:
        """
        GET ``url`` and return the decoded JSON body.

        Args:
            url: Fully built request URL
            headers: Request headers

        Returns:
            Parsed JSON body

        Raises:
            RequestFailed: Non-retryable status or network failure
            RetriesExhausted: Every attempt hit a retryable status
            ApiError: A 2xx response whose body is not JSON
        """
        for attempt in range(1, self.max_attempts + 1):
            response = self._get(url, headers, attempt)
            kind = classify_status(response.status_code)

            if kind is ResponseKind.SUCCESS:
                try:
                    return response.json()
                except ValueError as e:
                    raise ApiError(
                        f"Invalid JSON in response from {url}: {_read_text(response)[:200]}"
                    ) from e

            if kind is ResponseKind.FATAL:
                raise RequestFailed(response.status_code, _read_text(response), url)

            delay = self.base_delay * attempt
            self.logger.warning(
                f"Transient response {response.status_code} from {url} "
                f"(attempt {attempt}/{self.max_attempts}), retrying in {delay}s"
            )
            self._sleep(delay)

        self.logger.error(f"Giving up on {url} after {self.max_attempts} attempts")
        raise RetriesExhausted(url, self.max_attempts)

    def _get(self, url: str, headers: Dict[str, str], attempt: int) -> httpx.Response:
        start_time = time.time()
        self.logger.debug(f"Starting GET request to {url}")

        try:
            response = self.client.get(url, headers=headers)
        except httpx.HTTPError as e:
            log_api_call(
                method="GET",
                url=url,
                duration=time.time() - start_time,
                attempt=attempt,
                request_headers=headers,
                error=str(e),
            )
            raise RequestFailed(None, str(e), url) from e

        log_api_call(
            method="GET",
            url=url,
            status_code=response.status_code,
            duration=time.time() - start_time,
            attempt=attempt,
            request_headers=headers,
        )
        return response
