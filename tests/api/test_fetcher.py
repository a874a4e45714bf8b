import io
import logging

import httpx
import pytest

from rbexport.api.fetcher import (
    ResponseKind,
    RetryingFetcher,
    _read_text,
    classify_status,
)
from rbexport.exceptions import ApiError, RequestFailed, RetriesExhausted
from rbexport.logging.formatters import RbExportFormatter

URL = "https://api.test/v1/links?limit=2"
HEADERS = {"apikey": "k"}


@pytest.mark.parametrize("status", [200, 201, 204, 299])
def test_classify_success(status):
    assert classify_status(status) is ResponseKind.SUCCESS


@pytest.mark.parametrize("status", [429, 500, 502, 503, 504, 599])
def test_classify_transient(status):
    assert classify_status(status) is ResponseKind.TRANSIENT


@pytest.mark.parametrize("status", [301, 400, 401, 403, 404, 409, 422])
def test_classify_fatal(status):
    assert classify_status(status) is ResponseKind.FATAL


def test_fetch_returns_json_body(make_fetcher):
    fetcher, handler = make_fetcher({"/v1/links": [(200, [{"id": "a"}])]})

    assert fetcher.fetch(URL, HEADERS) == [{"id": "a"}]
    assert len(handler.requests) == 1
    assert handler.requests[0].headers["apikey"] == "k"


def test_fetch_retries_rate_limit_then_succeeds(make_fetcher):
    sleeps = []
    fetcher, handler = make_fetcher(
        {"/v1/links": [(429, "slow down"), (200, [])]}, sleeps=sleeps
    )

    assert fetcher.fetch(URL, HEADERS) == []
    assert len(handler.requests) == 2
    assert sleeps == [0.5]


def test_fetch_backoff_is_linear_in_attempt(make_fetcher):
    sleeps = []
    fetcher, handler = make_fetcher(
        {"/v1/links": [(500, ""), (503, ""), (200, {"ok": True})]}, sleeps=sleeps
    )

    assert fetcher.fetch(URL, HEADERS) == {"ok": True}
    assert sleeps == [0.5, 1.0]


def test_fetch_gives_up_after_three_attempts(make_fetcher):
    sleeps = []
    fetcher, handler = make_fetcher(
        {"/v1/links": [(503, ""), (502, ""), (429, ""), (200, [])]}, sleeps=sleeps
    )

    with pytest.raises(RetriesExhausted) as exc_info:
        fetcher.fetch(URL, HEADERS)

    assert exc_info.value.attempts == 3
    assert len(handler.requests) == 3
    assert sleeps == [0.5, 1.0, 1.5]


@pytest.mark.parametrize("status", [400, 401, 404])
def test_fetch_fatal_status_fails_without_retry(make_fetcher, status):
    sleeps = []
    fetcher, handler = make_fetcher(
        {"/v1/links": [(status, "nope"), (200, [])]}, sleeps=sleeps
    )

    with pytest.raises(RequestFailed) as exc_info:
        fetcher.fetch(URL, HEADERS)

    assert exc_info.value.status == status
    assert exc_info.value.body == "nope"
    assert str(status) in str(exc_info.value)
    assert len(handler.requests) == 1
    assert sleeps == []


def test_fetch_network_error_raises_request_failed():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    fetcher = RetryingFetcher(client=client, sleep=lambda _: None)

    with pytest.raises(RequestFailed) as exc_info:
        fetcher.fetch(URL, HEADERS)

    assert exc_info.value.status is None
    assert "connection refused" in exc_info.value.body


def test_read_text_swallows_body_errors():
    class BrokenResponse:
        @property
        def text(self):
            raise httpx.ResponseNotRead()

    assert _read_text(BrokenResponse()) == ""


def test_base_delay_is_configurable(make_fetcher):
    sleeps = []
    fetcher, _ = make_fetcher({"/v1/links": [(500, ""), (200, [])]}, sleeps=sleeps)
    fetcher.base_delay = 2

    fetcher.fetch(URL, HEADERS)

    assert sleeps == [2]


def test_close_only_closes_owned_client(mocker):
    client = mocker.Mock(spec=httpx.Client)
    fetcher = RetryingFetcher(client=client)

    fetcher.close()

    client.close.assert_not_called()


def test_context_manager_closes_created_client():
    with RetryingFetcher() as fetcher:
        client = fetcher.client

    assert client.is_closed


def test_fetch_non_json_success_raises_api_error(make_fetcher):
    fetcher, _ = make_fetcher({"/v1/links": [(200, "<html>maintenance</html>")]})

    with pytest.raises(ApiError) as exc_info:
        fetcher.fetch(URL, HEADERS)

    assert "Invalid JSON" in str(exc_info.value)
    assert "maintenance" in str(exc_info.value)


def test_retry_warning_reaches_application_log(make_fetcher):
    stream = io.StringIO()
    capture = logging.StreamHandler(stream)
    capture.setFormatter(RbExportFormatter(include_timestamps=False))
    app_logger = logging.getLogger("rbexport")
    app_logger.addHandler(capture)
    try:
        fetcher, _ = make_fetcher({"/v1/links": [(503, ""), (200, [])]})
        fetcher.fetch(URL, HEADERS)
    finally:
        app_logger.removeHandler(capture)

    output = stream.getvalue()
    assert "WARNING [rbexport.fetcher] Transient response 503" in output
    assert "retrying in 0.5s" in output
    assert "UNKNOWN" not in output
