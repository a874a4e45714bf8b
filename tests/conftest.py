"""Shared pytest configuration and fixtures for the rbexport test suite.

This module provides:
- Path setup so tests import the package from src/
- Fixtures for settings, mocked HTTP transports and sample link records
- Test markers
"""
import json
import sys
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest


# Add src/ to path so test modules can import rbexport package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from rbexport.api import RetryingFetcher  # noqa: E402
from rbexport.commands.config import ExportSettings  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path, monkeypatch):
    """Keep log files out of the user's home directory."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def settings(tmp_path):
    """Provide resolved export settings writing into a temp directory."""
    return ExportSettings(
        api_key="test-api-key-123456",
        output_base=str(tmp_path / "links.csv"),
        max_page_size=2,
        api_base_url="https://api.test/v1",
        retry_base_delay=0.5,
    )


@pytest.fixture
def sample_links():
    """Provide link records as returned by the links endpoint."""
    return [
        {
            "id": "l3",
            "createdAt": "2024-03-03T00:00:00.000Z",
            "shortUrl": "rebrand.ly/three",
            "destination": "https://example.com/3",
        },
        {
            "id": "l2",
            "createdAt": "2024-02-02T00:00:00.000Z",
            "shortUrl": "rebrand.ly/two",
            "destination": "https://example.com/a,b",
        },
        {
            "id": "l1",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "shortUrl": "link.example.org/one",
            "destination": 'https://example.com/"quoted"',
        },
    ]


class RecordingHandler:
    """httpx.MockTransport handler replaying queued responses per path.

    ``routes`` maps a URL path (e.g. "/v1/links") to a list of
    ``(status, body)`` tuples consumed in order.
    """

    def __init__(self, routes):
        self.routes = {path: list(responses) for path, responses in routes.items()}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes[request.url.path].pop(0)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, content=json.dumps(body).encode("utf-8"))

    def params(self, index):
        query = urlsplit(str(self.requests[index].url)).query
        return {k: v[0] for k, v in parse_qs(query, keep_blank_values=True).items()}


@pytest.fixture
def make_fetcher():
    """Build a RetryingFetcher backed by a RecordingHandler."""

    def _make(routes, sleeps=None):
        handler = RecordingHandler(routes)
        client = httpx.Client(transport=httpx.MockTransport(handler))
        sleep = sleeps.append if sleeps is not None else (lambda _: None)
        fetcher = RetryingFetcher(client=client, sleep=sleep)
        return fetcher, handler

    return _make


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)
