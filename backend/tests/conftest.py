"""Test fixtures — mocked key source, browser service and FastAPI test client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from bucketview.main import create_app
from bucketview.services import get_browser_service, get_key_source
from bucketview.services.browser import BrowserService

BUCKET_URL = "https://bucket.test"

SAMPLE_KEYS = [
    "a.jpg",
    "docs/readme.txt",
    "docs/x.exe",
    "docs/2023/report.csv",
]


def make_key_source(keys=None, error=None):
    """Key source double: returns ``keys`` or raises ``error``."""
    source = MagicMock()
    source.bucket_url = BUCKET_URL
    source.object_url.side_effect = lambda key: f"{BUCKET_URL}/{key}"
    if error is not None:
        source.fetch_keys = AsyncMock(side_effect=error)
    else:
        source.fetch_keys = AsyncMock(return_value=list(SAMPLE_KEYS if keys is None else keys))
    return source


@pytest.fixture
def key_source():
    return make_key_source()


@pytest.fixture
def browser(key_source):
    """Browser service that has not fetched yet."""
    return BrowserService(key_source, page_size=9)


@pytest_asyncio.fixture
async def loaded_browser(browser):
    """Browser service with SAMPLE_KEYS installed."""
    await browser.refresh()
    return browser


@pytest_asyncio.fixture
async def client(loaded_browser, key_source):
    """Async test client wired to the loaded browser service."""
    app = create_app()
    app.dependency_overrides[get_browser_service] = lambda: loaded_browser
    app.dependency_overrides[get_key_source] = lambda: key_source

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def source_factory():
    return make_key_source
