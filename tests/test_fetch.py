"""Tests for the documentation API client helpers."""

import httpx
import pytest

from frontend.fetch import DocumentationClient
from server.models import DocType

BASE_URL = "http://docs.test"


def make_client(handler):
    http_client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return DocumentationClient(BASE_URL, http_client=http_client)


def status(code):
    return lambda request: httpx.Response(code)


class TestPages:

    @pytest.mark.asyncio
    async def test_fetch_page_builds_request(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"file": "<h1>Docker</h1>"})

        client = make_client(handler)
        html = await client.fetch_documentation_page("Deploying", "Docker", "v1", "en-US", DocType.GUIDE)
        assert html == "<h1>Docker</h1>"
        assert seen[0].url.path == "/getFile/v1/en-US/Guide"
        assert seen[0].url.params["folder"] == "Deploying"
        assert seen[0].url.params["name"] == "Docker"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", [404, 500])
    async def test_fetch_page_errors_are_false(self, code):
        client = make_client(status(code))
        assert await client.fetch_documentation_page("A", "B", "v1", "en-US") is False

    @pytest.mark.asyncio
    async def test_fetch_pages_and_default(self):
        def handler(request):
            if request.url.path.startswith("/getFiles"):
                return httpx.Response(200, json={"files": ["Installation", "Introduction"]})
            return httpx.Response(200, json={"file": "<h1>Get Started</h1>"})

        client = make_client(handler)
        assert await client.fetch_documentation_pages("Get_Started", "v1", "en-US") == ["Installation", "Introduction"]
        assert await client.fetch_documentation_default("Get_Started", "v1", "en-US") == "<h1>Get Started</h1>"

    @pytest.mark.asyncio
    async def test_network_error_is_false(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        assert await client.fetch_documentation_index("v1", "en-US") is False
        assert await client.fetch_documentation_refresh("v1", "en-US") is False

    @pytest.mark.asyncio
    async def test_unexpected_payload_is_false(self):
        client = make_client(lambda request: httpx.Response(200, json={"unexpected": True}))
        assert await client.fetch_recommended_items("en-US") is False


class TestEmptyVersusFailure:

    @pytest.mark.asyncio
    async def test_missing_index_is_empty_success(self):
        data = await make_client(status(404)).fetch_documentation_index("v1", "en-US")
        assert data is not False
        assert data.index == []

    @pytest.mark.asyncio
    async def test_broken_index_is_failure(self):
        assert await make_client(status(500)).fetch_documentation_index("v1", "en-US") is False

    @pytest.mark.asyncio
    async def test_missing_categories_is_empty_success(self):
        data = await make_client(status(404)).fetch_documentation_categories("v1", "en-US")
        assert data.categories == []

    @pytest.mark.asyncio
    async def test_missing_recommended_items_is_failure(self):
        assert await make_client(status(404)).fetch_recommended_items("en-US") is False


@pytest.mark.asyncio
async def test_owned_client_is_closed():
    client = DocumentationClient(BASE_URL)
    async with client:
        pass
    assert client.http_client.is_closed
