"""Tests for the async catalog client."""
import asyncio

import httpx

from bookfinder.async_client import AsyncCatalogClient


def run(coro):
    return asyncio.run(coro)


def make_client(handler, **kwargs):
    return AsyncCatalogClient(
        base_url="https://books.test/v1",
        transport=httpx.MockTransport(handler),
        **kwargs
    )


def test_search_request_shape():
    """Test async search sends the query and the result cap."""
    seen = []
    
    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"items": [{"id": "1"}]})
    
    async def scenario():
        async with make_client(handler) as client:
            return await client.search("the hobbit", max_results=20)
    
    assert run(scenario()) == {"items": [{"id": "1"}]}
    assert seen[0].url.path == "/v1/volumes"
    assert seen[0].url.params["q"] == "the hobbit"
    assert seen[0].url.params["maxResults"] == "9"


def test_get_volume_with_key():
    """Test volume lookups carry the API key."""
    seen = []
    
    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"volumeInfo": {"title": "x"}})
    
    async def scenario():
        async with make_client(handler, api_key="k") as client:
            return await client.get_volume("abc")
    
    assert run(scenario()) == {"volumeInfo": {"title": "x"}}
    assert seen[0].url.path == "/v1/volumes/abc"
    assert seen[0].url.params["key"] == "k"


def test_failures_are_no_data():
    """Test status errors, bad JSON and transport errors give None."""
    def not_found(request):
        return httpx.Response(404, json={"error": {"code": 404}})
    
    def bad_json(request):
        return httpx.Response(200, content=b"<html>")
    
    def broken(request):
        raise httpx.ConnectError("down", request=request)
    
    async def scenario(handler):
        async with make_client(handler) as client:
            return await client.get_volume("abc")
    
    assert run(scenario(not_found)) is None
    assert run(scenario(bad_json)) is None
    assert run(scenario(broken)) is None


def test_blank_query_not_sent():
    """Test whitespace-only queries skip the request."""
    seen = []
    
    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})
    
    async def scenario():
        async with make_client(handler) as client:
            return await client.search("  ")
    
    assert run(scenario()) is None
    assert seen == []
