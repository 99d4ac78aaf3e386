"""Tests for the NewsAPI remote source."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from newscache.remote import (
    DecodeFailure,
    InvalidRequest,
    NewsAPISource,
    Reachability,
    ServerError,
    Unavailable,
    UnconfiguredRemoteSource,
    create_remote_source,
)

HEADLINES = {
    "status": "ok",
    "totalResults": 2,
    "articles": [
        {
            "source": {"id": "test", "name": "Test Source"},
            "author": "Test Author",
            "title": "Test Article 1",
            "description": "This is a test article",
            "url": "https://test.com/1",
            "urlToImage": "https://test.com/image1.jpg",
            "publishedAt": "2024-01-01T00:00:00Z",
            "content": "Test content 1",
        },
        {
            "source": {"id": None, "name": "Test Source 2"},
            "author": None,
            "title": "Test Article 2",
            "description": None,
            "url": "https://test.com/2",
            "urlToImage": None,
            "publishedAt": "2024-01-02T00:00:00Z",
            "content": None,
        },
    ],
}


def _source(handler, **kwargs) -> NewsAPISource:
    return NewsAPISource(
        api_key="secret",
        transport=httpx.MockTransport(handler),
        reachability=Reachability("https://newsapi.org", force_offline=False),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_fetch_sends_paging_and_parses_response():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=HEADLINES)

    response = await _source(handler, country="gb").fetch(page=2, page_size=10)

    request = seen[0]
    assert request.url.path == "/v2/top-headlines"
    assert request.url.params["country"] == "gb"
    assert request.url.params["page"] == "2"
    assert request.url.params["pageSize"] == "10"
    assert request.url.params["apiKey"] == "secret"
    assert response.total_results == 2
    assert [a.url for a in response.articles] == ["https://test.com/1", "https://test.com/2"]
    assert response.articles[1].display_author == "Unknown Author"


@pytest.mark.asyncio
async def test_non_200_raises_server_error():
    source = _source(lambda request: httpx.Response(500, text="oops"))

    with pytest.raises(ServerError) as exc_info:
        await source.fetch()

    assert exc_info.value.code == 500
    assert str(exc_info.value) == "Server error with code: 500"


@pytest.mark.asyncio
async def test_server_error_includes_api_message():
    body = {"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid."}
    source = _source(lambda request: httpx.Response(401, json=body))

    with pytest.raises(ServerError) as exc_info:
        await source.fetch()

    assert exc_info.value.code == 401
    assert "Your API key is invalid." in str(exc_info.value)


@pytest.mark.asyncio
async def test_error_status_in_ok_response_raises_server_error():
    body = {"status": "error", "message": "rateLimited"}
    source = _source(lambda request: httpx.Response(200, json=body))

    with pytest.raises(ServerError, match="rateLimited"):
        await source.fetch()


@pytest.mark.asyncio
async def test_invalid_json_raises_decode_failure():
    source = _source(lambda request: httpx.Response(200, text="<html>not json</html>"))

    with pytest.raises(DecodeFailure):
        await source.fetch()


@pytest.mark.asyncio
async def test_schema_mismatch_raises_decode_failure():
    body = {"status": "ok", "totalResults": 1, "articles": [{"title": "No URL here"}]}
    source = _source(lambda request: httpx.Response(200, json=body))

    with pytest.raises(DecodeFailure):
        await source.fetch()


@pytest.mark.asyncio
async def test_timeout_raises_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(Unavailable, match="timed out"):
        await _source(handler).fetch()


@pytest.mark.asyncio
async def test_connect_error_raises_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(Unavailable):
        await _source(handler).fetch()


@pytest.mark.asyncio
@pytest.mark.parametrize("page,page_size", [(0, 20), (1, 0), (1, 101)])
async def test_invalid_paging_raises_invalid_request(page, page_size):
    source = _source(lambda request: httpx.Response(200, json=HEADLINES))

    with pytest.raises(InvalidRequest):
        await source.fetch(page=page, page_size=page_size)


@pytest.mark.asyncio
async def test_invalid_base_url_raises_invalid_request():
    source = _source(lambda request: httpx.Response(200, json=HEADLINES), base_url="newsapi.org/v2")

    with pytest.raises(InvalidRequest):
        await source.fetch()


def test_is_available_uses_reachability():
    source = NewsAPISource(api_key="k", reachability=Reachability("https://newsapi.org", force_offline=True))
    assert source.is_available() is False


def test_reachability_probe():
    reachability = Reachability("https://newsapi.org/v2", timeout=1.0)
    assert reachability.host == "newsapi.org"
    assert reachability.port == 443

    with patch("newscache.remote.reachability.socket.create_connection") as connect:
        connect.return_value = MagicMock()
        assert reachability.is_available() is True
        connect.assert_called_once_with(("newsapi.org", 443), timeout=1.0)

    with patch(
        "newscache.remote.reachability.socket.create_connection",
        side_effect=OSError("unreachable"),
    ):
        assert reachability.is_available() is False


@pytest.mark.asyncio
async def test_create_remote_source_without_key_never_serves_articles():
    api_config = {"base_url": "https://newsapi.org/v2", "api_key": None}

    source = create_remote_source(api_config, {"force_offline": False})

    assert isinstance(source, UnconfiguredRemoteSource)
    with pytest.raises(InvalidRequest, match="No NewsAPI key configured"):
        await source.fetch()


def test_create_remote_source_without_key_respects_force_offline():
    api_config = {"base_url": "https://newsapi.org/v2", "api_key": None}

    source = create_remote_source(api_config, {"force_offline": True})

    assert source.is_available() is False


def test_reachability_malformed_host_is_unavailable():
    reachability = Reachability("https://a..b/v2")

    with patch(
        "newscache.remote.reachability.socket.create_connection",
        side_effect=UnicodeError("encoding with 'idna' codec failed (label empty or too long)"),
    ):
        assert reachability.is_available() is False


def test_create_remote_source_with_key():
    api_config = {
        "base_url": "https://newsapi.org/v2",
        "api_key": "k",
        "country": "de",
        "request_timeout": 5.0,
        "resource_timeout": 10.0,
    }

    source = create_remote_source(api_config, {"probe_timeout": 1.5, "force_offline": True})

    assert isinstance(source, NewsAPISource)
    assert source.country == "de"
    assert source.reachability.timeout == 1.5
    assert source.is_available() is False
