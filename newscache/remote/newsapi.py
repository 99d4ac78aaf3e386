"""Remote source interface and the NewsAPI implementation."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from ..models import NewsResponse
from ..utils.logging import get_logger
from .errors import DecodeFailure, InvalidRequest, ServerError, Unavailable
from .reachability import Reachability

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100


class RemoteSource(ABC):
    """Abstract base class for remote article feeds."""

    @abstractmethod
    async def fetch(self, page: int = 1, page_size: int = 20) -> NewsResponse:
        """
        Fetch one page of articles.

        Args:
            page: 1-based page number
            page_size: Articles per page

        Returns:
            Parsed response

        Raises:
            NetworkError: InvalidRequest, Unavailable, ServerError or DecodeFailure
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the feed is reachable right now."""
        pass


class NewsAPISource(RemoteSource):
    """Top headlines from newsapi.org."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://newsapi.org/v2",
        country: str = "us",
        request_timeout: float = 30.0,
        resource_timeout: float = 60.0,
        reachability: Optional[Reachability] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize NewsAPI source.

        Args:
            api_key: NewsAPI key
            base_url: API base URL
            country: Two-letter country code for headlines
            request_timeout: Timeout for each network phase, in seconds
            resource_timeout: Timeout for the whole fetch, in seconds
            reachability: Connectivity check, defaults to probing the API host
            transport: Custom httpx transport (used by tests)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.country = country
        self.request_timeout = request_timeout
        self.resource_timeout = resource_timeout
        self.reachability = reachability or Reachability(self.base_url)
        self.transport = transport

    def _endpoint(self) -> str:
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidRequest(f"Invalid URL: {self.base_url}")
        return f"{self.base_url}/top-headlines"

    def _validate_paging(self, page: int, page_size: int) -> None:
        if page < 1:
            raise InvalidRequest(f"Page must be positive, got {page}")
        if page_size < 1 or page_size > MAX_PAGE_SIZE:
            raise InvalidRequest(f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")

    def is_available(self) -> bool:
        return self.reachability.is_available()

    async def fetch(self, page: int = 1, page_size: int = 20) -> NewsResponse:
        """Fetch a page of top headlines."""
        url = self._endpoint()
        self._validate_paging(page, page_size)

        params = {
            "country": self.country,
            "page": page,
            "pageSize": page_size,
            "apiKey": self.api_key,
        }
        headers = {"Content-Type": "application/json"}

        logger.debug("Fetching headlines page %d (size %d)", page, page_size)
        try:
            async with httpx.AsyncClient(
                timeout=self.request_timeout,
                headers=headers,
                transport=self.transport,
            ) as client:
                response = await asyncio.wait_for(
                    client.get(url, params=params),
                    timeout=self.resource_timeout,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError):
            raise Unavailable("Request timed out")
        except httpx.TransportError as e:
            raise Unavailable(f"Network is unavailable: {e}")

        if response.status_code != 200:
            raise ServerError(response.status_code, _error_message(response))

        try:
            payload = response.json()
        except ValueError:
            raise DecodeFailure()

        if isinstance(payload, dict) and payload.get("status") not in (None, "ok"):
            raise ServerError(
                response.status_code,
                payload.get("message") or f"API returned status {payload.get('status')!r}",
            )

        try:
            news = NewsResponse.model_validate(payload)
        except ValidationError as e:
            raise DecodeFailure(f"Failed to decode response: {e.error_count()} invalid fields")

        logger.info("Fetched %d of %d headlines", len(news.articles), news.total_results)
        return news


def _error_message(response: httpx.Response) -> str:
    """Server error text, using the API's own message when it sent one."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return f"Server error with code: {response.status_code} ({payload['message']})"
    return f"Server error with code: {response.status_code}"


class UnconfiguredRemoteSource(RemoteSource):
    """Stand-in used when no API key is set; every fetch fails with InvalidRequest."""

    def __init__(self, reachability: Reachability) -> None:
        self.reachability = reachability

    def is_available(self) -> bool:
        return self.reachability.is_available()

    async def fetch(self, page: int = 1, page_size: int = 20) -> NewsResponse:
        raise InvalidRequest("No NewsAPI key configured")


def create_remote_source(api_config: Dict[str, Any], network_config: Dict[str, Any]) -> RemoteSource:
    """Build the configured remote source. Without an API key fetches fall back to the cache."""
    reachability = Reachability(
        api_config["base_url"],
        timeout=network_config.get("probe_timeout", 3.0),
        force_offline=network_config.get("force_offline", False),
    )

    api_key = api_config.get("api_key")
    if not api_key:
        logger.warning(
            "No NewsAPI key found. Set %s to fetch headlines.",
            api_config.get("api_key_env", "NEWSAPI_KEY"),
        )
        return UnconfiguredRemoteSource(reachability)

    return NewsAPISource(
        api_key=api_key,
        base_url=api_config["base_url"],
        country=api_config.get("country", "us"),
        request_timeout=api_config.get("request_timeout", 30.0),
        resource_timeout=api_config.get("resource_timeout", 60.0),
        reachability=reachability,
    )
