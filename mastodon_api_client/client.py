"""Mastodon REST API client using httpx.

Each call sends exactly one request. There is no retry, throttling or
caching; callers that want more than one page chain calls themselves (or use
``iter_pages``), passing each page's cursor into the next call.
"""

import logging
from typing import Any

import httpx

from .endpoints import Endpoint, Paged
from .entities import decode
from .errors import api_error_from_response
from .models import PagedResult
from .pagination import parse_link_header
from .settings import get_settings, normalize_instance_url

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "mastodon-api-client"


class _BaseMastodonAPIClient:
    """Request building and response handling shared by the sync and async clients."""

    def __init__(self, instance_url: str, access_token: str | None = None):
        self.instance_url = normalize_instance_url(instance_url)
        # Last write wins; not guarded against concurrent in-flight requests.
        self.access_token = access_token

    def _target(self, endpoint: Endpoint | Paged, access_token: str | None = None) -> dict[str, Any]:
        token = access_token or self.access_token
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return {
            "method": endpoint.method,
            "url": f"{self.instance_url}{endpoint.path}",
            "params": endpoint.query_params(),
            "json": endpoint.body,
            "headers": headers,
        }

    def _check(self, response: httpx.Response) -> httpx.Response:
        """Raise for non-2xx, preferring a decoded APIError over the transport error."""
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            api_error = api_error_from_response(response)
            if api_error is None:
                raise
            logger.info("API error %s from %s: %s", response.status_code, response.request.url, api_error)
            raise api_error from e
        return response

    def _paged_result(self, endpoint: Paged, response: httpx.Response) -> PagedResult:
        # Both halves read the same buffered response.
        result = decode(endpoint.result_type, response.content)
        info = parse_link_header(response.headers.get("link"))
        return PagedResult(result=result, info=info)


class MastodonAPIClient(_BaseMastodonAPIClient):
    """Blocking client for one Mastodon instance."""

    def __init__(
        self,
        instance_url: str,
        access_token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: httpx.Client | None = None,
    ):
        super().__init__(instance_url, access_token)
        self._client = http_client or httpx.Client(
            headers={"Accept": "application/json", "User-Agent": user_agent},
            timeout=timeout,
        )

    def _send(self, endpoint: Endpoint | Paged, access_token: str | None = None) -> httpx.Response:
        request = self._client.build_request(**self._target(endpoint, access_token))
        logger.debug("%s %s", request.method, request.url)
        return self._check(self._client.send(request))

    def request(self, endpoint: Endpoint, *, access_token: str | None = None) -> Any:
        """Send ``endpoint`` and return its decoded body.

        Raises:
            APIError: non-2xx status with an API error body.
            httpx.HTTPStatusError: non-2xx status with any other body.
            httpx.TransportError: the request never got a response.
            pydantic.ValidationError: the body does not decode as the result type.
        """
        response = self._send(endpoint, access_token)
        return decode(endpoint.result_type, response.content)

    def paged_request(
        self,
        endpoint: Endpoint,
        *,
        max_id: str | None = None,
        min_id: str | None = None,
        since_id: str | None = None,
        limit: int | None = None,
        access_token: str | None = None,
    ) -> PagedResult:
        """Send one page of a list endpoint and return the body with its cursors."""
        paged = Paged(endpoint, max_id=max_id, min_id=min_id, since_id=since_id, limit=limit)
        response = self._send(paged, access_token)
        return self._paged_result(paged, response)

    def iter_pages(
        self,
        endpoint: Endpoint,
        *,
        max_id: str | None = None,
        limit: int | None = None,
        max_pages: int | None = None,
        access_token: str | None = None,
    ):
        """Yield successive older pages, following each page's max_id."""
        pages = 0
        while max_pages is None or pages < max_pages:
            page = self.paged_request(endpoint, max_id=max_id, limit=limit, access_token=access_token)
            pages += 1
            yield page
            if not page.result or not page.info.max_id:
                return
            max_id = page.info.max_id

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class AsyncMastodonAPIClient(_BaseMastodonAPIClient):
    """asyncio client for one Mastodon instance.

    Cancelling the awaiting task abandons the in-flight request.
    """

    def __init__(
        self,
        instance_url: str,
        access_token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(instance_url, access_token)
        self._client = http_client or httpx.AsyncClient(
            headers={"Accept": "application/json", "User-Agent": user_agent},
            timeout=timeout,
        )

    async def _send(self, endpoint: Endpoint | Paged, access_token: str | None = None) -> httpx.Response:
        request = self._client.build_request(**self._target(endpoint, access_token))
        logger.debug("%s %s", request.method, request.url)
        return self._check(await self._client.send(request))

    async def request(self, endpoint: Endpoint, *, access_token: str | None = None) -> Any:
        response = await self._send(endpoint, access_token)
        return decode(endpoint.result_type, response.content)

    async def paged_request(
        self,
        endpoint: Endpoint,
        *,
        max_id: str | None = None,
        min_id: str | None = None,
        since_id: str | None = None,
        limit: int | None = None,
        access_token: str | None = None,
    ) -> PagedResult:
        paged = Paged(endpoint, max_id=max_id, min_id=min_id, since_id=since_id, limit=limit)
        response = await self._send(paged, access_token)
        return self._paged_result(paged, response)

    async def iter_pages(
        self,
        endpoint: Endpoint,
        *,
        max_id: str | None = None,
        limit: int | None = None,
        max_pages: int | None = None,
        access_token: str | None = None,
    ):
        pages = 0
        while max_pages is None or pages < max_pages:
            page = await self.paged_request(endpoint, max_id=max_id, limit=limit, access_token=access_token)
            pages += 1
            yield page
            if not page.result or not page.info.max_id:
                return
            max_id = page.info.max_id

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()


# Shared clients keyed by (instance_url, access_token)
_clients: dict[tuple, MastodonAPIClient] = {}


def get_client(instance_url: str | None = None, access_token: str | None = None) -> MastodonAPIClient:
    """Get or create a MastodonAPIClient, filling gaps from settings."""
    settings = get_settings()
    instance_url = instance_url or settings.mastodon_instance_url
    if not instance_url:
        raise RuntimeError("MASTODON_INSTANCE_URL is not set")
    access_token = access_token or settings.mastodon_access_token

    key = (normalize_instance_url(instance_url), access_token)
    if key not in _clients:
        _clients[key] = MastodonAPIClient(
            instance_url,
            access_token,
            timeout=settings.mastodon_timeout,
            user_agent=settings.mastodon_user_agent,
        )
    return _clients[key]
