"""Rest transport services.

A transport executes a prepared ``RestRequest`` against a base URL and
returns the raw ``httpx.Response``. Ordinary HTTP error statuses are
returned, never raised.
"""

import asyncio
import logging
from typing import Protocol, runtime_checkable

import httpx

from typed_api_client.errors.exceptions import TransportClosedError
from typed_api_client.request import RestRequest
from typed_api_client.transport.retry import (
    MAX_RETRIES_EXTENSION,
    TRANSIENT_EXCEPTIONS,
    TransientFailureRetry,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0
DEFAULT_MAX_RETRIES = 3

TRANSPORT_ERROR_CODE = "TransportError"


@runtime_checkable
class RestClientService(Protocol):
    """Executes requests against a base URL."""

    async def execute(
        self,
        base_url: str,
        request: RestRequest,
        *,
        max_retries: int | None = None,
    ) -> httpx.Response:
        """Send ``request`` relative to ``base_url``.

        Args:
            base_url: Absolute http(s) URL the request resource is relative to
            request: The prepared request
            max_retries: Retry bound for transient failures, or None for the transport default
        """
        ...

    async def aclose(self) -> None:
        """Release every resource held by the transport."""
        ...


def validate_base_url(base_url: str) -> str:
    """Check ``base_url`` is an absolute http(s) URL.

    Raises:
        ValueError: If the URL is empty, relative or not http(s).
    """
    if not base_url or not base_url.strip():
        raise ValueError("Base URL cannot be null or empty")
    try:
        url = httpx.URL(base_url.strip())
    except httpx.InvalidURL as e:
        raise ValueError(f"Malformed base URL: {base_url}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"Malformed base URL: {base_url}")
    return base_url.strip()


class HttpxRestClientService:
    """Production transport built on ``httpx.AsyncClient``.

    One client is kept per distinct base URL (compared case-insensitively),
    created on first use. Every client sends through a ``TransientFailureRetry``
    wrapping either the given transport or a fresh ``httpx.AsyncHTTPTransport``.

    Args:
        timeout: Request timeout in seconds (default: 300)
        transport: Transport to wrap, mainly ``httpx.MockTransport`` in tests
        max_retries: Retry bound when the caller passes none (default: 3)
        retry_backoff_factor: Backoff multiplier for the retry transport
        max_backoff: Upper bound on a single retry delay in seconds
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_backoff_factor: float = 0.5,
        max_backoff: float = 30.0,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._max_retries = max_retries
        self._retry_backoff_factor = retry_backoff_factor
        self._max_backoff = max_backoff
        self._clients: dict[str, httpx.AsyncClient] = {}
        self._lock = asyncio.Lock()
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def client_count(self) -> int:
        return len(self._clients)

    async def execute(
        self,
        base_url: str,
        request: RestRequest,
        *,
        max_retries: int | None = None,
    ) -> httpx.Response:
        """Send ``request`` relative to ``base_url``.

        Returns:
            The raw response. Transient failures that outlast every retry come
            back as a synthesized 503 response.

        Raises:
            TransportClosedError: If the service has been closed
            ValueError: For an empty or malformed base URL, or a missing request
        """
        self._ensure_open()
        base_url = validate_base_url(base_url)
        if request is None:
            raise ValueError("Request cannot be null")

        client = await self._get_client(base_url)
        extensions = {}
        if max_retries is not None:
            extensions[MAX_RETRIES_EXTENSION] = max_retries

        http_request = client.build_request(
            request.method,
            request.resource,
            params=request.params or None,
            headers=request.headers,
            json=request.json,
            extensions=extensions,
        )

        try:
            return await client.send(http_request)
        except TRANSIENT_EXCEPTIONS as e:
            logger.error(
                f"Request {http_request.method} {http_request.url} failed after retries with "
                f"{type(e).__name__}: {e}"
            )
            return _transport_failure_response(http_request, e)

    async def _get_client(self, base_url: str) -> httpx.AsyncClient:
        key = base_url.casefold()
        client = self._clients.get(key)
        if client is not None:
            return client

        async with self._lock:
            self._ensure_open()
            client = self._clients.get(key)
            if client is None:
                logger.debug(f"Creating HTTP client for base URL: {base_url}")
                client = httpx.AsyncClient(
                    base_url=base_url,
                    timeout=self._timeout,
                    transport=TransientFailureRetry(
                        wrapped_transport=self._transport or httpx.AsyncHTTPTransport(),
                        max_retries=self._max_retries,
                        backoff_factor=self._retry_backoff_factor,
                        max_backoff=self._max_backoff,
                    ),
                )
                self._clients[key] = client
            return client

    def _ensure_open(self) -> None:
        if self._closed:
            raise TransportClosedError(f"{type(self).__name__} has been closed")

    async def aclose(self) -> None:
        async with self._lock:
            if self._closed:
                return
            self._closed = True
            clients = list(self._clients.values())
            self._clients.clear()
        for client in clients:
            await client.aclose()
        logger.debug(f"Closed {len(clients)} HTTP client(s)")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type=None, exc_val=None, exc_tb=None):
        await self.aclose()


def _transport_failure_response(request: httpx.Request, error: Exception) -> httpx.Response:
    return httpx.Response(
        503,
        json={
            "errors": [
                {
                    "code": TRANSPORT_ERROR_CODE,
                    "message": f"Request failed after retries: {type(error).__name__}",
                    "detail": str(error) or None,
                }
            ]
        },
        request=request,
    )
