"""Retry transport for transient failures.

Transient failures are network-level errors (timeouts, connection and read
errors, broken protocol exchanges) and 5xx responses. 4xx responses are
returned as-is.

## Backoff

Exponential, capped, with "equal jitter": for retry ``n`` the ceiling is
``min(backoff_factor * 2 ** (n - 1), max_backoff)``; half of it is always
waited and the other half is random. A ``Retry-After`` header on a 5xx
response overrides the computed delay (still capped).

| Retry | Ceiling (backoff_factor=0.5) | Delay range |
|-------|------------------------------|-------------|
| 1 | 0.5s | 0.25s - 0.5s |
| 2 | 1s | 0.5s - 1s |
| 3 | 2s | 1s - 2s |

## Example

```python
import httpx

from typed_api_client.transport.retry import TransientFailureRetry

transport = TransientFailureRetry(
    wrapped_transport=httpx.AsyncHTTPTransport(),
    max_retries=3,
)

async with httpx.AsyncClient(transport=transport) as client:
    response = await client.get("https://api.example.com/users/1")
```

The retry bound can be set per request through
``request.extensions["max_retries"]``.
"""

import asyncio
import logging
import random
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import httpx

logger = logging.getLogger(__name__)

MAX_RETRIES_EXTENSION = "max_retries"

TRANSIENT_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


class TransientFailureRetry(httpx.AsyncBaseTransport):
    """Retry transport for network failures and server errors.

    Args:
        wrapped_transport: The underlying transport to wrap
        max_retries: Default maximum number of retry attempts (default: 3)
        backoff_factor: Multiplier for exponential backoff (default: 0.5)
        max_backoff: Maximum backoff time in seconds (default: 30)
        jitter: Randomise half of each delay (default: True)
        retry_status_codes: Status codes that trigger retries (default: every 5xx)
    """

    def __init__(
        self,
        *,
        wrapped_transport: httpx.AsyncBaseTransport,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
        max_backoff: float = 30.0,
        jitter: bool = True,
        retry_status_codes: frozenset[int] | None = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be greater than or equal to 0")
        self._wrapped_transport = wrapped_transport
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.max_backoff = max_backoff
        self.jitter = jitter
        self.retry_status_codes = retry_status_codes

    async def __aenter__(self):
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type=None, exc_val=None, exc_tb=None):
        await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request, retrying transient failures.

        Args:
            request: The HTTP request to send

        Returns:
            The first non-retryable response, or the last response once retries are exhausted

        Raises:
            The last transient exception once retries are exhausted, or any
            non-transient exception immediately
        """
        max_retries = self._max_retries_for(request)
        retries = 0

        while True:
            try:
                response = await self._wrapped_transport.handle_async_request(request)
            except TRANSIENT_EXCEPTIONS as e:
                if retries >= max_retries:
                    raise

                retries += 1
                delay = self._calculate_backoff_delay(retries)

                logger.warning(
                    f"Request {request.method} {request.url} failed with {type(e).__name__}: {e}, "
                    f"retrying in {delay:.2f}s (attempt {retries}/{max_retries})"
                )

                await asyncio.sleep(delay)
                continue

            if retries >= max_retries or not self._is_retryable_status(response.status_code):
                return response

            retries += 1
            delay = self._parse_retry_after(response)
            if delay is None:
                delay = self._calculate_backoff_delay(retries)

            logger.warning(
                f"Request {request.method} {request.url} failed with {response.status_code}, "
                f"retrying in {delay:.2f}s (attempt {retries}/{max_retries})"
            )

            # Release the connection before retrying
            await response.aclose()
            await asyncio.sleep(delay)

    def _max_retries_for(self, request: httpx.Request) -> int:
        value = request.extensions.get(MAX_RETRIES_EXTENSION)
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
        return self.max_retries

    def _is_retryable_status(self, status_code: int) -> bool:
        if self.retry_status_codes is not None:
            return status_code in self.retry_status_codes
        return 500 <= status_code < 600

    def _calculate_backoff_delay(self, retry_number: int) -> float:
        """Calculate capped exponential backoff with equal jitter.

        Args:
            retry_number: Current retry attempt (1-indexed)

        Returns:
            Delay in seconds
        """
        ceiling = min(self.backoff_factor * (2 ** (retry_number - 1)), self.max_backoff)
        if not self.jitter:
            return ceiling
        half = ceiling / 2
        return half + random.uniform(0, half)

    def _parse_retry_after(self, response: httpx.Response) -> float | None:
        """Parse Retry-After header from response.

        Supports both formats:
        - Delay-seconds: "120" (integer seconds)
        - HTTP-date: "Wed, 21 Oct 2015 07:28:00 GMT"

        Returns:
            Delay in seconds capped at max_backoff, or None if missing or invalid
        """
        retry_after = response.headers.get("Retry-After")
        if not retry_after:
            return None

        try:
            delay = int(retry_after)
            if delay < 0:
                return None
            return float(min(delay, self.max_backoff))
        except ValueError:
            pass

        try:
            retry_date = parsedate_to_datetime(retry_after)
            delay = (retry_date - datetime.now(UTC)).total_seconds()
            if delay < 0:
                return None
            return float(min(delay, self.max_backoff))
        except (ValueError, TypeError):
            return None
