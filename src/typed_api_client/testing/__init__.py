"""Testing utilities for typed API clients.

This module provides test doubles that implement the same capabilities as
the production components, plus response factories and wiring helpers.

Modules:
    in_memory: In-memory rest transport
    fake_token_provider: Deterministic token provider
    factories: Envelope response factories
    helpers: Client construction against the test doubles

Example:
    ```python
    from typed_api_client.testing import create_error_response, create_test_client


    async def test_client_handles_404():
        client, transport = create_test_client(UserApi, lambda b: b.with_base_url("https://test.local"))
        transport.add_response("users/missing", create_error_response(404))

        result = await client.get_user("missing")
        assert result.is_not_found
    ```
"""

from typed_api_client.testing.factories import create_envelope_response, create_error_response
from typed_api_client.testing.fake_token_provider import DEFAULT_FAKE_TOKEN, FakeApiTokenProvider, TokenRequest
from typed_api_client.testing.helpers import create_test_client
from typed_api_client.testing.in_memory import InMemoryRestClientService

__all__ = [
    "DEFAULT_FAKE_TOKEN",
    "FakeApiTokenProvider",
    "InMemoryRestClientService",
    "TokenRequest",
    "create_envelope_response",
    "create_error_response",
    "create_test_client",
]
