"""Helpers that wire clients to test doubles."""

from collections.abc import Callable
from typing import TypeVar

from typed_api_client.auth.token_provider import ApiTokenProvider
from typed_api_client.client import BaseApi
from typed_api_client.configuration.authentication import EntraIdAuthenticationOptions
from typed_api_client.configuration.builder import BaseApiClientOptionsBuilder
from typed_api_client.testing.fake_token_provider import FakeApiTokenProvider
from typed_api_client.testing.in_memory import InMemoryRestClientService

TClient = TypeVar("TClient", bound=BaseApi)


def create_test_client(
    client_class: type[TClient],
    configure: Callable[[BaseApiClientOptionsBuilder], object],
    *,
    configure_transport: Callable[[InMemoryRestClientService], object] | None = None,
    token_provider: ApiTokenProvider | None = None,
) -> tuple[TClient, InMemoryRestClientService]:
    """Build ``client_class`` against an in-memory transport.

    Options are configured on a fresh ``client_class.builder_class``. When
    Entra ID authentication is configured and no token provider is given, a
    ``FakeApiTokenProvider`` is supplied.

    Args:
        client_class: The ``BaseApi`` subclass to build
        configure: Callback configuring the options builder
        configure_transport: Optional callback registering responses on the transport
        token_provider: Token provider to use instead of the fake

    Returns:
        The client and its in-memory transport

    Example:
        ```python
        client, transport = create_test_client(
            UserApi,
            lambda builder: builder.with_base_url("https://test.example.com"),
            configure_transport=lambda t: t.add_response("users/123", create_envelope_response({"id": "123"})),
        )
        result = await client.get_user("123")
        assert transport.was_called("users/123")
        ```
    """
    if configure is None:
        raise ValueError("Configure callback cannot be null")

    builder = client_class.builder_class()
    configure(builder)
    options = builder.build()

    transport = InMemoryRestClientService()
    if configure_transport is not None:
        configure_transport(transport)

    if token_provider is None and isinstance(options.authentication_options, EntraIdAuthenticationOptions):
        token_provider = FakeApiTokenProvider()

    client = client_class(options, transport=transport, token_provider=token_provider)
    return client, transport
