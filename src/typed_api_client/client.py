"""Base class for typed API clients.

A client turns a logical ``(resource, method)`` pair into an executed HTTP
round trip and a typed ``ApiResult``:

1. ``create_request`` prefixes the resource and attaches authentication
2. ``execute`` sends the request through the rest transport (which retries)
3. ``to_api_result`` maps the raw response onto the envelope

Example:
    ```python
    class UserApi(BaseApi[ApiClientOptions]):
        async def get_user(self, user_id: str) -> ApiResult[User]:
            request = await self.create_request(f"users/{user_id}")
            response = await self.execute(request)
            return self.to_api_result(response, User)


    options = ApiClientOptions.create("https://users.example.com").with_api_key_authentication("k1")
    async with UserApi(options) as api:
        result = await api.get_user("123")
    ```
"""

import asyncio
import logging
from typing import Any, ClassVar, Generic

import httpx

from typed_api_client.auth.exceptions import AuthenticationError
from typed_api_client.auth.token_provider import ApiTokenProvider, create_default_token_provider
from typed_api_client.configuration.authentication import (
    ApiKeyAuthenticationOptions,
    ApiKeyLocation,
    EntraIdAuthenticationOptions,
)
from typed_api_client.configuration.builder import (
    ApiClientOptionsBuilder,
    BaseApiClientOptionsBuilder,
    TOptions,
)
from typed_api_client.envelope import ApiResult, to_api_result
from typed_api_client.errors.exceptions import ConfigurationError
from typed_api_client.request import FilterOptions, RestRequest
from typed_api_client.transport.service import HttpxRestClientService, RestClientService


class BaseApi(Generic[TOptions]):
    """Composes options, token provider and transport into a request pipeline.

    The options are validated and frozen by the constructor. A transport
    created here is owned by the client and closed by ``aclose()``; an
    injected transport is left open.

    Args:
        options: Client options (base URL, prefix, retries, authentication)
        transport: Rest transport. Defaults to an owned ``HttpxRestClientService``.
        token_provider: Token provider for Entra ID authentication
        logger: Logger for this client. Defaults to one named after the client class.

    Raises:
        ValueError: If options is None
        ConfigurationError: If the options are not usable (e.g. no base URL)
    """

    builder_class: ClassVar[type[BaseApiClientOptionsBuilder]] = ApiClientOptionsBuilder

    def __init__(
        self,
        options: TOptions,
        *,
        transport: RestClientService | None = None,
        token_provider: ApiTokenProvider | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if options is None:
            raise ValueError("Options cannot be null")
        options.validate()
        options.freeze()

        self.options = options
        self.logger = logger or logging.getLogger(f"{type(self).__module__}.{type(self).__qualname__}")
        self._owns_transport = transport is None
        self._transport: RestClientService = transport if transport is not None else HttpxRestClientService()
        self._token_provider = token_provider
        self._owns_token_provider = False

        if isinstance(options.authentication_options, EntraIdAuthenticationOptions) and token_provider is None:
            self.logger.warning(
                f"Entra ID authentication is configured for audience "
                f"'{options.authentication_options.api_audience}' but no token provider was supplied; "
                "requests will fail"
            )

    @classmethod
    def create(
        cls,
        options: TOptions,
        *,
        transport: RestClientService | None = None,
        logger: logging.Logger | None = None,
    ):
        """Create a client with the production token provider for its authentication variant.

        The token provider (if any) is owned by the client and closed with it.
        """
        if options is None:
            raise ValueError("Options cannot be null")
        token_provider = create_default_token_provider(options.authentication_options)
        client = cls(options, transport=transport, token_provider=token_provider, logger=logger)
        client._owns_token_provider = token_provider is not None
        return client

    @property
    def transport(self) -> RestClientService:
        return self._transport

    @property
    def token_provider(self) -> ApiTokenProvider | None:
        return self._token_provider

    async def create_request(self, resource: str, method: str = "GET") -> RestRequest:
        """Build a request for ``api_path_prefix + resource`` with authentication applied.

        Raises:
            ValueError: If resource is empty
            ConfigurationError: If Entra ID authentication is configured without a token provider
            AuthenticationError: If no usable token can be acquired
        """
        if not resource:
            raise ValueError("Resource cannot be null or empty")

        request = RestRequest(self.options.resolve_resource(resource), method)
        authentication = self.options.authentication_options

        if isinstance(authentication, ApiKeyAuthenticationOptions):
            if authentication.location is ApiKeyLocation.QUERY_PARAMETER:
                request.add_query_parameter(authentication.header_name, authentication.api_key)
            else:
                request.add_header(authentication.header_name, authentication.api_key)
            self.logger.debug(
                f"Applied API key authentication using {authentication.location.value} '{authentication.header_name}'"
            )
        elif isinstance(authentication, EntraIdAuthenticationOptions):
            token = await self._get_access_token(authentication.api_audience)
            request.add_header("Authorization", f"Bearer {token}")
            self.logger.debug(f"Applied Entra ID authentication for audience '{authentication.api_audience}'")

        return request

    async def _get_access_token(self, audience: str) -> str:
        if self._token_provider is None:
            raise ConfigurationError(
                f"Entra ID authentication is configured for audience '{audience}' but no token provider was supplied"
            )

        try:
            token = await self._token_provider.get_access_token(audience)
        except AuthenticationError:
            raise
        except Exception as e:
            self.logger.error(f"Failed to acquire token for audience '{audience}': {e}")
            raise AuthenticationError(f"Failed to acquire token for audience '{audience}'") from e

        if not token or not token.strip():
            raise AuthenticationError(f"Token provider returned an empty token for audience '{audience}'")
        return token

    async def execute(self, request: RestRequest) -> httpx.Response:
        """Send ``request`` to the configured base URL.

        HTTP error statuses are returned, not raised. Cancellation propagates.
        """
        if request is None:
            raise ValueError("Request cannot be null")
        try:
            return await self._transport.execute(
                self.options.base_url,
                request,
                max_retries=self.options.max_retry_count,
            )
        except asyncio.CancelledError:
            self.logger.info(f"Request {request.method} {request.resource} was cancelled")
            raise

    def to_api_result(self, response: httpx.Response, result_type: Any = Any) -> ApiResult:
        return to_api_result(response, result_type)

    async def send(
        self,
        resource: str,
        method: str = "GET",
        result_type: Any = Any,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        filter_options: FilterOptions | None = None,
    ) -> ApiResult:
        """Create, execute and map a request in one call."""
        request = await self.create_request(resource, method)
        for name, value in (params or {}).items():
            request.add_query_parameter(name, value)
        request.add_filter_options(filter_options)
        if json is not None:
            request.add_json_body(json)

        response = await self.execute(request)
        return self.to_api_result(response, result_type)

    async def aclose(self) -> None:
        """Close the transport and token provider if this client created them."""
        if self._owns_transport:
            await self._transport.aclose()
        if self._owns_token_provider and self._token_provider is not None:
            await self._token_provider.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type=None, exc_val=None, exc_tb=None):
        await self.aclose()
