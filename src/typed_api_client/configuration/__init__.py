"""Client options, authentication variants and fluent builders.

Example:
    ```python
    from typed_api_client.configuration import ApiClientOptions, ApiClientOptionsBuilder

    options = ApiClientOptions.create("https://api.example.com").with_max_retry_count(5).with_api_key_authentication("k1")

    options = (
        ApiClientOptionsBuilder()
        .with_base_url("https://api.example.com")
        .with_api_path_prefix("v1")
        .with_entra_id_authentication("api://my-api")
        .build()
    )
    ```
"""

from typed_api_client.configuration.authentication import (
    DEFAULT_API_KEY_HEADER,
    SUBSCRIPTION_KEY_HEADER,
    ApiKeyAuthenticationOptions,
    ApiKeyLocation,
    AuthenticationOptions,
    AuthenticationType,
    ClientCredentialAuthenticationOptions,
    EntraIdAuthenticationOptions,
    require_text,
)
from typed_api_client.configuration.builder import ApiClientOptionsBuilder, BaseApiClientOptionsBuilder
from typed_api_client.configuration.environment import EnvironmentSettings
from typed_api_client.configuration.options import (
    DEFAULT_MAX_RETRY_COUNT,
    ApiClientOptions,
    ApiClientOptionsBase,
)

__all__ = [
    "DEFAULT_API_KEY_HEADER",
    "DEFAULT_MAX_RETRY_COUNT",
    "SUBSCRIPTION_KEY_HEADER",
    "ApiClientOptions",
    "ApiClientOptionsBase",
    "ApiClientOptionsBuilder",
    "ApiKeyAuthenticationOptions",
    "ApiKeyLocation",
    "AuthenticationOptions",
    "AuthenticationType",
    "BaseApiClientOptionsBuilder",
    "ClientCredentialAuthenticationOptions",
    "EntraIdAuthenticationOptions",
    "EnvironmentSettings",
    "require_text",
]
