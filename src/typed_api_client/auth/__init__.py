"""Authentication components for typed API clients.

This module provides:
- The token provider capability used for Entra ID bearer tokens
- An azure-identity backed provider with per-audience token caching
- Credential providers for DefaultAzureCredential and client secrets

Example:
    ```python
    from typed_api_client.auth import AzureIdentityTokenProvider, ClientCredentialProvider

    provider = AzureIdentityTokenProvider(ClientCredentialProvider(tenant_id, client_id, client_secret))
    token = await provider.get_access_token("api://my-api")
    ```
"""

from typed_api_client.auth.credentials import (
    ClientCredentialProvider,
    DefaultCredentialProvider,
    TokenCredentialProvider,
)
from typed_api_client.auth.exceptions import AuthenticationError, TokenAcquisitionError
from typed_api_client.auth.token_provider import (
    ApiTokenProvider,
    AzureIdentityTokenProvider,
    create_default_token_provider,
)

__all__ = [
    "ApiTokenProvider",
    "AuthenticationError",
    "AzureIdentityTokenProvider",
    "ClientCredentialProvider",
    "DefaultCredentialProvider",
    "TokenAcquisitionError",
    "TokenCredentialProvider",
    "create_default_token_provider",
]
