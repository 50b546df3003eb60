"""Bearer token resolution for Entra ID authenticated clients."""

import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol, runtime_checkable

from typed_api_client.auth.credentials import (
    ClientCredentialProvider,
    DefaultCredentialProvider,
    TokenCredentialProvider,
)
from typed_api_client.auth.exceptions import TokenAcquisitionError
from typed_api_client.configuration.authentication import (
    AuthenticationOptions,
    ClientCredentialAuthenticationOptions,
    EntraIdAuthenticationOptions,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class ApiTokenProvider(Protocol):
    """Resolves a bearer token for an audience.

    Implementations may suspend on network or identity provider calls.
    """

    async def get_access_token(self, audience: str) -> str: ...


@dataclass(frozen=True)
class _CachedToken:
    token: str
    expires_on: float


class AzureIdentityTokenProvider:
    """Token provider backed by azure-identity async credentials.

    Tokens are requested for the scope ``<audience>/.default`` and cached per
    audience until ``expiry_buffer`` before they expire.

    Args:
        credential_provider: Source of the credential. Defaults to ``DefaultCredentialProvider``.
        expiry_buffer: Time before expiry at which a cached token is refreshed.
    """

    DEFAULT_SCOPE_FORMAT = "{audience}/.default"
    DEFAULT_EXPIRY_BUFFER = timedelta(minutes=5)

    def __init__(
        self,
        credential_provider: TokenCredentialProvider | None = None,
        *,
        expiry_buffer: timedelta = DEFAULT_EXPIRY_BUFFER,
    ) -> None:
        if expiry_buffer < timedelta(0):
            raise ValueError("Token expiry buffer must be non-negative")
        self._credential_provider = credential_provider or DefaultCredentialProvider()
        self._expiry_buffer = expiry_buffer.total_seconds()
        self._cache: dict[str, _CachedToken] = {}

    async def get_access_token(self, audience: str) -> str:
        if not audience:
            raise ValueError("Audience cannot be null or empty")

        cached = self._cache.get(audience)
        if cached is not None and cached.expires_on - self._expiry_buffer > time.time():
            logger.debug(f"Using cached token for audience '{audience}'")
            return cached.token

        scope = self.DEFAULT_SCOPE_FORMAT.format(audience=audience)
        try:
            credential = await self._credential_provider.get_token_credential()
            access_token = await credential.get_token(scope)
        except Exception as e:
            logger.error(f"Failed to get identity token for audience: '{audience}': {e}")
            raise TokenAcquisitionError(
                f"Failed to acquire authentication token for audience: '{audience}'", audience=audience
            ) from e

        self._cache[audience] = _CachedToken(token=access_token.token, expires_on=float(access_token.expires_on))
        logger.debug(f"Acquired and cached new token for audience '{audience}' expiring at {access_token.expires_on}")
        return access_token.token

    def clear_cache(self) -> None:
        self._cache.clear()

    async def aclose(self) -> None:
        self._cache.clear()
        await self._credential_provider.aclose()


def create_default_token_provider(
    authentication_options: AuthenticationOptions | None,
) -> AzureIdentityTokenProvider | None:
    """Pick the production token provider matching an authentication variant.

    Returns:
        A provider for Entra ID variants, None for API key or no authentication.
    """
    if isinstance(authentication_options, ClientCredentialAuthenticationOptions):
        return AzureIdentityTokenProvider(
            ClientCredentialProvider(
                authentication_options.tenant_id,
                authentication_options.client_id,
                authentication_options.client_secret,
            )
        )
    if isinstance(authentication_options, EntraIdAuthenticationOptions):
        return AzureIdentityTokenProvider(DefaultCredentialProvider())
    return None
