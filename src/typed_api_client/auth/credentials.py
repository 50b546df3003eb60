"""Azure credential providers used to acquire Entra ID tokens.

Each provider creates its credential lazily, once, and closes it in
``aclose()``.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from azure.core.credentials_async import AsyncTokenCredential
from azure.identity.aio import ClientSecretCredential, DefaultAzureCredential

from typed_api_client.configuration.authentication import require_text

logger = logging.getLogger(__name__)


@runtime_checkable
class TokenCredentialProvider(Protocol):
    """Supplies the async credential used to request tokens."""

    async def get_token_credential(self) -> AsyncTokenCredential:
        """Return the credential, creating it on first use."""
        ...

    async def aclose(self) -> None:
        """Release the credential."""
        ...


class _LazyCredentialProvider(ABC):
    def __init__(self) -> None:
        self._credential: AsyncTokenCredential | None = None
        self._lock = asyncio.Lock()

    @abstractmethod
    def _create_credential(self) -> AsyncTokenCredential: ...

    async def get_token_credential(self) -> AsyncTokenCredential:
        if self._credential is not None:
            return self._credential
        async with self._lock:
            if self._credential is None:
                self._credential = self._create_credential()
            return self._credential

    async def aclose(self) -> None:
        async with self._lock:
            if self._credential is not None:
                await self._credential.close()
                self._credential = None


class DefaultCredentialProvider(_LazyCredentialProvider):
    """Uses ``DefaultAzureCredential`` (environment, managed identity, CLI, ...).

    The shared token cache credential is excluded.
    """

    def __init__(self, **credential_kwargs) -> None:
        super().__init__()
        self._credential_kwargs = {"exclude_shared_token_cache_credential": True, **credential_kwargs}

    def _create_credential(self) -> AsyncTokenCredential:
        logger.debug(f"Creating DefaultAzureCredential with settings: {sorted(self._credential_kwargs)}")
        return DefaultAzureCredential(**self._credential_kwargs)


class ClientCredentialProvider(_LazyCredentialProvider):
    """Uses ``ClientSecretCredential`` for an app registration."""

    def __init__(self, tenant_id: str, client_id: str, client_secret: str, **credential_kwargs) -> None:
        super().__init__()
        self._tenant_id = require_text(tenant_id, "tenant_id")
        self._client_id = require_text(client_id, "client_id")
        self._client_secret = require_text(client_secret, "client_secret")
        self._credential_kwargs = credential_kwargs

    def _create_credential(self) -> AsyncTokenCredential:
        logger.debug(f"Creating ClientSecretCredential for client ID: {self._client_id}, tenant ID: {self._tenant_id}")
        return ClientSecretCredential(self._tenant_id, self._client_id, self._client_secret, **self._credential_kwargs)
