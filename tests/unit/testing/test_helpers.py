"""Tests for wiring clients to test doubles."""

from dataclasses import dataclass
from typing import Self

import pytest
from pydantic import BaseModel

from typed_api_client.client import BaseApi
from typed_api_client.configuration import ApiClientOptions, ApiClientOptionsBase, BaseApiClientOptionsBuilder
from typed_api_client.envelope import ApiResult
from typed_api_client.testing import (
    FakeApiTokenProvider,
    InMemoryRestClientService,
    create_envelope_response,
    create_test_client,
)


class User(BaseModel):
    id: str
    name: str


class UserApi(BaseApi[ApiClientOptions]):
    async def get_user(self, user_id: str) -> ApiResult[User]:
        return await self.send(f"users/{user_id}", result_type=User)


@dataclass
class TenantApiOptions(ApiClientOptionsBase):
    tenant: str = "default"


class TenantApiOptionsBuilder(BaseApiClientOptionsBuilder[TenantApiOptions]):
    options_class = TenantApiOptions

    def with_tenant(self, tenant: str) -> Self:
        self._options.tenant = tenant
        return self


class TenantApi(BaseApi[TenantApiOptions]):
    builder_class = TenantApiOptionsBuilder


@pytest.mark.unit
async def test_create_test_client_uses_in_memory_transport():
    client, transport = create_test_client(
        UserApi,
        lambda builder: builder.with_base_url("https://test.example.com").with_api_key_authentication("k1"),
        configure_transport=lambda t: t.add_response("users/123", create_envelope_response({"id": "123", "name": "Ada"})),
    )

    result = await client.get_user("123")

    assert isinstance(transport, InMemoryRestClientService)
    assert client.transport is transport
    assert result.is_success
    assert result.result == User(id="123", name="Ada")
    assert transport.was_called_times("users/123", 1)
    assert transport.executed_requests[0][1].headers["X-API-Key"] == "k1"


@pytest.mark.unit
async def test_create_test_client_supplies_fake_token_provider_for_entra_id():
    client, transport = create_test_client(
        UserApi,
        lambda builder: builder.with_base_url("https://test.example.com").with_entra_id_authentication("api://users"),
    )

    await client.get_user("1")

    assert isinstance(client.token_provider, FakeApiTokenProvider)
    assert client.token_provider.was_token_requested("api://users")
    assert transport.executed_requests[0][1].headers["Authorization"] == "Bearer fake-test-token"


@pytest.mark.unit
async def test_create_test_client_without_authentication_has_no_token_provider():
    client, _ = create_test_client(UserApi, lambda builder: builder.with_base_url("https://test.example.com"))

    assert client.token_provider is None


@pytest.mark.unit
async def test_create_test_client_uses_given_token_provider():
    token_provider = FakeApiTokenProvider()
    token_provider.set_default_token("custom-token")

    client, transport = create_test_client(
        UserApi,
        lambda builder: builder.with_base_url("https://test.example.com").with_entra_id_authentication("api://users"),
        token_provider=token_provider,
    )
    await client.get_user("1")

    assert client.token_provider is token_provider
    assert transport.executed_requests[0][1].headers["Authorization"] == "Bearer custom-token"


@pytest.mark.unit
def test_create_test_client_uses_client_builder_class():
    client, _ = create_test_client(
        TenantApi,
        lambda builder: builder.with_base_url("https://test.example.com").with_tenant("contoso"),
    )

    assert isinstance(client.options, TenantApiOptions)
    assert client.options.tenant == "contoso"
    assert client.options.is_frozen


@pytest.mark.unit
def test_create_test_client_requires_configure():
    with pytest.raises(ValueError):
        create_test_client(UserApi, None)
