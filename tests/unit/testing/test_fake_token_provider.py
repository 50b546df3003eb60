"""Tests for the fake token provider."""

from datetime import UTC, datetime

import pytest

from typed_api_client.auth import ApiTokenProvider
from typed_api_client.testing import DEFAULT_FAKE_TOKEN, FakeApiTokenProvider


class TestFakeApiTokenProviderResolution:
    """Test resolution order: audience token, default token, fallback."""

    @pytest.mark.unit
    async def test_fallback_token(self, fake_token_provider):
        assert await fake_token_provider.get_access_token("api://any") == DEFAULT_FAKE_TOKEN == "fake-test-token"

    @pytest.mark.unit
    async def test_default_token_before_fallback(self, fake_token_provider):
        fake_token_provider.set_default_token("default-token")

        assert await fake_token_provider.get_access_token("api://any") == "default-token"

    @pytest.mark.unit
    async def test_audience_token_before_default(self, fake_token_provider):
        fake_token_provider.set_default_token("default-token")
        fake_token_provider.set_token("api://users", "users-token")

        assert await fake_token_provider.get_access_token("api://users") == "users-token"
        assert await fake_token_provider.get_access_token("api://orders") == "default-token"

    @pytest.mark.unit
    async def test_audience_is_case_insensitive(self, fake_token_provider):
        fake_token_provider.set_token("API://Users", "users-token")

        assert await fake_token_provider.get_access_token("api://users") == "users-token"

    @pytest.mark.unit
    @pytest.mark.parametrize("audience,token", [("", "t"), (None, "t"), ("api://users", ""), ("api://users", None)])
    def test_set_token_rejects_empty_values(self, fake_token_provider, audience, token):
        with pytest.raises(ValueError):
            fake_token_provider.set_token(audience, token)

    @pytest.mark.unit
    @pytest.mark.parametrize("token", ["", None])
    def test_set_default_token_rejects_empty_values(self, fake_token_provider, token):
        with pytest.raises(ValueError):
            fake_token_provider.set_default_token(token)

    @pytest.mark.unit
    async def test_rejects_empty_audience(self, fake_token_provider):
        with pytest.raises(ValueError):
            await fake_token_provider.get_access_token("")

    @pytest.mark.unit
    def test_satisfies_protocol(self):
        assert isinstance(FakeApiTokenProvider(), ApiTokenProvider)


class TestFakeApiTokenProviderLog:
    """Test the request log."""

    @pytest.mark.unit
    async def test_every_call_is_logged_whatever_the_branch(self, fake_token_provider):
        fake_token_provider.set_token("api://users", "users-token")

        await fake_token_provider.get_access_token("api://users")
        assert fake_token_provider.request_count("api://users") == 1

        await fake_token_provider.get_access_token("api://users")
        assert fake_token_provider.request_count("api://users") == 2

        await fake_token_provider.get_access_token("api://orders")
        assert fake_token_provider.request_count("api://orders") == 1

        fake_token_provider.set_default_token("default-token")
        await fake_token_provider.get_access_token("api://orders")
        assert fake_token_provider.request_count("api://orders") == 2

        assert len(fake_token_provider.token_requests) == 4

    @pytest.mark.unit
    async def test_token_request_records_audience_and_time(self, fake_token_provider):
        before = datetime.now(UTC)

        await fake_token_provider.get_access_token("api://users")

        [request] = fake_token_provider.token_requests
        assert request.audience == "api://users"
        assert before <= request.requested_at <= datetime.now(UTC)

    @pytest.mark.unit
    async def test_was_token_requested(self, fake_token_provider):
        await fake_token_provider.get_access_token("api://users")
        await fake_token_provider.get_access_token("API://USERS")

        assert fake_token_provider.was_token_requested("api://users")
        assert fake_token_provider.was_token_requested_times("api://users", 2)
        assert not fake_token_provider.was_token_requested("api://orders")
        assert fake_token_provider.was_token_requested_times("api://orders", 0)

    @pytest.mark.unit
    async def test_clear_also_forgets_default_token(self, fake_token_provider):
        fake_token_provider.set_token("api://users", "users-token")
        fake_token_provider.set_default_token("default-token")
        await fake_token_provider.get_access_token("api://users")

        fake_token_provider.clear()

        assert fake_token_provider.token_requests == []
        assert await fake_token_provider.get_access_token("api://users") == "fake-test-token"
        assert fake_token_provider.request_count("api://users") == 1
