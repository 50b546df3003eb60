"""Tests for the in-memory rest transport."""

import httpx
import pytest

from typed_api_client.errors import TransportClosedError
from typed_api_client.request import RestRequest
from typed_api_client.testing import InMemoryRestClientService
from typed_api_client.transport import RestClientService

BASE_URL = "https://test.local"


class TestInMemoryResponses:
    """Test matching requests against configured responses."""

    @pytest.mark.unit
    async def test_returns_exact_registered_response(self, in_memory_transport):
        response = httpx.Response(200, json={"result": {"id": "123"}})
        in_memory_transport.add_response("users/123", response)

        result = await in_memory_transport.execute(BASE_URL, RestRequest("users/123"))

        assert result is response

    @pytest.mark.unit
    async def test_resource_match_is_case_insensitive(self, in_memory_transport):
        response = httpx.Response(200)
        in_memory_transport.add_response("Users/ABC", response)

        assert await in_memory_transport.execute(BASE_URL, RestRequest("users/abc")) is response

    @pytest.mark.unit
    async def test_unregistered_resource_returns_404_naming_resource(self, in_memory_transport):
        response = await in_memory_transport.execute(BASE_URL, RestRequest("users/404"))

        assert response.status_code == 404
        assert response.text == "No response configured for resource: users/404"

    @pytest.mark.unit
    async def test_response_function_receives_request(self, in_memory_transport):
        def page(request: RestRequest) -> httpx.Response:
            return httpx.Response(200, json={"result": dict(request.params)})

        in_memory_transport.add_response_function("users", page)

        response = await in_memory_transport.execute(BASE_URL, RestRequest("users").add_query_parameter("top", 5))

        assert response.json() == {"result": {"top": "5"}}

    @pytest.mark.unit
    async def test_async_response_function(self, in_memory_transport):
        async def created(request: RestRequest) -> httpx.Response:
            return httpx.Response(201, json={"result": request.json})

        in_memory_transport.add_response_function("users", created)

        response = await in_memory_transport.execute(BASE_URL, RestRequest("users", "POST").add_json_body({"a": 1}))

        assert response.status_code == 201
        assert response.json() == {"result": {"a": 1}}

    @pytest.mark.unit
    async def test_fixed_response_wins_over_function(self, in_memory_transport):
        fixed = httpx.Response(200)
        in_memory_transport.add_response("users", fixed)
        in_memory_transport.add_response_function("users", lambda request: httpx.Response(500))

        assert await in_memory_transport.execute(BASE_URL, RestRequest("users")) is fixed

    @pytest.mark.unit
    async def test_function_wins_over_default(self, in_memory_transport):
        in_memory_transport.set_default_response(httpx.Response(500))
        in_memory_transport.add_response_function("users", lambda request: httpx.Response(202))

        response = await in_memory_transport.execute(BASE_URL, RestRequest("users"))

        assert response.status_code == 202

    @pytest.mark.unit
    async def test_default_response(self, in_memory_transport):
        default = httpx.Response(204)
        in_memory_transport.set_default_response(default)

        assert await in_memory_transport.execute(BASE_URL, RestRequest("anything")) is default

    @pytest.mark.unit
    @pytest.mark.parametrize("resource", ["", None])
    def test_add_response_rejects_empty_resource(self, in_memory_transport, resource):
        with pytest.raises(ValueError):
            in_memory_transport.add_response(resource, httpx.Response(200))

    @pytest.mark.unit
    def test_add_response_rejects_missing_response(self, in_memory_transport):
        with pytest.raises(ValueError):
            in_memory_transport.add_response("users", None)

    @pytest.mark.unit
    def test_add_response_function_rejects_missing_function(self, in_memory_transport):
        with pytest.raises(ValueError):
            in_memory_transport.add_response_function("users", None)

    @pytest.mark.unit
    def test_set_default_response_rejects_none(self, in_memory_transport):
        with pytest.raises(ValueError):
            in_memory_transport.set_default_response(None)


class TestInMemoryRecording:
    """Test recording executed requests."""

    @pytest.mark.unit
    async def test_records_every_request(self, in_memory_transport):
        first = RestRequest("users/1")
        second = RestRequest("USERS/1", "DELETE")

        await in_memory_transport.execute(BASE_URL, first)
        await in_memory_transport.execute(BASE_URL, second)
        await in_memory_transport.execute(BASE_URL, RestRequest("orders"))

        assert in_memory_transport.executed_requests[:2] == [("users/1", first), ("USERS/1", second)]
        assert in_memory_transport.was_called("users/1")
        assert in_memory_transport.was_called_times("users/1", 2)
        assert in_memory_transport.was_called_times("orders", 1)
        assert not in_memory_transport.was_called("products")

    @pytest.mark.unit
    async def test_clear_forgets_responses_and_history(self, in_memory_transport):
        in_memory_transport.add_response("users", httpx.Response(200))
        in_memory_transport.set_default_response(httpx.Response(204))
        await in_memory_transport.execute(BASE_URL, RestRequest("users"))

        in_memory_transport.clear()

        assert in_memory_transport.executed_requests == []
        response = await in_memory_transport.execute(BASE_URL, RestRequest("users"))
        assert response.status_code == 404


class TestInMemoryLifecycle:
    """Test argument checks and closing."""

    @pytest.mark.unit
    async def test_rejects_empty_base_url(self, in_memory_transport):
        with pytest.raises(ValueError):
            await in_memory_transport.execute("", RestRequest("users"))

    @pytest.mark.unit
    async def test_rejects_missing_request(self, in_memory_transport):
        with pytest.raises(ValueError):
            await in_memory_transport.execute(BASE_URL, None)

    @pytest.mark.unit
    async def test_closed_transport_rejects_execute(self, in_memory_transport):
        await in_memory_transport.aclose()

        assert in_memory_transport.is_closed
        with pytest.raises(TransportClosedError):
            await in_memory_transport.execute(BASE_URL, RestRequest("users"))

    @pytest.mark.unit
    async def test_never_touches_the_network(self, in_memory_transport):
        response = await in_memory_transport.execute("https://unreachable.invalid", RestRequest("users"))

        assert response.status_code == 404

    @pytest.mark.unit
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryRestClientService(), RestClientService)
