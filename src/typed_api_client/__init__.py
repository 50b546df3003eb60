"""Typed API Client - conventions and helpers for consuming REST APIs consistently.

This library provides:
- A standard response envelope and total response mapping
- Options and fluent builders for typed clients
- API key and Entra ID authentication
- A retrying httpx transport and in-memory test doubles

Example:
    ```python
    from typed_api_client import ApiClientOptions, BaseApi

    class UserApi(BaseApi[ApiClientOptions]):
        async def get_user(self, user_id: str):
            return await self.send(f"users/{user_id}", result_type=User)

    options = ApiClientOptions.create("https://api.example.com").with_api_key_authentication("k1")
    async with UserApi(options) as api:
        result = await api.get_user("123")
        if result.is_success:
            print(result.result.name)
    ```
"""

from typed_api_client.client import BaseApi
from typed_api_client.configuration import (
    ApiClientOptions,
    ApiClientOptionsBase,
    ApiClientOptionsBuilder,
    BaseApiClientOptionsBuilder,
)
from typed_api_client.envelope import ApiError, ApiResponse, ApiResult, to_api_result
from typed_api_client.request import FilterOptions, RestRequest

__version__ = "0.1.0"

__all__ = [
    "ApiClientOptions",
    "ApiClientOptionsBase",
    "ApiClientOptionsBuilder",
    "ApiError",
    "ApiResponse",
    "ApiResult",
    "BaseApi",
    "BaseApiClientOptionsBuilder",
    "FilterOptions",
    "RestRequest",
    "__version__",
    "to_api_result",
]
