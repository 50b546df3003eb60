"""Transport layer for executing prepared requests.

Modules:
    retry: httpx transport that retries transient failures
    service: The rest transport capability and its httpx implementation

Example:
    ```python
    from typed_api_client.request import RestRequest
    from typed_api_client.transport import HttpxRestClientService

    async with HttpxRestClientService() as transport:
        response = await transport.execute("https://api.example.com", RestRequest("users/1"), max_retries=3)
    ```
"""

from typed_api_client.transport.retry import TransientFailureRetry
from typed_api_client.transport.service import (
    TRANSPORT_ERROR_CODE,
    HttpxRestClientService,
    RestClientService,
    validate_base_url,
)

__all__ = [
    "TRANSPORT_ERROR_CODE",
    "HttpxRestClientService",
    "RestClientService",
    "TransientFailureRetry",
    "validate_base_url",
]
