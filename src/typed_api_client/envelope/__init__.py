"""Standard response envelope and response mapping.

Example:
    ```python
    from typed_api_client.envelope import to_api_result

    api_result = to_api_result(response, User)
    if api_result.is_success:
        print(api_result.result.name)
    else:
        for error in api_result.errors:
            print(error.code, error.message)
    ```
"""

from typed_api_client.envelope.mapping import (
    DESERIALIZATION_ERROR_CODE,
    UNEXPECTED_ERROR_CODE,
    status_code_name,
    to_api_result,
)
from typed_api_client.envelope.models import ApiError, ApiPagination, ApiResponse, CollectionModel
from typed_api_client.envelope.problem import ProblemDetail
from typed_api_client.envelope.result import ApiResult

__all__ = [
    "DESERIALIZATION_ERROR_CODE",
    "UNEXPECTED_ERROR_CODE",
    "ApiError",
    "ApiPagination",
    "ApiResponse",
    "ApiResult",
    "CollectionModel",
    "ProblemDetail",
    "status_code_name",
    "to_api_result",
]
