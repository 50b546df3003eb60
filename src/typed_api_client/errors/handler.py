"""Opt-in conversion of failed API results into exceptions."""

from typed_api_client.envelope.result import ApiResult
from typed_api_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)

_EXCEPTION_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def ensure_success(api_result: ApiResult) -> ApiResult:
    """Raise the matching exception when an API result did not succeed.

    Client calls never raise for HTTP error statuses; callers that prefer
    exceptions over inspecting the envelope pass the result through here.

    Args:
        api_result: Result returned by a client call

    Returns:
        The same result, when it is successful

    Raises:
        APIError subclass based on the status code
    """
    if api_result.is_success:
        return api_result

    status_code = api_result.status_code

    if status_code in _EXCEPTION_MAP:
        exc_class = _EXCEPTION_MAP[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    message = _build_message(api_result)

    if exc_class is RateLimitError:
        retry_after = None
        metadata = api_result.response.metadata if api_result.response else None
        if metadata and "retryAfter" in metadata:
            try:
                retry_after = int(metadata["retryAfter"])
            except (ValueError, TypeError):
                retry_after = None
        raise RateLimitError(
            message=message,
            retry_after=retry_after,
            status_code=status_code,
            api_result=api_result,
        )

    raise exc_class(message=message, status_code=status_code, api_result=api_result)


def _build_message(api_result: ApiResult) -> str:
    errors = api_result.errors
    if not errors:
        return f"HTTP {api_result.status_code}"

    lines = [f"HTTP {api_result.status_code}:"]
    for error in errors:
        line = f"  - {error.code}: {error.message}"
        if error.target:
            line += f" (target: {error.target})"
        lines.append(line)
    return "\n".join(lines)
