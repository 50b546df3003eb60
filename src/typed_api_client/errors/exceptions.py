"""Structured exceptions for configuration faults and failed API results."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typed_api_client.envelope.models import ApiError
    from typed_api_client.envelope.result import ApiResult


class ConfigurationError(ValueError):
    """Raised when client options are missing or invalid.

    Configuration errors are raised eagerly, at build, construction or
    request-creation time, and are never retried.
    """

    pass


class MissingSettingError(ConfigurationError):
    """Raised when a required setting cannot be resolved from any source.

    Attributes:
        setting_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, setting_name: str | None = None):
        super().__init__(message)
        self.setting_name = setting_name


class TransportClosedError(RuntimeError):
    """Raised when a transport is used after it has been closed."""

    pass


class APIError(Exception):
    """Base exception for failed API results."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        api_result: "ApiResult | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.api_result = api_result

    @property
    def errors(self) -> "list[ApiError]":
        if self.api_result is None:
            return []
        return self.api_result.errors


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class ValidationError(ClientError):
    """422 Unprocessable Entity (validation errors)."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass
