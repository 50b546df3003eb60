"""Error taxonomy for typed API clients."""

from typed_api_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConfigurationError,
    ConflictError,
    ForbiddenError,
    MissingSettingError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportClosedError,
    UnauthorizedError,
    ValidationError,
)
from typed_api_client.errors.handler import ensure_success

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "ConfigurationError",
    "ConflictError",
    "ForbiddenError",
    "MissingSettingError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "TransportClosedError",
    "UnauthorizedError",
    "ValidationError",
    "ensure_success",
]
