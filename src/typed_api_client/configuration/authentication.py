"""Authentication option variants.

Exactly one variant is active per options instance. The set is closed:
``BaseApi`` branches over API key and Entra ID, and ``None`` means no
authentication.
"""

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_API_KEY_HEADER = "X-API-Key"
SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


class AuthenticationType(Enum):
    NONE = "none"
    API_KEY = "api_key"
    ENTRA_ID = "entra_id"


class ApiKeyLocation(Enum):
    """Where an API key is placed on the request."""

    HEADER = "header"
    QUERY_PARAMETER = "query_parameter"


def require_text(value: str | None, name: str) -> str:
    """Return ``value`` or raise ValueError when it is None, empty or blank."""
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValueError(f"'{name}' cannot be null or empty")
    return value


@dataclass(frozen=True)
class AuthenticationOptions:
    """Base class for authentication variants."""

    @property
    def authentication_type(self) -> AuthenticationType:
        return AuthenticationType.NONE


@dataclass(frozen=True)
class ApiKeyAuthenticationOptions(AuthenticationOptions):
    """API key sent in a header (default) or as a query parameter."""

    api_key: str = field(repr=False)
    header_name: str = DEFAULT_API_KEY_HEADER
    location: ApiKeyLocation = ApiKeyLocation.HEADER

    def __post_init__(self) -> None:
        require_text(self.api_key, "api_key")
        require_text(self.header_name, "header_name")
        if not isinstance(self.location, ApiKeyLocation):
            raise ValueError(f"Unsupported API key location: {self.location!r}")

    @property
    def authentication_type(self) -> AuthenticationType:
        return AuthenticationType.API_KEY


@dataclass(frozen=True)
class EntraIdAuthenticationOptions(AuthenticationOptions):
    """Bearer token acquired for ``api_audience`` through a token provider."""

    api_audience: str

    def __post_init__(self) -> None:
        require_text(self.api_audience, "api_audience")

    @property
    def authentication_type(self) -> AuthenticationType:
        return AuthenticationType.ENTRA_ID


@dataclass(frozen=True)
class ClientCredentialAuthenticationOptions(EntraIdAuthenticationOptions):
    """Entra ID authentication using an app registration's client secret."""

    tenant_id: str
    client_id: str
    client_secret: str = field(repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        require_text(self.tenant_id, "tenant_id")
        require_text(self.client_id, "client_id")
        require_text(self.client_secret, "client_secret")
