"""Client options.

Options are mutable while a builder (or the fluent ``with_*`` methods)
configures them, then frozen by the client constructor.
"""

from dataclasses import dataclass, field
from typing import Any, Self

from typed_api_client.configuration.authentication import (
    DEFAULT_API_KEY_HEADER,
    SUBSCRIPTION_KEY_HEADER,
    ApiKeyAuthenticationOptions,
    ApiKeyLocation,
    AuthenticationOptions,
    AuthenticationType,
    ClientCredentialAuthenticationOptions,
    EntraIdAuthenticationOptions,
    require_text,
)
from typed_api_client.errors.exceptions import ConfigurationError

DEFAULT_MAX_RETRY_COUNT = 3


@dataclass
class ApiClientOptionsBase:
    """Settings shared by every typed API client.

    Subclasses add their own fields (with defaults) for domain settings.
    """

    base_url: str = ""
    api_path_prefix: str | None = None
    max_retry_count: int = DEFAULT_MAX_RETRY_COUNT
    authentication_options: AuthenticationOptions | None = None
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise ConfigurationError(
                f"Cannot set '{name}': options are frozen once a client has been built from them"
            )
        super().__setattr__(name, value)

    @classmethod
    def create(cls, base_url: str) -> Self:
        return cls().with_base_url(base_url)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def authentication_type(self) -> AuthenticationType:
        if self.authentication_options is None:
            return AuthenticationType.NONE
        return self.authentication_options.authentication_type

    def freeze(self) -> None:
        object.__setattr__(self, "_frozen", True)

    def validate(self) -> None:
        """Check the options are usable by a client.

        Raises:
            ConfigurationError: If the base URL is missing.
        """
        if not self.base_url or not self.base_url.strip():
            raise ConfigurationError("BaseUrl must be provided")

    def resolve_resource(self, resource: str) -> str:
        """Prefix ``resource`` with ``api_path_prefix`` (joined by one slash)."""
        if not self.api_path_prefix:
            return resource
        return f"{self.api_path_prefix.rstrip('/')}/{resource.lstrip('/')}"

    def with_base_url(self, base_url: str) -> Self:
        self.base_url = require_text(base_url, "base_url")
        return self

    def with_api_path_prefix(self, api_path_prefix: str) -> Self:
        require_text(api_path_prefix, "api_path_prefix")
        stripped = api_path_prefix.strip("/")
        if not stripped:
            raise ValueError("'api_path_prefix' must contain a path segment")
        self.api_path_prefix = stripped
        return self

    def with_max_retry_count(self, max_retry_count: int) -> Self:
        if isinstance(max_retry_count, bool) or not isinstance(max_retry_count, int):
            raise ValueError("'max_retry_count' must be an integer")
        if max_retry_count < 0:
            raise ValueError("'max_retry_count' must be greater than or equal to 0")
        self.max_retry_count = max_retry_count
        return self

    def with_authentication(self, authentication_options: AuthenticationOptions) -> Self:
        if authentication_options is None:
            raise ValueError("'authentication_options' cannot be null")
        if not isinstance(authentication_options, (ApiKeyAuthenticationOptions, EntraIdAuthenticationOptions)):
            raise ValueError(f"Unsupported authentication options: {type(authentication_options).__name__}")
        self.authentication_options = authentication_options
        return self

    def with_api_key_authentication(
        self,
        api_key: str,
        header_name: str = DEFAULT_API_KEY_HEADER,
        location: ApiKeyLocation = ApiKeyLocation.HEADER,
    ) -> Self:
        return self.with_authentication(
            ApiKeyAuthenticationOptions(api_key=api_key, header_name=header_name, location=location)
        )

    def with_subscription_key(self, subscription_key: str, header_name: str = SUBSCRIPTION_KEY_HEADER) -> Self:
        """API Management subscription key, sent in ``Ocp-Apim-Subscription-Key`` by default."""
        return self.with_api_key_authentication(subscription_key, header_name)

    def with_entra_id_authentication(self, api_audience: str) -> Self:
        return self.with_authentication(EntraIdAuthenticationOptions(api_audience=api_audience))

    def with_client_credential_authentication(
        self, api_audience: str, tenant_id: str, client_id: str, client_secret: str
    ) -> Self:
        return self.with_authentication(
            ClientCredentialAuthenticationOptions(
                api_audience=api_audience,
                tenant_id=tenant_id,
                client_id=client_id,
                client_secret=client_secret,
            )
        )


@dataclass
class ApiClientOptions(ApiClientOptionsBase):
    """Standard options for clients that need no domain-specific settings."""

    pass
