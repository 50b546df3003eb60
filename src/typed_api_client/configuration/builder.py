"""Fluent builders for client options.

A builder owns exactly one options instance. Every ``with_*`` method
validates its argument, mutates that instance in place and returns the
builder itself, so subclass methods stay chainable with the base ones:

    ```python
    @dataclass
    class UserApiOptions(ApiClientOptionsBase):
        default_role: str = "reader"


    class UserApiOptionsBuilder(BaseApiClientOptionsBuilder[UserApiOptions]):
        options_class = UserApiOptions

        def with_default_role(self, role: str) -> Self:
            self._options.default_role = require_text(role, "role")
            return self


    options = (
        UserApiOptionsBuilder()
        .with_base_url("https://users.example.com")
        .with_default_role("admin")
        .with_max_retry_count(5)
        .build()
    )
    ```
"""

from pathlib import Path
from typing import ClassVar, Generic, Self, TypeVar

from typed_api_client.configuration.authentication import (
    DEFAULT_API_KEY_HEADER,
    SUBSCRIPTION_KEY_HEADER,
    ApiKeyLocation,
    AuthenticationOptions,
)
from typed_api_client.configuration.options import ApiClientOptions, ApiClientOptionsBase

TOptions = TypeVar("TOptions", bound=ApiClientOptionsBase)


class BaseApiClientOptionsBuilder(Generic[TOptions]):
    """Base builder, generic over the options type it produces.

    Subclasses set ``options_class`` to the options dataclass they build.
    """

    options_class: ClassVar[type[ApiClientOptionsBase]]

    def __init__(self) -> None:
        options_class = getattr(type(self), "options_class", None)
        if options_class is None:
            raise TypeError(f"{type(self).__name__} must define 'options_class'")
        self._options: TOptions = options_class()

    @classmethod
    def from_environment(
        cls,
        prefix: str = "API_CLIENT_",
        *,
        dotenv_path: str | Path | None = None,
        load_dotenv: bool = True,
    ) -> Self:
        """Create a builder pre-configured from environment variables.

        See ``EnvironmentSettings.configure`` for the variables read.
        """
        from typed_api_client.configuration.environment import EnvironmentSettings

        settings = EnvironmentSettings(prefix=prefix, dotenv_path=dotenv_path, load_dotenv=load_dotenv)
        return settings.configure(cls())

    def with_base_url(self, base_url: str) -> Self:
        self._options.with_base_url(base_url)
        return self

    def with_api_path_prefix(self, api_path_prefix: str) -> Self:
        self._options.with_api_path_prefix(api_path_prefix)
        return self

    def with_max_retry_count(self, max_retry_count: int) -> Self:
        self._options.with_max_retry_count(max_retry_count)
        return self

    def with_authentication(self, authentication_options: AuthenticationOptions) -> Self:
        self._options.with_authentication(authentication_options)
        return self

    def with_api_key_authentication(
        self,
        api_key: str,
        header_name: str = DEFAULT_API_KEY_HEADER,
        location: ApiKeyLocation = ApiKeyLocation.HEADER,
    ) -> Self:
        self._options.with_api_key_authentication(api_key, header_name, location)
        return self

    def with_subscription_key(self, subscription_key: str, header_name: str = SUBSCRIPTION_KEY_HEADER) -> Self:
        self._options.with_subscription_key(subscription_key, header_name)
        return self

    def with_entra_id_authentication(self, api_audience: str) -> Self:
        self._options.with_entra_id_authentication(api_audience)
        return self

    def with_client_credential_authentication(
        self, api_audience: str, tenant_id: str, client_id: str, client_secret: str
    ) -> Self:
        self._options.with_client_credential_authentication(api_audience, tenant_id, client_id, client_secret)
        return self

    def build(self) -> TOptions:
        """Return the owned options. Validation already happened in ``with_*``."""
        return self._options


class ApiClientOptionsBuilder(BaseApiClientOptionsBuilder[ApiClientOptions]):
    """Standard builder for ``ApiClientOptions``."""

    options_class = ApiClientOptions
