"""Client settings resolved from the environment.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable (``<prefix><NAME>``)
3. .env file (python-dotenv, loaded into the environment once)
4. Default value

Example:
    ```python
    from typed_api_client.configuration import ApiClientOptionsBuilder

    # API_CLIENT_BASE_URL=https://api.example.com
    # API_CLIENT_API_KEY=secret
    options = ApiClientOptionsBuilder.from_environment().build()

    # Separate prefix per client
    users = UserApiOptionsBuilder.from_environment(prefix="USERS_API_").build()
    ```

Variables read by ``EnvironmentSettings.configure``:

| Variable | Effect |
|----------|--------|
| `BASE_URL` | required base URL |
| `API_PATH_PREFIX` | path segment prepended to every resource |
| `MAX_RETRY_COUNT` | integer retry bound |
| `API_KEY` / `API_KEY_FILE` | API key authentication (value or file) |
| `API_KEY_HEADER` | header name for the API key |
| `API_AUDIENCE` | Entra ID authentication audience |
| `TENANT_ID`, `CLIENT_ID`, `CLIENT_SECRET` | client credentials for the audience |

Secret values are never logged; only their source is.
"""

import logging
import os
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING, TypeVar

from dotenv import load_dotenv as _load_dotenv

from typed_api_client.errors.exceptions import ConfigurationError, MissingSettingError

if TYPE_CHECKING:
    from typed_api_client.configuration.builder import BaseApiClientOptionsBuilder

logger = logging.getLogger(__name__)

TBuilder = TypeVar("TBuilder", bound="BaseApiClientOptionsBuilder")

_SECRET_NAMES = frozenset({"API_KEY", "CLIENT_SECRET"})


class EnvironmentSettings:
    """Resolve client settings from explicit values, the environment and .env files.

    Attributes:
        prefix: Prefix prepended to every setting name.
    """

    def __init__(
        self,
        prefix: str = "API_CLIENT_",
        dotenv_path: str | Path | None = None,
        load_dotenv: bool = True,
    ):
        self.prefix = prefix
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                _load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for client settings")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def variable_name(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def resolve(
        self,
        name: str,
        *,
        value: str | None = None,
        default: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve one setting.

        Args:
            name: Setting name without the prefix, e.g. ``BASE_URL``.
            value: Explicit value; wins over every other source.
            default: Used when neither value nor environment provide one.
            required: Raise instead of returning None.

        Returns:
            The resolved value, or None if not found and not required.

        Raises:
            MissingSettingError: If required and not found in any source.
        """
        env_var_name = self.variable_name(name)
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = "***" if name in _SECRET_NAMES else result
            logger.debug(f"Resolved setting {name} from {source}: {shown}")

        if required and result is None:
            raise MissingSettingError(
                f"Required setting not found (checked env var: {env_var_name})",
                setting_name=env_var_name,
            )

        return result

    def resolve_from_file(self, name: str, *, required: bool = False) -> str | None:
        """Read a secret from the file named by ``<prefix><name>``.

        The path supports ``~`` and ``$VAR`` expansion; file contents are
        stripped of surrounding whitespace.

        Raises:
            ConfigurationError: If required and the file cannot be read.
        """
        path_value = self.resolve(name)
        if not path_value:
            if required:
                raise MissingSettingError(
                    f"No file path provided (env var '{self.variable_name(name)}' not set)",
                    setting_name=self.variable_name(name),
                )
            return None

        path = Path(os.path.expanduser(os.path.expandvars(path_value)))
        try:
            content = path.read_text().strip()
        except FileNotFoundError:
            message = f"Settings file not found: {path}"
            if required:
                raise ConfigurationError(message) from None
            logger.debug(message)
            return None
        except OSError as e:
            message = f"Error reading settings file {path}: {e}"
            if required:
                raise ConfigurationError(message) from e
            logger.warning(message)
            return None

        logger.debug(f"Resolved setting {name} from file: {path} (***)")
        return content

    def resolve_int(self, name: str) -> int | None:
        raw = self.resolve(name)
        if raw is None or not raw.strip():
            return None
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(
                f"Setting {self.variable_name(name)} must be an integer, got {raw!r}"
            ) from None

    def configure(self, builder: TBuilder) -> TBuilder:
        """Apply every recognised setting to ``builder`` and return it.

        Raises:
            MissingSettingError: If ``BASE_URL`` is not set.
            ConfigurationError: If a setting has an invalid value.
        """
        try:
            builder.with_base_url(self.resolve("BASE_URL", required=True))

            api_path_prefix = self.resolve("API_PATH_PREFIX")
            if api_path_prefix:
                builder.with_api_path_prefix(api_path_prefix)

            max_retry_count = self.resolve_int("MAX_RETRY_COUNT")
            if max_retry_count is not None:
                builder.with_max_retry_count(max_retry_count)

            api_key = self.resolve("API_KEY") or self.resolve_from_file("API_KEY_FILE")
            api_audience = self.resolve("API_AUDIENCE")
            if api_key and api_audience:
                raise ConfigurationError(
                    f"Only one of {self.variable_name('API_KEY')} and {self.variable_name('API_AUDIENCE')} may be set"
                )

            if api_key:
                header_name = self.resolve("API_KEY_HEADER")
                if header_name:
                    builder.with_api_key_authentication(api_key, header_name)
                else:
                    builder.with_api_key_authentication(api_key)
            elif api_audience:
                self._configure_entra_id(builder, api_audience)
        except ConfigurationError:
            raise
        except ValueError as e:
            raise ConfigurationError(f"Invalid client setting: {e}") from e

        return builder

    def _configure_entra_id(self, builder: "BaseApiClientOptionsBuilder", api_audience: str) -> None:
        tenant_id = self.resolve("TENANT_ID")
        client_id = self.resolve("CLIENT_ID")
        client_secret = self.resolve("CLIENT_SECRET")

        provided = [item for item in (tenant_id, client_id, client_secret) if item]
        if not provided:
            builder.with_entra_id_authentication(api_audience)
            return
        if len(provided) != 3:
            raise ConfigurationError(
                "Client credentials require TENANT_ID, CLIENT_ID and CLIENT_SECRET to be set together"
            )
        builder.with_client_credential_authentication(api_audience, tenant_id, client_id, client_secret)
