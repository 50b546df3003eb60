"""Exceptions raised while authenticating requests.

Example:
    ```python
    from typed_api_client.auth.exceptions import TokenAcquisitionError

    try:
        token = await provider.get_access_token("api://my-api")
    except TokenAcquisitionError as e:
        print(f"No token for {e.audience}")
    ```
"""


class AuthenticationError(Exception):
    """Base exception for authentication failures.

    Raised when authentication is configured but cannot be applied to a
    request, for example when a token provider returns an empty token.
    """

    pass


class TokenAcquisitionError(AuthenticationError):
    """Raised when an access token cannot be acquired for an audience.

    Attributes:
        audience: The audience the token was requested for.
    """

    def __init__(self, message: str, audience: str | None = None):
        super().__init__(message)
        self.audience = audience
