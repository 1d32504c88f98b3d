"""Exceptions raised while resolving access tokens.

Example:
    ```python
    from contentful_management.auth import resolve_access_token
    from contentful_management.auth.exceptions import CredentialNotFoundError

    try:
        token = resolve_access_token(required=True)
    except CredentialNotFoundError as e:
        print(f"Set {e.env_var_name} first")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors."""

    pass


class CredentialNotFoundError(CredentialError):
    """A required credential was not found in any source.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """A credential file could not be read."""

    pass
