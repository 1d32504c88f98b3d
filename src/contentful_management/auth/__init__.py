"""Access token resolution for the management client.

Example:
    ```python
    from contentful_management.auth import resolve_access_token

    token = resolve_access_token(required=True)
    ```
"""

from contentful_management.auth.credentials import (
    ACCESS_TOKEN_ENV_VAR,
    ACCESS_TOKEN_FILE_ENV_VAR,
    read_token_file,
    resolve_access_token,
    token_sources,
)
from contentful_management.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)

__all__ = [
    "ACCESS_TOKEN_ENV_VAR",
    "ACCESS_TOKEN_FILE_ENV_VAR",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "read_token_file",
    "resolve_access_token",
    "token_sources",
]
