"""Access token lookup.

The Content Management API authenticates with a personal access token or an
OAuth token, sent as ``Authorization: Bearer <token>``. The client accepts the
token directly; when it is omitted the token is looked up in order:

1. ``CONTENTFUL_MANAGEMENT_ACCESS_TOKEN`` in the environment
2. ``CONTENTFUL_MANAGEMENT_ACCESS_TOKEN`` in a ``.env`` file (python-dotenv)
3. The file named by ``CONTENTFUL_MANAGEMENT_ACCESS_TOKEN_FILE`` (environment
   or ``.env``), with surrounding whitespace stripped

The ``.env`` file is read, never loaded into ``os.environ``.

Example:
    ```python
    from contentful_management.auth import resolve_access_token

    token = resolve_access_token()  # None if nothing is configured
    token = resolve_access_token(dotenv_path="deploy/.env", required=True)
    ```
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values, find_dotenv

from contentful_management.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_ENV_VAR = "CONTENTFUL_MANAGEMENT_ACCESS_TOKEN"
ACCESS_TOKEN_FILE_ENV_VAR = "CONTENTFUL_MANAGEMENT_ACCESS_TOKEN_FILE"


def token_sources(dotenv_path: str | Path | None = None, use_dotenv: bool = True) -> Mapping[str, str | None]:
    """Variables the token is looked up in: the ``.env`` file under the environment.

    Args:
        dotenv_path: ``.env`` file to read. Searched upwards from the working
            directory when omitted.
        use_dotenv: Read the ``.env`` file at all.
    """
    if not use_dotenv:
        return os.environ

    path = dotenv_path or find_dotenv(usecwd=True)
    if not path:
        return os.environ

    logger.debug(f"Reading access token settings from {path}")
    return {**dotenv_values(path), **os.environ}


def read_token_file(path: str | Path) -> str:
    """Contents of a token file, stripped. ``~`` and ``$VAR`` are expanded.

    Raises:
        CredentialFileError: If the file cannot be read.
    """
    token_path = Path(os.path.expanduser(os.path.expandvars(str(path))))
    try:
        token = token_path.read_text().strip()
    except OSError as e:
        raise CredentialFileError(f"Cannot read access token file {token_path}: {e}") from e

    logger.debug(f"Access token read from {token_path} (***)")
    return token


def resolve_access_token(
    value: str | None = None,
    *,
    dotenv_path: str | Path | None = None,
    use_dotenv: bool = True,
    required: bool = False,
) -> str | None:
    """Find the management API access token.

    Args:
        value: Token passed by the caller; returned unchanged when given.
        dotenv_path: ``.env`` file to read instead of searching for one.
        use_dotenv: Set to False to ignore ``.env`` files.
        required: Raise instead of returning None when no token is found.

    Returns:
        The token, or None when nothing is configured and not required.

    Raises:
        CredentialNotFoundError: If required and no source holds a token.
        CredentialFileError: If a token file is configured but unreadable.
    """
    if value is not None:
        return value

    sources = token_sources(dotenv_path, use_dotenv)

    token = sources.get(ACCESS_TOKEN_ENV_VAR)
    if token:
        logger.debug(f"Access token resolved from {ACCESS_TOKEN_ENV_VAR} (***)")
        return token

    token_file = sources.get(ACCESS_TOKEN_FILE_ENV_VAR)
    if token_file:
        return read_token_file(token_file)

    if required:
        raise CredentialNotFoundError(
            f"Access token not found (set {ACCESS_TOKEN_ENV_VAR} or {ACCESS_TOKEN_FILE_ENV_VAR})",
            env_var_name=ACCESS_TOKEN_ENV_VAR,
        )
    return None
