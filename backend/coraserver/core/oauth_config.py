"""
OAuth client configuration for the Microsoft identity platform.

Client credentials are privileged, so they are kept out of the source tree
and out of the environment in a JSON file:

    {
        "clientID": "...",
        "clientSecret": "...",
        "redirectURL": "http://localhost:42069/oauth/exchange",
        "scopes": ["User.Read"],
        "tenant": "organizations"
    }

The file is read once at startup. Any failure to read or parse it raises
OAuthConfigError, which the entrypoint treats as fatal.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

MICROSOFT_AUTHORITY = "https://login.microsoftonline.com"


class OAuthConfigError(Exception):
    """The OAuth configuration file is missing or malformed."""


class OAuthConfig(BaseModel):
    """Immutable OAuth client configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    client_id: str = Field(alias="clientID")
    client_secret: str = Field(alias="clientSecret")
    redirect_url: str = Field(alias="redirectURL")
    scopes: tuple[str, ...]
    tenant: str

    @property
    def authorize_url(self) -> str:
        return f"{MICROSOFT_AUTHORITY}/{self.tenant}/oauth2/v2.0/authorize"

    @property
    def token_url(self) -> str:
        return f"{MICROSOFT_AUTHORITY}/{self.tenant}/oauth2/v2.0/token"


def load_oauth_config(path: str | Path) -> OAuthConfig:
    """
    Read and validate the OAuth configuration file.

    Args:
        path: Location of the JSON config file

    Returns:
        Parsed OAuthConfig

    Raises:
        OAuthConfigError: If the file cannot be read or does not contain
            the expected fields
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise OAuthConfigError(f"Error reading OAuth config file {path}: {e}") from e

    try:
        config = OAuthConfig.model_validate_json(raw)
    except ValidationError as e:
        raise OAuthConfigError(f"Error parsing OAuth config file {path}: {e}") from e

    logger.info("Loaded OAuth config for tenant %s from %s", config.tenant, path)
    return config
