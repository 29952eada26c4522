"""
Application configuration with environment-based settings.

This module uses Pydantic Settings for automatic environment variable loading
and validation. OAuth client credentials are NOT part of these settings; they
live in a separate JSON file loaded by coraserver.core.oauth_config.
"""

import os
import tomllib
from pathlib import Path
from typing import Literal

from pydantic import PostgresDsn, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_app_version_from_pyproject() -> str:
    """Load application version from pyproject.toml"""
    try:
        pyproject_path = Path(__file__).parent.parent.parent.parent / "pyproject.toml"

        if not pyproject_path.exists():
            # Installed as a package, no source tree around
            return "0.0.0"

        with open(pyproject_path, "rb") as f:
            config = tomllib.load(f)
            version = config.get("project", {}).get("version")

            if not version:
                return "0.0.0"

            return version

    except (OSError, tomllib.TOMLDecodeError):
        return "0.0.0"


class Settings(BaseSettings):
    """
    Application settings with validation.

    All settings have defaults for local development. The only mandatory
    input is the OAuth config file pointed to by OAUTH_CONFIG_FILE.
    """

    model_config = SettingsConfigDict(
        # Disable .env loading when TESTING=1 (set by conftest.py)
        env_file=None if os.getenv("TESTING") else ".env",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=True,
    )

    PROJECT_NAME: str = "Coraserver"
    APP_VERSION: str = _load_app_version_from_pyproject()
    HOST: str = "0.0.0.0"
    PORT: int = 42069
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Microsoft identity platform
    OAUTH_CONFIG_FILE: str = "./config.json"
    GRAPH_API_URL: str = "https://graph.microsoft.com/v1.0"
    OAUTH_HTTP_TIMEOUT_SECONDS: float = 30.0

    # When true, /oauth/exchange rejects requests without a state parameter.
    # A state that IS supplied is always checked against the issued ones.
    OAUTH_REQUIRE_STATE: bool = False

    # "concatenated": profile JSON, newline, organization JSON (legacy shape)
    # "combined": {"profile": ..., "organization": ...}
    EXCHANGE_RESPONSE_FORMAT: Literal["concatenated", "combined"] = "concatenated"

    STATE_CLEANUP_INTERVAL_SECONDS: int = 300

    # Database Configuration (PostgreSQL)
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "cora"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "cora"

    # Full SQLAlchemy URL, takes precedence over the POSTGRES_* fields
    DATABASE_URL: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Build the database connection string"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            PostgresDsn.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )


# Create settings instance
settings = Settings()
