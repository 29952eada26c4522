"""
Tests for loading the OAuth configuration file.
"""

import json

import pytest
from pydantic import ValidationError

from coraserver.core.oauth_config import OAuthConfig, OAuthConfigError, load_oauth_config

VALID_CONFIG = {
    "clientID": "client-123",
    "clientSecret": "secret-456",
    "redirectURL": "http://localhost:42069/oauth/exchange",
    "scopes": ["User.Read", "openid"],
    "tenant": "contoso.onmicrosoft.com",
}


def _write(tmp_path, content: str):
    path = tmp_path / "config.json"
    path.write_text(content)
    return path


class TestLoadOAuthConfig:
    """Tests for load_oauth_config."""

    def test_loads_valid_config(self, tmp_path):
        """All fields are read from their JSON keys."""
        path = _write(tmp_path, json.dumps(VALID_CONFIG))

        config = load_oauth_config(path)

        assert config.client_id == "client-123"
        assert config.client_secret == "secret-456"
        assert config.redirect_url == "http://localhost:42069/oauth/exchange"
        assert config.scopes == ("User.Read", "openid")
        assert config.tenant == "contoso.onmicrosoft.com"

    def test_accepts_string_path(self, tmp_path):
        path = _write(tmp_path, json.dumps(VALID_CONFIG))
        assert load_oauth_config(str(path)).client_id == "client-123"

    def test_missing_file_raises(self, tmp_path):
        """A missing file is reported as OAuthConfigError."""
        with pytest.raises(OAuthConfigError, match="Error reading"):
            load_oauth_config(tmp_path / "does-not-exist.json")

    def test_invalid_json_raises(self, tmp_path):
        path = _write(tmp_path, "{not json")
        with pytest.raises(OAuthConfigError, match="Error parsing"):
            load_oauth_config(path)

    def test_missing_field_raises(self, tmp_path):
        data = dict(VALID_CONFIG)
        del data["clientSecret"]
        path = _write(tmp_path, json.dumps(data))

        with pytest.raises(OAuthConfigError, match="clientSecret"):
            load_oauth_config(path)

    def test_wrong_scope_type_raises(self, tmp_path):
        """scopes must be a list of strings."""
        data = dict(VALID_CONFIG, scopes="User.Read")
        path = _write(tmp_path, json.dumps(data))

        with pytest.raises(OAuthConfigError):
            load_oauth_config(path)

    def test_extra_keys_are_ignored(self, tmp_path):
        data = dict(VALID_CONFIG, comment="dev app registration")
        path = _write(tmp_path, json.dumps(data))

        assert load_oauth_config(path).tenant == "contoso.onmicrosoft.com"


class TestOAuthConfig:
    """Tests for the OAuthConfig model itself."""

    def test_is_immutable(self, oauth_config: OAuthConfig):
        with pytest.raises(ValidationError):
            oauth_config.client_id = "other"  # type: ignore[misc]

    def test_endpoints_use_tenant(self, oauth_config: OAuthConfig):
        assert oauth_config.authorize_url == (
            "https://login.microsoftonline.com/test-tenant/oauth2/v2.0/authorize"
        )
        assert oauth_config.token_url == (
            "https://login.microsoftonline.com/test-tenant/oauth2/v2.0/token"
        )
