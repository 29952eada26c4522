"""
Microsoft identity platform client for the OAuth authorization code flow.

Handles:
- Building the authorization redirect URL for /oauth/login
- Exchanging an authorization code for an access token
- Fetching the signed-in user's profile and organization from Microsoft Graph

Every outbound request uses a bounded timeout. Nothing is retried.
"""

import logging
from urllib.parse import urlencode

import httpx

from coraserver.core.oauth_config import OAuthConfig
from coraserver.services.oauth_state import generate_oauth_state, store_oauth_state

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_API_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_TIMEOUT_SECONDS = 30.0


class OAuthTokenError(Exception):
    """Error during OAuth token exchange."""

    def __init__(self, error: str, description: str | None = None):
        self.error = error
        self.description = description
        super().__init__(f"{error}: {description}" if description else error)


class GraphAPIError(Exception):
    """A Microsoft Graph request failed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class MicrosoftOAuthClient:
    """
    Call-through client for one Microsoft Entra ID app registration.

    Args:
        config: OAuth client configuration loaded at startup
        graph_api_url: Base URL of the Microsoft Graph API
        timeout: Timeout in seconds applied to each outbound request
    """

    def __init__(
        self,
        config: OAuthConfig,
        *,
        graph_api_url: str = DEFAULT_GRAPH_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.config = config
        self.graph_api_url = graph_api_url.rstrip("/")
        self.timeout = timeout

    def build_authorization_url(self, state: str) -> str:
        """
        Build the authorization URL for a given state.

        Online access only (no refresh token), and the user is always asked
        to pick an account.
        """
        params = {
            "access_type": "online",
            "client_id": self.config.client_id,
            "prompt": "select_account",
            "redirect_uri": self.config.redirect_url,
            "response_type": "code",
            "scope": " ".join(self.config.scopes),
            "state": state,
        }
        return f"{self.config.authorize_url}?{urlencode(params)}"

    def begin_login(self) -> tuple[str, str]:
        """
        Start a login attempt.

        Returns:
            Tuple of (authorization_url, state)
        """
        state = generate_oauth_state()
        store_oauth_state(state)
        return self.build_authorization_url(state), state

    async def exchange_code(self, code: str) -> dict:
        """
        Exchange an authorization code for an access token.

        Args:
            code: Authorization code from the identity provider redirect

        Returns:
            Dictionary with access_token, token_type, expires_in, scope

        Raises:
            OAuthTokenError: If the code is missing, rejected, or the token
                endpoint cannot be reached
        """
        if not code:
            raise OAuthTokenError("invalid_request", "Missing authorization code")

        data = {
            "grant_type": "authorization_code",
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "code": code,
            "redirect_uri": self.config.redirect_url,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.config.token_url,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
        except httpx.HTTPError as e:
            raise OAuthTokenError("request_failed", str(e)) from e

        try:
            result = response.json()
        except ValueError:
            raise OAuthTokenError(
                "server_error",
                f"HTTP {response.status_code}: {response.text[:200]}",
            )

        if not isinstance(result, dict):
            raise OAuthTokenError(
                "server_error",
                f"HTTP {response.status_code}: unexpected token response",
            )

        if response.status_code != 200:
            error = result.get("error", "unknown_error")
            description = result.get("error_description")
            raise OAuthTokenError(error, description)

        if "access_token" not in result:
            raise OAuthTokenError("invalid_response", "No access_token in token response")

        return {
            "access_token": result["access_token"],
            "token_type": result.get("token_type", "Bearer"),
            "expires_in": result.get("expires_in"),
            "scope": result.get("scope"),
        }

    async def get_graph(self, access_token: str, endpoint: str) -> bytes:
        """
        GET a Microsoft Graph resource with a bearer token.

        Args:
            access_token: Access token from exchange_code
            endpoint: Path below the Graph base URL (e.g. "me")

        Returns:
            Raw JSON response body

        Raises:
            GraphAPIError: On a non-200 response or transport failure
        """
        url = f"{self.graph_api_url}/{endpoint}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    url,
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/json",
                    },
                )
        except httpx.HTTPError as e:
            raise GraphAPIError(f"request to {url} failed: {e}") from e

        if response.status_code != 200:
            raise GraphAPIError(
                f"unexpected response status: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        return response.content

    async def complete_exchange(self, code: str) -> tuple[bytes, bytes]:
        """
        Finish a login: exchange the code, then fetch profile and organization.

        The two Graph requests are issued one after the other.

        Returns:
            Tuple of (profile_json, organization_json) raw bodies

        Raises:
            OAuthTokenError: If the code exchange fails
            GraphAPIError: If either Graph request fails
        """
        token = await self.exchange_code(code)
        profile = await self.get_graph(token["access_token"], "me")
        organization = await self.get_graph(token["access_token"], "organization")
        return profile, organization
