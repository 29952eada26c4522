"""
OAuth routes for signing in with a Microsoft account.

Endpoints:
  - GET /oauth/login: redirect to the Microsoft authorization page
  - GET /oauth/exchange: redirect target; exchanges the code and returns
    the user's Graph profile and organization
"""

import json
import logging

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from coraserver.api.deps import OAuthClientDep, SettingsDep
from coraserver.services.microsoft_oauth import GraphAPIError, OAuthTokenError
from coraserver.services.oauth_state import consume_oauth_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oauth", tags=["oauth"])


def _plain_error(message: str, status_code: int) -> PlainTextResponse:
    return PlainTextResponse(
        message,
        status_code=status_code,
        media_type="text/plain; charset=utf-8",
    )


@router.get("/login")
async def oauth_login(oauth_client: OAuthClientDep) -> RedirectResponse:
    """Start the login flow by redirecting the browser to Microsoft."""
    authorization_url, _ = oauth_client.begin_login()
    return RedirectResponse(url=authorization_url, status_code=status.HTTP_302_FOUND)


@router.get("/exchange")
async def oauth_exchange(
    oauth_client: OAuthClientDep,
    app_settings: SettingsDep,
    code: str = "",
    state: str | None = None,
) -> Response:
    """
    Handle the redirect back from Microsoft.

    Returns the Graph `me` and `organization` documents. With the
    "concatenated" response format they are written back to back separated
    by a newline; with "combined" they are wrapped in one JSON object.
    """
    if state is not None:
        if consume_oauth_state(state) is None:
            logger.warning("Rejected OAuth exchange with unknown or expired state")
            return _plain_error("Invalid or expired state parameter", status.HTTP_400_BAD_REQUEST)
    elif app_settings.OAUTH_REQUIRE_STATE:
        logger.warning("Rejected OAuth exchange without state")
        return _plain_error("Missing state parameter", status.HTTP_400_BAD_REQUEST)

    try:
        profile, organization = await oauth_client.complete_exchange(code)
    except OAuthTokenError as e:
        logger.error("Error while exchanging authorization code: %s", e)
        return _plain_error(str(e), status.HTTP_400_BAD_REQUEST)
    except GraphAPIError as e:
        logger.error("Error getting user profile or organization: %s", e)
        return _plain_error(str(e), status.HTTP_403_FORBIDDEN)

    if app_settings.EXCHANGE_RESPONSE_FORMAT == "combined":
        try:
            body = json.dumps(
                {
                    "profile": json.loads(profile),
                    "organization": json.loads(organization),
                }
            ).encode()
        except ValueError as e:
            logger.error("Graph returned a body that is not JSON: %s", e)
            return _plain_error(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
    else:
        body = profile + b"\n" + organization

    return Response(content=body, media_type="application/json")
