"""
Services package for external collaborators.

Usage:
    from coraserver.services import MicrosoftOAuthClient, SqlTimetableGateway
    from coraserver.services.protocols import TimetableGatewayProtocol

Available services:
    - microsoft_oauth: Microsoft identity platform login + Graph lookups
    - timetable: SQL-backed timetable queries
    - oauth_state: issued login state tracking
"""

from .protocols import TimetableGatewayProtocol
from .microsoft_oauth import GraphAPIError, MicrosoftOAuthClient, OAuthTokenError
from .timetable import SqlTimetableGateway

__all__ = [
    # Protocols
    "TimetableGatewayProtocol",
    # Microsoft OAuth
    "GraphAPIError",
    "MicrosoftOAuthClient",
    "OAuthTokenError",
    # Timetable
    "SqlTimetableGateway",
]
