"""
Login state tracking for the OAuth authorization code flow.

Every /oauth/login issues a random state token and remembers it here. When
the identity provider redirects back to /oauth/exchange, the returned state
is consumed so it can only be used once, and only within
STATE_EXPIRATION_MINUTES.

LIMITATION: state is kept in process memory, so it works for a single
instance only. All access happens on the event loop thread.
"""

import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

# OAuth state expiration time (10 minutes)
STATE_EXPIRATION_MINUTES = 10

STATE_LENGTH = 16
STATE_ALPHABET = string.ascii_letters + string.digits

# One random source for the life of the process
_random = secrets.SystemRandom()


@dataclass
class OAuthStateData:
    """Data stored with an issued state for validation on exchange."""

    state: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_expired(self) -> bool:
        age = datetime.now(timezone.utc) - self.created_at
        return age > timedelta(minutes=STATE_EXPIRATION_MINUTES)


_oauth_states: dict[str, OAuthStateData] = {}


def generate_oauth_state(length: int = STATE_LENGTH) -> str:
    """
    Generate a random alphanumeric OAuth state parameter.

    Returns:
        String of `length` characters from [A-Za-z0-9]
    """
    return "".join(_random.choice(STATE_ALPHABET) for _ in range(length))


def store_oauth_state(state: str) -> OAuthStateData:
    """
    Remember an issued state for later validation.

    Args:
        state: The state parameter sent to the identity provider

    Returns:
        The stored OAuthStateData
    """
    state_data = OAuthStateData(state=state)
    _oauth_states[state] = state_data
    return state_data


def get_oauth_state(state: str) -> OAuthStateData | None:
    """Retrieve state data without removing it."""
    return _oauth_states.get(state)


def consume_oauth_state(state: str) -> OAuthStateData | None:
    """
    Retrieve and remove state data with expiration check.

    Args:
        state: The state parameter returned by the identity provider

    Returns:
        OAuthStateData or None if unknown or expired
    """
    state_data = _oauth_states.pop(state, None)
    if state_data is None:
        return None

    if state_data.is_expired():
        return None

    return state_data


def cleanup_expired_states() -> int:
    """
    Remove expired states from memory.

    Call this periodically to prevent memory leaks from abandoned logins.

    Returns:
        Number of expired states removed
    """
    expired_states = [
        state for state, data in _oauth_states.items() if data.is_expired()
    ]
    for state in expired_states:
        _oauth_states.pop(state, None)
    return len(expired_states)


def clear_oauth_states() -> None:
    """Forget every issued state."""
    _oauth_states.clear()
