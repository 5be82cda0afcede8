"""Access token gate: shared invite secret checked before sign-up and sign-in.

The token proves the caller was given the organisation's invite, not who they
are. It is a precondition ahead of the identity operation and is independent
of roles.
"""

import hmac
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.core.config import Settings

INVALID_ACCESS_TOKEN_MESSAGE = "Invalid access token. Please contact your administrator."


class AccessTokenError(Exception):
    """Raised when the supplied access token does not match the configured one."""

    def __init__(self, message: str = INVALID_ACCESS_TOKEN_MESSAGE) -> None:
        self.message = message
        super().__init__(message)


def check_access_token(candidate: str | None, expected: str) -> bool:
    """Compare trimmed candidate against expected in constant time."""
    if not isinstance(candidate, str) or not expected:
        return False
    return hmac.compare_digest(candidate.strip().encode("utf-8"), expected.encode("utf-8"))


def require_access_token(candidate: str | None, settings: "Settings") -> None:
    """Raise AccessTokenError unless candidate matches settings.ACCESS_TOKEN."""
    if not check_access_token(candidate, settings.ACCESS_TOKEN.get_secret_value()):
        raise AccessTokenError()
