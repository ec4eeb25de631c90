"""User-visible gateway failures."""

from __future__ import annotations


class InvalidLoginAttempt(ValueError):
    """Raised when a login attempt does not name a user."""


class GatewayError(RuntimeError):
    """Base class for failures that abort a login attempt."""

    status_code = 500
    public_message = "Login could not be completed"


class UserLocationNotFound(GatewayError):
    """Raised when neither SAML nor the lookup server know the user's node."""

    status_code = 404

    def __init__(self, uid: str) -> None:
        super().__init__(f"Could not find location for user, {uid}")
        self.uid = uid

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return str(self)


class RemoteExchangeError(GatewayError):
    """Raised when the target node does not hand out an app token.

    The message is a diagnostic for the logs and never contains the user's
    credentials.
    """

    status_code = 502
    public_message = "Could not obtain an app token from your home server"


__all__ = [
    "GatewayError",
    "InvalidLoginAttempt",
    "RemoteExchangeError",
    "UserLocationNotFound",
]
