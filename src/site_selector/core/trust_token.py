"""Signed trust tokens exchanged between master and slave nodes."""

from __future__ import annotations

import json
import time
from typing import Any, Callable

from authlib.jose import JsonWebToken
from authlib.jose.errors import JoseError

from site_selector.core.crypto import CredentialCrypto
from site_selector.models.gateway import TrustTokenClaims

TRUST_TOKEN_ALGORITHM = "HS256"
TRUST_TOKEN_TTL_SECONDS = 300


class TrustTokenError(Exception):
    """Raised when a trust token cannot be decoded or is no longer valid."""


class TrustTokenCodec:
    """Issue and check the HS256 tokens that carry a handed-off login.

    The token proves that the request was produced by a node holding the
    shared secret and carries the encrypted password so the target node can
    finish the login without asking the user again.
    """

    def __init__(
        self,
        secret: str,
        crypto: CredentialCrypto | None = None,
        clock: Callable[[], float] = time.time,
        ttl_seconds: int = TRUST_TOKEN_TTL_SECONDS,
    ) -> None:
        if not secret:
            raise ValueError("Trust token secret must not be empty")
        self._key = secret.encode("utf-8")
        self._crypto = crypto or CredentialCrypto(secret)
        self._clock = clock
        self._ttl_seconds = ttl_seconds
        self._jwt = JsonWebToken([TRUST_TOKEN_ALGORITHM])

    def issue(self, uid: str, password: str, options: dict[str, Any]) -> str:
        """Return a signed token for *uid* that expires after the TTL."""
        payload = {
            "uid": uid,
            "password": self._crypto.encrypt(password),
            "options": json.dumps(options, separators=(",", ":")),
            "exp": int(self._clock()) + self._ttl_seconds,
        }
        token = self._jwt.encode({"alg": TRUST_TOKEN_ALGORITHM}, payload, self._key)
        return token.decode("ascii")

    def decode(self, token: str | None) -> TrustTokenClaims:
        """Decode *token*, checking signature and expiry.

        Raises:
            TrustTokenError: For any malformed, foreign or expired token.
        """
        if not token:
            raise TrustTokenError("No trust token supplied")
        try:
            claims = self._jwt.decode(
                token,
                self._key,
                claims_options={"exp": {"essential": True}},
            )
            claims.validate(now=int(self._clock()), leeway=0)
            return TrustTokenClaims(
                uid=claims["uid"],
                password=claims["password"],
                options=claims["options"],
                exp=claims["exp"],
            )
        except (JoseError, KeyError, TypeError, ValueError) as exc:
            raise TrustTokenError("Invalid trust token") from exc

    def verify(self, token: str | None) -> bool:
        """Return True only for a well-formed, correctly signed, unexpired token."""
        try:
            self.decode(token)
        except TrustTokenError:
            return False
        return True

    def decrypt_password(self, claims: TrustTokenClaims) -> str:
        """Return the plaintext password carried by *claims*."""
        return self._crypto.decrypt(claims.password)

    @staticmethod
    def load_options(claims: TrustTokenClaims) -> dict[str, Any]:
        """Return the options mapping carried by *claims*."""
        options = json.loads(claims.options)
        if not isinstance(options, dict):
            return {}
        return options


__all__ = [
    "TRUST_TOKEN_ALGORITHM",
    "TRUST_TOKEN_TTL_SECONDS",
    "TrustTokenCodec",
    "TrustTokenError",
]
