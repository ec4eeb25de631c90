"""Normalisation of login attempts into a canonical identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from site_selector.exceptions import InvalidLoginAttempt
from site_selector.models.gateway import (
    DirectSource,
    FederatedSource,
    GatewayConfig,
    Identity,
    LoginAttempt,
)


@dataclass(frozen=True)
class ExtractedIdentity:
    """Identity plus the routing facts derived while extracting it."""

    identity: Identity
    location_hint: str
    federated: bool


class IdentityExtractor:
    """Turn a login attempt into ``(identity, location hint)``.

    SAML attempts carry no local password. Their location may come straight
    from a configured SAML attribute, and only the formatted user data is
    forwarded to the target node.
    """

    def __init__(self, config: GatewayConfig) -> None:
        self._config = config

    def extract(self, attempt: LoginAttempt) -> ExtractedIdentity:
        source = attempt.source
        if isinstance(source, FederatedSource):
            return self._from_federated(source)
        return self._from_direct(source)

    def _from_direct(self, source: DirectSource) -> ExtractedIdentity:
        if not source.uid:
            raise InvalidLoginAttempt("Login attempt without uid")
        return ExtractedIdentity(
            identity=Identity(uid=source.uid, password=source.password),
            location_hint="",
            federated=False,
        )

    def _from_federated(self, source: FederatedSource) -> ExtractedIdentity:
        uid = source.formatted.get("uid")
        if not isinstance(uid, str) or not uid:
            raise InvalidLoginAttempt("Federated user data without uid")

        extra: dict[str, Any] = {
            "backend": "saml",
            "userData": dict(source.formatted),
        }
        return ExtractedIdentity(
            identity=Identity(uid=uid, password="", extra=extra),
            location_hint=self.location_from_attributes(source.raw),
            federated=True,
        )

    def location_from_attributes(self, attributes: dict[str, list[str]]) -> str:
        """Read the user's node from the configured SAML attribute, if any."""
        attribute = self._config.saml_location_attribute
        if not attribute:
            return ""
        values = attributes.get(attribute) or []
        if not values:
            return ""
        return values[0]


__all__ = ["ExtractedIdentity", "IdentityExtractor"]
