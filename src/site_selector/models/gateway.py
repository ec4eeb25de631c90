"""Login attempt and handoff models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from site_selector.config import Settings


class ClientKind(str, Enum):
    """Kind of client that submitted the login attempt."""

    BROWSER = "browser"
    MOBILE_IOS = "mobile_ios"
    MOBILE_ANDROID = "mobile_android"
    DESKTOP = "desktop"

    @property
    def is_native(self) -> bool:
        """Return True for the Nextcloud mobile and desktop clients."""
        return self is not ClientKind.BROWSER


class DirectSource(BaseModel):
    """Plain uid/password login."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["direct"] = "direct"
    uid: str
    password: str = ""


class FederatedSource(BaseModel):
    """Login delivered by a SAML backend.

    ``formatted`` is the user data already mapped to Nextcloud fields and is
    the only part forwarded to the target node. ``raw`` holds the unprocessed
    SAML attributes.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["federated"] = "federated"
    formatted: dict[str, Any] = Field(default_factory=dict)
    raw: dict[str, list[str]] = Field(default_factory=dict)


IdentitySource = Annotated[
    Union[DirectSource, FederatedSource],
    Field(discriminator="kind"),
]


class LoginAttempt(BaseModel):
    """A single login attempt intercepted on the master node."""

    model_config = ConfigDict(frozen=True)

    source: IdentitySource
    client_kind: ClientKind = ClientKind.BROWSER
    trust_token: str | None = None
    request_scheme: Literal["http", "https"] = "https"


class Identity(BaseModel):
    """Canonical identity resolved from a login attempt."""

    model_config = ConfigDict(frozen=True)

    uid: str = Field(..., min_length=1)
    password: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)


class TrustTokenClaims(BaseModel):
    """Decoded claims of an inter-node trust token."""

    model_config = ConfigDict(frozen=True)

    uid: str
    password: str
    options: str
    exp: int


class HandoffResult(BaseModel):
    """Where the user has to be sent to finish the login."""

    model_config = ConfigDict(frozen=True)

    redirect_url: str
    mechanism: Literal["native", "browser"]


class SamlUserData(BaseModel):
    """User data as produced by the SAML backend."""

    formatted: dict[str, Any] = Field(default_factory=dict)
    raw: dict[str, list[str]] = Field(default_factory=dict)


class SamlLoginRequest(BaseModel):
    """Body of a SAML login attempt forwarded to the gateway."""

    user_data: SamlUserData


@dataclass(frozen=True)
class GatewayConfig:
    """Read-only configuration snapshot used by the gateway controller."""

    master_admins: frozenset[str]
    saml_location_attribute: str
    jwt_key: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "GatewayConfig":
        return cls(
            master_admins=frozenset(settings.gss.master_admins),
            saml_location_attribute=settings.gss.saml_slave_mapping,
            jwt_key=settings.gss.jwt_key,
        )


__all__ = [
    "ClientKind",
    "DirectSource",
    "FederatedSource",
    "GatewayConfig",
    "HandoffResult",
    "Identity",
    "IdentitySource",
    "LoginAttempt",
    "SamlLoginRequest",
    "SamlUserData",
    "TrustTokenClaims",
]
