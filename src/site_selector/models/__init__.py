"""Pydantic models for login attempts and handoffs."""

from site_selector.models.gateway import (
    ClientKind,
    DirectSource,
    FederatedSource,
    GatewayConfig,
    HandoffResult,
    Identity,
    IdentitySource,
    LoginAttempt,
    SamlLoginRequest,
    SamlUserData,
    TrustTokenClaims,
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
