"""FastAPI dependency injection providers."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from site_selector.config import get_settings
from site_selector.core.crypto import CredentialCrypto
from site_selector.core.trust_token import TrustTokenCodec
from site_selector.models.gateway import GatewayConfig
from site_selector.services.app_token import AppTokenExchanger
from site_selector.services.gateway import GatewayController
from site_selector.services.handoff import HandoffSelector
from site_selector.services.identity import IdentityExtractor
from site_selector.services.location import LocationResolver
from site_selector.services.lookup_client import LookupClient


@lru_cache(maxsize=1)
def _get_gateway_config() -> GatewayConfig:
    """Freeze the gateway configuration once per process."""
    return GatewayConfig.from_settings(get_settings())


@lru_cache(maxsize=1)
def _get_trust_token_codec() -> TrustTokenCodec:
    """Create and cache the trust token codec."""
    config = _get_gateway_config()
    return TrustTokenCodec(config.jwt_key, crypto=CredentialCrypto(config.jwt_key))


@lru_cache(maxsize=1)
def _get_gateway_controller() -> GatewayController:
    """Wire the gateway controller and its collaborators."""
    settings = get_settings()
    config = _get_gateway_config()
    codec = _get_trust_token_codec()
    return GatewayController(
        config=config,
        codec=codec,
        extractor=IdentityExtractor(config),
        resolver=LocationResolver(LookupClient(settings.lookup)),
        selector=HandoffSelector(AppTokenExchanger(settings.app_token), codec),
    )


def get_gateway_controller() -> GatewayController:
    """Dependency that provides the gateway controller."""
    return _get_gateway_controller()


GatewayControllerDep = Annotated[GatewayController, Depends(get_gateway_controller)]


def reset_dependencies() -> None:
    """Clear all cached dependencies. Useful for testing."""
    _get_gateway_config.cache_clear()
    _get_trust_token_codec.cache_clear()
    _get_gateway_controller.cache_clear()


__all__ = [
    "GatewayControllerDep",
    "get_gateway_controller",
    "reset_dependencies",
]
