"""Gateway services and external node integrations."""

from site_selector.services.app_token import (
    AppTokenExchanger,
    build_basic_auth_url,
)
from site_selector.services.gateway import GatewayController
from site_selector.services.handoff import HandoffSelector
from site_selector.services.identity import ExtractedIdentity, IdentityExtractor
from site_selector.services.location import LocationResolver, normalize_location
from site_selector.services.lookup_client import DirectoryClient, LookupClient

__all__ = [
    "AppTokenExchanger",
    "DirectoryClient",
    "ExtractedIdentity",
    "GatewayController",
    "HandoffSelector",
    "IdentityExtractor",
    "LocationResolver",
    "LookupClient",
    "build_basic_auth_url",
    "normalize_location",
]
