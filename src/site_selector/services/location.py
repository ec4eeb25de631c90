"""Resolution of a user's home node."""

from __future__ import annotations

import logging

from site_selector.models.gateway import Identity
from site_selector.services.lookup_client import DirectoryClient

LOGGER = logging.getLogger(__name__)

_SCHEMES = ("http://", "https://")


def normalize_location(url: str, request_scheme: str) -> str:
    """Prefix *url* with the scheme the gateway was reached on, unless it has one."""
    if url.startswith(_SCHEMES):
        return url
    return f"{request_scheme}://{url}"


class LocationResolver:
    """Find the base URL of the node that hosts a user."""

    def __init__(self, directory: DirectoryClient) -> None:
        self._directory = directory

    async def resolve(self, identity: Identity, location_hint: str = "") -> str:
        """Return the user's location, or an empty string when unknown."""
        if location_hint:
            LOGGER.debug("Using SAML location hint for %s", identity.uid)
            return location_hint
        return await self._directory.search(identity.uid)

    @staticmethod
    def normalize(url: str, request_scheme: str) -> str:
        return normalize_location(url, request_scheme)


__all__ = ["LocationResolver", "normalize_location"]
