"""Async lookup server client used to find the node that owns a user."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from site_selector.config import LookupSettings, get_settings

LOGGER = logging.getLogger(__name__)


class DirectoryClient(Protocol):
    """Search contract of the user directory."""

    async def search(self, uid: str) -> str:
        """Return the location of *uid* or an empty string if unknown."""
        ...


def location_from_federation_id(federation_id: str) -> str:
    """Return the host part of a federated cloud id such as ``alice@node1.example``."""
    if "@" not in federation_id:
        return ""
    return federation_id[federation_id.rindex("@") + 1:].strip()


class LookupClient:
    """Query the lookup server for the location of a user.

    Lookup failures are logged and reported as "not found"; the gateway then
    fails the attempt with a user-visible error instead of a server error.
    """

    def __init__(
        self,
        settings: LookupSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if settings is None:
            settings = get_settings().lookup
        self.settings = settings
        self._transport = transport

    async def search(self, uid: str) -> str:
        if not self.settings.server_url:
            LOGGER.warning("No lookup server configured, cannot locate user %s", uid)
            return ""

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout,
                verify=self.settings.verify_ssl,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    f"{self.settings.server_url}/users",
                    params={"search": uid, "exactCloudId": "1"},
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as exc:
            LOGGER.warning("Lookup server request for %s failed: %s", uid, exc)
            return ""
        except ValueError:
            LOGGER.warning("Lookup server returned invalid JSON for %s", uid)
            return ""

        if not isinstance(body, dict):
            return ""
        federation_id = body.get("federationId")
        if not isinstance(federation_id, str):
            return ""

        location = location_from_federation_id(federation_id)
        LOGGER.debug("Lookup server located %s at %s", uid, location or "<unknown>")
        return location


__all__ = [
    "DirectoryClient",
    "LookupClient",
    "location_from_federation_id",
]
