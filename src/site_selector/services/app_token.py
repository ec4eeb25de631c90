"""Mint short-lived app tokens on the user's home node for native clients."""

from __future__ import annotations

import json
import logging
from urllib.parse import quote

import httpx

from site_selector.config import AppTokenSettings, get_settings
from site_selector.exceptions import RemoteExchangeError
from site_selector.services.log_sanitizer import redact_values, sanitize

LOGGER = logging.getLogger(__name__)

CREATE_APP_TOKEN_PATH = "/ocs/v2.php/apps/globalsiteselector/v1/createapptoken?format=json"


def build_basic_auth_url(url: str, uid: str, password: str) -> str:
    """Embed ``uid:password@`` right after the scheme of *url*.

    URLs without ``http://`` or ``https://`` are switched to ``https://``.
    """
    if url.startswith("http://"):
        scheme = "http://"
    elif url.startswith("https://"):
        scheme = "https://"
    else:
        scheme = "https://"
        url = scheme + url

    return f"{scheme}{uid}:{password}@{url[len(scheme):]}"


class AppTokenExchanger:
    """Call ``createapptoken`` on the target node with the user's credentials."""

    def __init__(
        self,
        settings: AppTokenSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if settings is None:
            settings = get_settings().app_token
        self.settings = settings
        self._transport = transport

    async def fetch_app_token(self, location: str, uid: str, password: str) -> str:
        """Return a fresh app token for *uid* from the node at *location*.

        Raises:
            RemoteExchangeError: On transport failure, timeout, error status,
                undecodable body or a body without ``ocs.data.token``.
        """
        secrets = (password, quote(password, safe=""))
        # Userinfo is percent-encoded so '@' or ':' in credentials keep the URL parseable
        auth_url = build_basic_auth_url(location, quote(uid, safe=""), quote(password, safe=""))

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout,
                verify=self.settings.verify_ssl,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    auth_url + CREATE_APP_TOKEN_PATH,
                    headers={"OCS-APIRequest": "true"},
                )
                response.raise_for_status()
        except httpx.HTTPError as exc:
            info = sanitize(
                f"getAppToken - request to {location} failed: {exc}", secrets
            )
            LOGGER.error(info)
            raise RemoteExchangeError(info) from None

        try:
            data = json.loads(response.text)
        except json.JSONDecodeError as exc:
            info = (
                "getAppToken - Decoding the JSON failed "
                f"at line {exc.lineno} column {exc.colno}: {exc.msg}"
            )
            LOGGER.error(info)
            raise RemoteExchangeError(info) from None

        token = None
        if isinstance(data, dict):
            ocs = data.get("ocs")
            if isinstance(ocs, dict) and isinstance(ocs.get("data"), dict):
                token = ocs["data"].get("token")

        if not isinstance(token, str) or not token:
            # Redact before serializing, json.dumps escapes quotes and non-ASCII
            info = sanitize(
                "getAppToken - data doesn't contain token: "
                + json.dumps(redact_values(data, secrets)),
                secrets,
            )
            LOGGER.error(info)
            raise RemoteExchangeError(info)

        LOGGER.info("Fetched app token for %s from %s", uid, location)
        return token


__all__ = [
    "AppTokenExchanger",
    "CREATE_APP_TOKEN_PATH",
    "build_basic_auth_url",
]
