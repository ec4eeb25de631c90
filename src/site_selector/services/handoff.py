"""Choice of handoff mechanism and construction of the redirect target."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from site_selector.core.trust_token import TrustTokenCodec
from site_selector.models.gateway import ClientKind, HandoffResult, Identity

LOGGER = logging.getLogger(__name__)

AUTOLOGIN_PATH = "/index.php/apps/globalsiteselector/autologin"
NATIVE_LOGIN_PREFIX = "nc://login/"


class AppTokenSource(Protocol):
    """Anything able to mint an app token on a remote node."""

    async def fetch_app_token(self, location: str, uid: str, password: str) -> str:
        ...


def native_login_url(location: str, uid: str, app_token: str) -> str:
    """Return the ``nc://`` URL handed to the Nextcloud clients."""
    return f"{NATIVE_LOGIN_PREFIX}server:{location}&user:{uid}&password:{app_token}"


def autologin_url(location: str, jwt: str) -> str:
    """Return the browser autologin URL on the target node."""
    return f"{location}{AUTOLOGIN_PATH}?jwt={jwt}"


class HandoffSelector:
    """Native clients get an app token, browsers get a trust token redirect."""

    def __init__(self, exchanger: AppTokenSource, codec: TrustTokenCodec) -> None:
        self._exchanger = exchanger
        self._codec = codec

    async def build_redirect(
        self,
        client_kind: ClientKind,
        location: str,
        identity: Identity,
        options: dict[str, Any] | None = None,
    ) -> HandoffResult:
        if client_kind.is_native:
            app_token = await self._exchanger.fetch_app_token(
                location, identity.uid, identity.password
            )
            LOGGER.info(
                "Handing off %s client of %s to %s",
                client_kind.value,
                identity.uid,
                location,
            )
            return HandoffResult(
                redirect_url=native_login_url(location, identity.uid, app_token),
                mechanism="native",
            )

        jwt = self._codec.issue(identity.uid, identity.password, options or {})
        LOGGER.info("Redirecting browser login of %s to %s", identity.uid, location)
        return HandoffResult(
            redirect_url=autologin_url(location, jwt),
            mechanism="browser",
        )


__all__ = [
    "AUTOLOGIN_PATH",
    "AppTokenSource",
    "HandoffSelector",
    "autologin_url",
    "native_login_url",
]
