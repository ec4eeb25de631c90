"""Master node login handling: keep the user here or send them home."""

from __future__ import annotations

import logging

from site_selector.core.trust_token import TrustTokenCodec
from site_selector.exceptions import UserLocationNotFound
from site_selector.models.gateway import GatewayConfig, HandoffResult, LoginAttempt
from site_selector.services.handoff import HandoffSelector
from site_selector.services.identity import IdentityExtractor
from site_selector.services.location import LocationResolver

LOGGER = logging.getLogger(__name__)


class GatewayController:
    """Run a login attempt through the master node's decision pipeline.

    Each step may end the attempt early:

    1. a valid trust token marks an internal master/slave request,
    2. master admins always log in locally,
    3. an unknown location fails the attempt,
    4. everyone else is handed off to their home node.

    ``handle`` returns ``None`` when the login should continue on this node.
    """

    def __init__(
        self,
        config: GatewayConfig,
        codec: TrustTokenCodec,
        extractor: IdentityExtractor,
        resolver: LocationResolver,
        selector: HandoffSelector,
    ) -> None:
        self._config = config
        self._codec = codec
        self._extractor = extractor
        self._resolver = resolver
        self._selector = selector

    async def handle(self, attempt: LoginAttempt) -> HandoffResult | None:
        if self._codec.verify(attempt.trust_token):
            LOGGER.debug("Valid trust token, skipping gateway for internal request")
            return None

        extracted = self._extractor.extract(attempt)
        identity = extracted.identity

        if identity.uid in self._config.master_admins:
            LOGGER.info("Master admin %s logs in on the master node", identity.uid)
            return None

        location = await self._resolver.resolve(identity, extracted.location_hint)
        if not location:
            LOGGER.warning("Could not find location for user %s", identity.uid)
            raise UserLocationNotFound(identity.uid)

        target = self._resolver.normalize(location, attempt.request_scheme)
        LOGGER.info(
            "Redirecting %s login for %s to %s",
            "saml" if extracted.federated else "direct",
            identity.uid,
            target,
        )
        return await self._selector.build_redirect(
            attempt.client_kind,
            target,
            identity,
            identity.extra,
        )


__all__ = ["GatewayController"]
