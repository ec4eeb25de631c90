"""Login routes: turn HTTP requests into login attempts and emit the redirect."""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Form, Header, Query, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from site_selector.api.user_agent import classify_user_agent
from site_selector.dependencies import GatewayControllerDep
from site_selector.models.gateway import (
    DirectSource,
    FederatedSource,
    HandoffResult,
    LoginAttempt,
    SamlLoginRequest,
)

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/login", tags=["Login"])


def _request_scheme(request: Request) -> Literal["http", "https"]:
    """Return the scheme the gateway was reached on, honouring a reverse proxy."""
    forwarded = request.headers.get("x-forwarded-proto", "")
    scheme = forwarded.split(",")[0].strip().lower() or request.url.scheme
    return "http" if scheme == "http" else "https"


def _to_response(result: HandoffResult | None) -> Response:
    """Redirect to the user's home node, or let the local login continue."""
    if result is None:
        LOGGER.debug("Login continues on the master node")
        return JSONResponse({"status": "local"})
    LOGGER.debug("Login handed off with %s redirect", result.mechanism)
    return RedirectResponse(url=result.redirect_url, status_code=302)


@router.post("")
async def login(
    request: Request,
    controller: GatewayControllerDep,
    uid: Annotated[str, Form(min_length=1)],
    password: Annotated[str, Form()] = "",
    jwt: Annotated[str | None, Query()] = None,
    user_agent: Annotated[str | None, Header()] = None,
) -> Response:
    """Handle a uid/password login attempt."""
    attempt = LoginAttempt(
        source=DirectSource(uid=uid, password=password),
        client_kind=classify_user_agent(user_agent),
        trust_token=jwt,
        request_scheme=_request_scheme(request),
    )
    return _to_response(await controller.handle(attempt))


@router.post("/saml")
async def saml_login(
    request: Request,
    controller: GatewayControllerDep,
    body: SamlLoginRequest,
    jwt: Annotated[str | None, Query()] = None,
    user_agent: Annotated[str | None, Header()] = None,
) -> Response:
    """Handle a login attempt delivered by the SAML backend."""
    attempt = LoginAttempt(
        source=FederatedSource(
            formatted=body.user_data.formatted,
            raw=body.user_data.raw,
        ),
        client_kind=classify_user_agent(user_agent),
        trust_token=jwt,
        request_scheme=_request_scheme(request),
    )
    return _to_response(await controller.handle(attempt))


__all__ = ["router"]
