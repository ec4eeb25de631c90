"""Tests for the handoff selector."""

from __future__ import annotations

from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlparse

import pytest

from site_selector.core.trust_token import TrustTokenCodec
from site_selector.models.gateway import ClientKind, Identity
from site_selector.services.handoff import HandoffSelector, autologin_url, native_login_url


def test_native_login_url() -> None:
    assert (
        native_login_url("https://nodeB.example", "dave", "tok123")
        == "nc://login/server:https://nodeB.example&user:dave&password:tok123"
    )


def test_autologin_url() -> None:
    assert (
        autologin_url("https://nodeA.example", "abc")
        == "https://nodeA.example/index.php/apps/globalsiteselector/autologin?jwt=abc"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kind",
    [ClientKind.MOBILE_IOS, ClientKind.MOBILE_ANDROID, ClientKind.DESKTOP],
)
async def test_native_clients_get_app_token(
    kind: ClientKind,
    exchanger: AsyncMock,
    codec: TrustTokenCodec,
) -> None:
    selector = HandoffSelector(exchanger, codec)
    result = await selector.build_redirect(
        kind, "https://nodeB.example", Identity(uid="dave", password="pw"), {}
    )

    assert result.mechanism == "native"
    assert result.redirect_url == "nc://login/server:https://nodeB.example&user:dave&password:tok123"
    exchanger.fetch_app_token.assert_awaited_once_with("https://nodeB.example", "dave", "pw")


@pytest.mark.asyncio
async def test_browser_gets_trust_token(exchanger: AsyncMock, codec: TrustTokenCodec) -> None:
    selector = HandoffSelector(exchanger, codec)
    result = await selector.build_redirect(
        ClientKind.BROWSER,
        "https://nodeA.example",
        Identity(uid="carol", password="pw"),
        {"backend": "saml", "userData": {"uid": "carol"}},
    )

    assert result.mechanism == "browser"
    assert result.redirect_url.startswith(
        "https://nodeA.example/index.php/apps/globalsiteselector/autologin?jwt="
    )
    exchanger.fetch_app_token.assert_not_awaited()

    jwt = parse_qs(urlparse(result.redirect_url).query)["jwt"][0]
    claims = codec.decode(jwt)
    assert claims.uid == "carol"
    assert codec.decrypt_password(claims) == "pw"
    assert TrustTokenCodec.load_options(claims) == {"backend": "saml", "userData": {"uid": "carol"}}


@pytest.mark.asyncio
async def test_browser_without_options(exchanger: AsyncMock, codec: TrustTokenCodec) -> None:
    selector = HandoffSelector(exchanger, codec)
    result = await selector.build_redirect(
        ClientKind.BROWSER, "https://nodeA.example", Identity(uid="carol")
    )
    jwt = parse_qs(urlparse(result.redirect_url).query)["jwt"][0]
    assert TrustTokenCodec.load_options(codec.decode(jwt)) == {}
