"""Tests for client classification."""

from __future__ import annotations

import pytest

from site_selector.api.user_agent import classify_user_agent
from site_selector.models.gateway import ClientKind


@pytest.mark.parametrize(
    ("user_agent", "expected"),
    [
        ("Mozilla/5.0 (iOS) Nextcloud-iOS/4.9.2", ClientKind.MOBILE_IOS),
        ("Mozilla/5.0 (iOS) ownCloud-iOS/3.8.0", ClientKind.MOBILE_IOS),
        ("Mozilla/5.0 (Android) Nextcloud-android/3.25.0", ClientKind.MOBILE_ANDROID),
        ("Mozilla/5.0 (Android) ownCloud-android/2.0.0", ClientKind.MOBILE_ANDROID),
        ("Mozilla/5.0 (Linux) mirall/3.11.0", ClientKind.DESKTOP),
        ("Mozilla/5.0 (Windows) csyncoC/2.1", ClientKind.DESKTOP),
        ("Mozilla/5.0 (X11; Linux x86_64; rv:120.0) Gecko/20100101 Firefox/120.0", ClientKind.BROWSER),
        ("curl/8.4.0", ClientKind.BROWSER),
        ("", ClientKind.BROWSER),
        (None, ClientKind.BROWSER),
    ],
)
def test_classify_user_agent(user_agent: str | None, expected: ClientKind) -> None:
    assert classify_user_agent(user_agent) is expected


def test_is_native() -> None:
    assert ClientKind.BROWSER.is_native is False
    assert all(
        kind.is_native
        for kind in (ClientKind.MOBILE_IOS, ClientKind.MOBILE_ANDROID, ClientKind.DESKTOP)
    )
