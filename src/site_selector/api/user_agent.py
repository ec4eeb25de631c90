"""Classification of the requesting client from its User-Agent."""

from __future__ import annotations

import re

from site_selector.models.gateway import ClientKind

_CLIENT_PATTERNS: list[tuple[re.Pattern, ClientKind]] = [
    (re.compile(r"^Mozilla/5\.0 \(iOS\) (ownCloud|Nextcloud)-iOS.*$"), ClientKind.MOBILE_IOS),
    (re.compile(r"^Mozilla/5\.0 \(Android\) (ownCloud|Nextcloud)-android.*$"), ClientKind.MOBILE_ANDROID),
    (re.compile(r"^Mozilla/5\.0 \([A-Za-z ]+\) (mirall|csyncoC)/.*$"), ClientKind.DESKTOP),
]


def classify_user_agent(user_agent: str | None) -> ClientKind:
    """Return the client kind for *user_agent*; anything unknown is a browser."""
    if not user_agent:
        return ClientKind.BROWSER
    for pattern, kind in _CLIENT_PATTERNS:
        if pattern.match(user_agent):
            return kind
    return ClientKind.BROWSER


__all__ = ["classify_user_agent"]
