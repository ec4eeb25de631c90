"""Redaction of credentials before diagnostics reach logs or error messages."""

from __future__ import annotations

import re
from typing import Any, Iterable

REDACTED = "***REDACTED***"

_SECRET_PATTERNS: list[tuple[re.Pattern, str]] = [
    # Basic auth embedded in URLs
    (re.compile(r'(?i)(https?://)[^/\s@"\']+@'), r'\1***:' + REDACTED + '@'),

    # Authorization headers
    (re.compile(r'(?i)(authorization)\s*[=:]\s*["\']?(basic|bearer)\s+[a-zA-Z0-9_\-\.=+/]+["\']?'), r'\1=' + REDACTED),

    # Passwords and tokens in key/value or JSON form
    (re.compile(r'(?i)("?(?:password|passwd|pwd|token|secret)"?)\s*([=:])\s*"[^"]*"'), r'\1\2"' + REDACTED + '"'),
    (re.compile(r'(?i)\b(password|passwd|pwd|token|secret)=([^\s&"\']+)'), r'\1=' + REDACTED),

    # JWT tokens (header.payload.signature format)
    (re.compile(r'eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*'), '***JWT_REDACTED***'),
]


def sanitize(text: str, secrets: Iterable[str] = ()) -> str:
    """Remove credentials from *text*.

    Known secret values are replaced verbatim first, then the generic
    patterns catch embedded basic auth, authorization headers, password and
    token fields and JWTs.

    Args:
        text: The diagnostic string to clean.
        secrets: Literal values that must never appear in the result.

    Returns:
        The sanitized string.
    """
    if not text:
        return text

    sanitized = text
    # Longest first so a secret containing another one is removed whole
    for secret in sorted({s for s in secrets if s}, key=len, reverse=True):
        sanitized = sanitized.replace(secret, REDACTED)

    for pattern, replacement in _SECRET_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    return sanitized


def redact_values(value: Any, secrets: Iterable[str]) -> Any:
    """Return a copy of a decoded JSON *value* with secrets removed from every string.

    Keys and values of nested dicts and lists are cleaned, other scalars are
    returned unchanged.
    """
    ordered = sorted({s for s in secrets if s}, key=len, reverse=True)

    def _clean(item: Any) -> Any:
        if isinstance(item, str):
            for secret in ordered:
                item = item.replace(secret, REDACTED)
            return item
        if isinstance(item, dict):
            return {_clean(key): _clean(val) for key, val in item.items()}
        if isinstance(item, list):
            return [_clean(val) for val in item]
        return item

    return _clean(value)


__all__ = ["REDACTED", "redact_values", "sanitize"]
