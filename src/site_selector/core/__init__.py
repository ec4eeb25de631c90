"""Core modules for credential protection and trust tokens."""

from site_selector.core.crypto import CredentialCrypto, CredentialCryptoError
from site_selector.core.trust_token import (
    TRUST_TOKEN_TTL_SECONDS,
    TrustTokenCodec,
    TrustTokenError,
)

__all__ = [
    "CredentialCrypto",
    "CredentialCryptoError",
    "TRUST_TOKEN_TTL_SECONDS",
    "TrustTokenCodec",
    "TrustTokenError",
]
