"""Symmetric protection of the password carried inside trust tokens.

The ciphertext is transported as URL-safe base64 of::

    salt (16 bytes) || nonce (12 bytes) || ciphertext + GCM tag

The AES-256 key is derived per message with HKDF-SHA256 from the shared
secret and the random salt, so every node holding the secret can decrypt.
"""

from __future__ import annotations

import base64
import binascii
import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

SALT_SIZE = 16
NONCE_SIZE = 12
KEY_SIZE = 32
TAG_SIZE = 16
HEADER_SIZE = SALT_SIZE + NONCE_SIZE

ENCRYPTION_CONTEXT = b"globalsiteselector-credential-v1"


class CredentialCryptoError(Exception):
    """Raised when a credential ciphertext cannot be decrypted."""


class CredentialCrypto:
    """AES-256-GCM encryption keyed from the federation's shared secret."""

    __slots__ = ("_secret_bytes",)

    def __init__(self, secret: str | bytes) -> None:
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not secret:
            raise ValueError("Shared secret must not be empty")
        self._secret_bytes = secret

    def _derive_key(self, salt: bytes) -> bytes:
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=KEY_SIZE,
            salt=salt,
            info=ENCRYPTION_CONTEXT,
        )
        return hkdf.derive(self._secret_bytes)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt *plaintext* and return the transport encoded ciphertext."""
        salt = secrets.token_bytes(SALT_SIZE)
        nonce = secrets.token_bytes(NONCE_SIZE)
        key = self._derive_key(salt)
        ciphertext = AESGCM(key).encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.urlsafe_b64encode(salt + nonce + ciphertext).decode("ascii")

    def decrypt(self, token: str) -> str:
        """Decrypt a value produced by :meth:`encrypt`.

        Raises:
            CredentialCryptoError: If the value is malformed, was encrypted
                under another secret or has been tampered with.
        """
        try:
            data = base64.urlsafe_b64decode(token.encode("ascii"))
        except (binascii.Error, UnicodeEncodeError, ValueError) as exc:
            raise CredentialCryptoError("Ciphertext is not valid base64") from exc

        if len(data) < HEADER_SIZE + TAG_SIZE:
            raise CredentialCryptoError("Ciphertext too short")

        salt = data[:SALT_SIZE]
        nonce = data[SALT_SIZE:HEADER_SIZE]
        key = self._derive_key(salt)
        try:
            plaintext = AESGCM(key).decrypt(nonce, data[HEADER_SIZE:], None)
        except InvalidTag as exc:
            # Don't leak why decryption failed
            raise CredentialCryptoError("Decryption failed") from exc
        return plaintext.decode("utf-8")


__all__ = ["CredentialCrypto", "CredentialCryptoError"]
