"""AES-256 helpers for encrypting sensitive customer columns."""

from __future__ import annotations

import base64
import hashlib
import os
from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from credit_app.core.errors import ConfigurationError

NONCE_SIZE = 12
KEY_SIZE = 32


@dataclass
class CryptoService:
    """Encrypts and decrypts text using AES-256-GCM."""

    key: bytes

    @classmethod
    def from_base64_key(cls, key_b64: str) -> "CryptoService":
        key = base64.urlsafe_b64decode(key_b64.encode("utf-8"))
        if len(key) != KEY_SIZE:
            raise ConfigurationError("Encryption key must decode to 32 bytes for AES-256.")
        return cls(key=key)

    @staticmethod
    def generate_base64_key() -> str:
        """Generate a base64-encoded 32-byte key."""
        return base64.urlsafe_b64encode(os.urandom(KEY_SIZE)).decode("utf-8")

    def encrypt_text(self, plain_text: str) -> bytes:
        """Encrypt UTF-8 text and return nonce+ciphertext bytes."""
        nonce = os.urandom(NONCE_SIZE)
        cipher_text = AESGCM(self.key).encrypt(nonce, plain_text.encode("utf-8"), None)
        return nonce + cipher_text

    def decrypt_text(self, encrypted: bytes) -> str:
        """Decrypt nonce+ciphertext bytes into UTF-8 text."""
        nonce = encrypted[:NONCE_SIZE]
        cipher_text = encrypted[NONCE_SIZE:]
        plain = AESGCM(self.key).decrypt(nonce, cipher_text, None)
        return plain.decode("utf-8")


def hash_lookup_value(value: str) -> str:
    """Deterministic digest used to index encrypted columns."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def mask_cpf(cpf: str) -> str:
    """Mask a CPF like 28475934625 => 284.***.***-25."""
    digits = "".join(ch for ch in cpf if ch.isdigit())
    if len(digits) != 11:
        return "*" * len(digits)
    return f"{digits[:3]}.***.***-{digits[9:]}"
