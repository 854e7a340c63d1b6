"""Secret codec protocol for TOTP secrets at rest.

Infrastructure implements this with AES-256-GCM.
"""

from dataclasses import dataclass
from typing import Protocol

from latchkey.core.errors import DomainError
from latchkey.core.result import Result
from latchkey.domain.value_objects import SecretBundle


# =============================================================================
# Encryption Error Types (Domain Layer)
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class EncryptionError(DomainError):
    """Base encryption error.

    Does NOT inherit from Exception - used in Result types.
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class EncryptionKeyError(EncryptionError):
    """Master key is malformed (wrong encoding or length)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class DecryptionError(EncryptionError):
    """Decryption failure.

    Occurs when:
    - Wrong encryption key
    - Ciphertext, nonce or tag has been tampered with
    - A bundle field is not valid base64 or has the wrong length
    """

    pass


# =============================================================================
# Secret Codec Protocol (Port)
# =============================================================================


class SecretCodecProtocol(Protocol):
    """Authenticated encryption of short secrets."""

    def encrypt(self, plaintext: str) -> Result[SecretBundle, EncryptionError]:
        """Encrypt a secret with a fresh random nonce."""
        ...

    def decrypt(self, bundle: SecretBundle) -> Result[str, EncryptionError]:
        """Decrypt a bundle; never returns partial plaintext on failure."""
        ...
