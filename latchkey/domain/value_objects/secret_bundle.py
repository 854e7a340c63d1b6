"""Encrypted TOTP secret as stored at rest."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class SecretBundle:
    """AES-GCM ciphertext bundle.

    All three parts are base64 text so they survive any text column.

    Attributes:
        ciphertext: Encrypted secret without the tag.
        init_vector: 12-byte nonce used for this encryption.
        auth_tag: 16-byte GCM authentication tag.
    """

    ciphertext: str
    init_vector: str
    auth_tag: str
