"""AES-256-GCM secret codec for TOTP secrets at rest.

Security Properties:
    - Confidentiality: Only holder of the master key can decrypt
    - Integrity: Tampering is detected via the GCM authentication tag
    - Uniqueness: Fresh random 96-bit nonce per encryption

Format:
    Each encryption yields three base64 strings: ciphertext, init vector and
    the 16-byte authentication tag split off the end of the AESGCM output.
"""

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from latchkey.core.constants import AES_GCM_IV_LENGTH, AES_GCM_TAG_LENGTH, AES_KEY_LENGTH
from latchkey.core.enums import ErrorCode
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.protocols.secret_codec_protocol import (
    DecryptionError,
    EncryptionError,
    EncryptionKeyError,
)
from latchkey.domain.value_objects import SecretBundle


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


class AesGcmSecretCodec:
    """AES-256-GCM codec producing ``SecretBundle`` values.

    Usage:
        >>> match AesGcmSecretCodec.from_base64_key(settings.totp_encryption_key):
        ...     case Success(value=codec):
        ...         bundle = codec.encrypt("JBSWY3DPEHPK3PXP")
        ...     case Failure(error=error):
        ...         raise RuntimeError(error.message)
    """

    def __init__(self, aesgcm: AESGCM) -> None:
        """Initialize with a pre-validated AESGCM instance.

        Use ``create()`` or ``from_base64_key()`` instead of direct construction.
        """
        self._aesgcm = aesgcm

    @classmethod
    def create(cls, key: bytes) -> Result["AesGcmSecretCodec", EncryptionKeyError]:
        """Create a codec from a raw 32-byte key.

        Returns:
            Success(AesGcmSecretCodec) if key is valid.
            Failure(EncryptionKeyError) if key has the wrong length.
        """
        if len(key) != AES_KEY_LENGTH:
            return Failure(
                error=EncryptionKeyError(
                    code=ErrorCode.ENCRYPTION_KEY_INVALID,
                    message=(
                        f"Encryption key must be exactly {AES_KEY_LENGTH} bytes, "
                        f"got {len(key)} bytes"
                    ),
                    details={
                        "expected_length": str(AES_KEY_LENGTH),
                        "actual_length": str(len(key)),
                    },
                )
            )
        return Success(value=cls(AESGCM(key)))

    @classmethod
    def from_base64_key(
        cls, encoded_key: str
    ) -> Result["AesGcmSecretCodec", EncryptionKeyError]:
        """Create a codec from a base64-encoded key (as held in settings)."""
        try:
            key = base64.b64decode(encoded_key, validate=True)
        except binascii.Error:
            return Failure(
                error=EncryptionKeyError(
                    code=ErrorCode.ENCRYPTION_KEY_INVALID,
                    message="Encryption key is not valid base64",
                )
            )
        return cls.create(key)

    def encrypt(self, plaintext: str) -> Result[SecretBundle, EncryptionError]:
        """Encrypt a secret with a fresh random nonce.

        Returns:
            Success(SecretBundle) with base64 ciphertext, init vector and tag.
        """
        iv = os.urandom(AES_GCM_IV_LENGTH)
        sealed = self._aesgcm.encrypt(iv, plaintext.encode("utf-8"), associated_data=None)
        ciphertext, tag = sealed[:-AES_GCM_TAG_LENGTH], sealed[-AES_GCM_TAG_LENGTH:]
        return Success(
            value=SecretBundle(
                ciphertext=_b64encode(ciphertext),
                init_vector=_b64encode(iv),
                auth_tag=_b64encode(tag),
            )
        )

    def decrypt(self, bundle: SecretBundle) -> Result[str, EncryptionError]:
        """Decrypt a bundle produced by ``encrypt``.

        Returns:
            Success(str) with the original secret.
            Failure(DecryptionError) for malformed fields, wrong key or tampering.
        """
        try:
            ciphertext = base64.b64decode(bundle.ciphertext, validate=True)
            iv = base64.b64decode(bundle.init_vector, validate=True)
            tag = base64.b64decode(bundle.auth_tag, validate=True)
        except binascii.Error:
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Secret bundle is not valid base64",
                )
            )

        if len(iv) != AES_GCM_IV_LENGTH or len(tag) != AES_GCM_TAG_LENGTH:
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Secret bundle has a malformed nonce or tag",
                    details={"iv_length": str(len(iv)), "tag_length": str(len(tag))},
                )
            )

        try:
            plaintext = self._aesgcm.decrypt(iv, ciphertext + tag, associated_data=None)
        except InvalidTag:
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Failed to decrypt secret: invalid key or tampered data",
                )
            )

        try:
            return Success(value=plaintext.decode("utf-8"))
        except UnicodeDecodeError:
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Decrypted secret is not valid UTF-8",
                )
            )
