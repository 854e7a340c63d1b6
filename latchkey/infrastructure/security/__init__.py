"""Security adapters: password hashing, session tokens, verification tokens,
TOTP and the secret codec."""

from latchkey.infrastructure.security.aes_gcm_secret_codec import AesGcmSecretCodec
from latchkey.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from latchkey.infrastructure.security.jwt_session_token_service import (
    JWTSessionTokenService,
)
from latchkey.infrastructure.security.totp_service import TotpService
from latchkey.infrastructure.security.verification_token_service import (
    VerificationTokenService,
)

__all__ = [
    "AesGcmSecretCodec",
    "BcryptPasswordService",
    "JWTSessionTokenService",
    "TotpService",
    "VerificationTokenService",
]
