"""Domain protocols (ports).

Infrastructure adapters satisfy these structurally; none of them inherit
from the protocols.
"""

from latchkey.domain.protocols.captcha_protocol import CaptchaVerifierProtocol
from latchkey.domain.protocols.email_protocol import EmailDeliveryError, EmailProtocol
from latchkey.domain.protocols.logger_protocol import LoggerProtocol
from latchkey.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from latchkey.domain.protocols.secret_codec_protocol import (
    DecryptionError,
    EncryptionError,
    EncryptionKeyError,
    SecretCodecProtocol,
)
from latchkey.domain.protocols.session_token_protocol import SessionTokenProtocol
from latchkey.domain.protocols.totp_protocol import TotpProtocol
from latchkey.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol
from latchkey.domain.protocols.user_repository import UserRepository
from latchkey.domain.protocols.verification_token_repository import (
    VerificationTokenRepository,
)
from latchkey.domain.protocols.verification_token_service_protocol import (
    VerificationTokenServiceProtocol,
)

__all__ = [
    "CaptchaVerifierProtocol",
    "DecryptionError",
    "EmailDeliveryError",
    "EmailProtocol",
    "EncryptionError",
    "EncryptionKeyError",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "SecretCodecProtocol",
    "SessionTokenProtocol",
    "TotpProtocol",
    "UnitOfWorkProtocol",
    "UserRepository",
    "VerificationTokenRepository",
    "VerificationTokenServiceProtocol",
]
