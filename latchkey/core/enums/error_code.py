"""Domain-level error codes (machine-readable).

Error codes follow the ENTITY_ACTION_REASON naming convention and travel
inside ``DomainError`` values returned through ``Result`` types.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Session token errors
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"

    # Verification token errors
    VERIFICATION_TOKEN_NOT_FOUND = "verification_token_not_found"
    VERIFICATION_TOKEN_EXPIRED = "verification_token_expired"
    VERIFICATION_TOKEN_USED = "verification_token_used"

    # Encryption errors
    ENCRYPTION_KEY_INVALID = "encryption_key_invalid"
    DECRYPTION_FAILED = "decryption_failed"

    # Upstream service errors
    CAPTCHA_UNAVAILABLE = "captcha_unavailable"
    EMAIL_DELIVERY_FAILED = "email_delivery_failed"
