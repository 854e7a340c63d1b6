"""TOTP service (adapter) using pyotp and segno.

Secrets are RFC 4648 base32, codes are 6 digits with a 30-second step.
Verification accepts one step of clock skew on either side.
"""

import pyotp
import segno

from latchkey.core.constants import QR_CODE_SCALE, TOTP_VALID_WINDOW


class TotpService:
    """TOTP secret generation, provisioning and verification."""

    def __init__(self, valid_window: int = TOTP_VALID_WINDOW) -> None:
        self._valid_window = valid_window

    def generate_secret(self) -> str:
        """Generate a random 32-character base32 secret."""
        return pyotp.random_base32()

    def build_provisioning_uri(
        self, secret: str, account_label: str, issuer_name: str
    ) -> str:
        """Build the ``otpauth://totp/...`` URI scanned by authenticator apps."""
        return pyotp.TOTP(secret).provisioning_uri(
            name=account_label, issuer_name=issuer_name
        )

    def build_qr_code_image(self, provisioning_uri: str) -> str:
        """Render the provisioning URI as a ``data:image/png;base64,...`` URI."""
        return segno.make(provisioning_uri, error="m").png_data_uri(scale=QR_CODE_SCALE)

    def verify_code(self, secret: str, code: str) -> bool:
        """Check ``code`` against the current time step (±valid_window)."""
        if not code or not code.isdigit():
            return False
        try:
            return pyotp.TOTP(secret).verify(code, valid_window=self._valid_window)
        except ValueError:
            # Not a base32 secret
            return False
