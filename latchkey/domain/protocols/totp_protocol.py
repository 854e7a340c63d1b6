"""TOTP protocol (port)."""

from typing import Protocol


class TotpProtocol(Protocol):
    """Time-based one-time password primitives.

    Secrets passed in and out are plaintext base32; callers encrypt them with
    the secret codec before they reach storage.
    """

    def generate_secret(self) -> str:
        """Generate a new random base32 secret."""
        ...

    def build_provisioning_uri(
        self, secret: str, account_label: str, issuer_name: str
    ) -> str:
        """Build an ``otpauth://`` URI for authenticator apps."""
        ...

    def build_qr_code_image(self, provisioning_uri: str) -> str:
        """Render the provisioning URI as a PNG data URI."""
        ...

    def verify_code(self, secret: str, code: str) -> bool:
        """Verify a code, tolerating one 30-second step of clock skew."""
        ...
