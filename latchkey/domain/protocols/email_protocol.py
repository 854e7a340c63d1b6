"""EmailProtocol - port for outbound account emails.

Infrastructure provides StubEmailService (logs) and SmtpEmailService.
Every method returns a Result so callers can report a delivery failure
instead of claiming the message went out.
"""

from dataclasses import dataclass
from typing import Protocol

from latchkey.core.errors import UpstreamServiceError
from latchkey.core.result import Result


@dataclass(frozen=True, slots=True, kw_only=True)
class EmailDeliveryError(UpstreamServiceError):
    """Mail server rejected or never received the message."""

    pass


class EmailProtocol(Protocol):
    """Email service protocol (port)."""

    async def send_verification_email(
        self, to_email: str, username: str, verification_url: str
    ) -> Result[None, EmailDeliveryError]:
        """Send the account verification link."""
        ...

    async def send_email_change_email(
        self, to_email: str, username: str, confirm_url: str
    ) -> Result[None, EmailDeliveryError]:
        """Send the email-change confirmation link to the new address."""
        ...

    async def send_email_removed_notification(
        self, to_email: str, username: str
    ) -> Result[None, EmailDeliveryError]:
        """Tell the old address it is no longer attached to the account."""
        ...

    async def send_password_reset_email(
        self, to_email: str, username: str, reset_url: str
    ) -> Result[None, EmailDeliveryError]:
        """Send the password reset link."""
        ...

    async def send_account_deletion_email(
        self, to_email: str, username: str, delete_url: str
    ) -> Result[None, EmailDeliveryError]:
        """Send the account deletion confirmation link."""
        ...
