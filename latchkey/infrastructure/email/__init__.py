"""Email service implementations.

- StubEmailService: logs messages (development/testing)
- SmtpEmailService: STARTTLS SMTP delivery (production)
"""

from latchkey.infrastructure.email.smtp_email_service import SmtpEmailService
from latchkey.infrastructure.email.stub_email_service import StubEmailService

__all__ = ["SmtpEmailService", "StubEmailService"]
