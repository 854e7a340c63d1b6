"""SMTP email service.

Sends multipart (plain + HTML) messages over STARTTLS. ``smtplib`` blocks,
so each delivery runs in a worker thread with a bounded socket timeout.
"""

import asyncio
import re
import smtplib
from email.message import EmailMessage

from latchkey.core.constants import SMTP_TIMEOUT_DEFAULT
from latchkey.core.enums import ErrorCode
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.protocols import LoggerProtocol
from latchkey.domain.protocols.email_protocol import EmailDeliveryError
from latchkey.infrastructure.email.templated_email_service import TemplatedEmailService
from latchkey.infrastructure.email.templates import RenderedEmail

_TAG_PATTERN = re.compile(r"<[^>]+>")


class SmtpEmailService(TemplatedEmailService):
    """Email adapter backed by an SMTP relay."""

    def __init__(
        self,
        *,
        app_name: str,
        sender: str,
        host: str,
        port: int,
        password: str | None,
        logger: LoggerProtocol,
        timeout: float = SMTP_TIMEOUT_DEFAULT,
    ) -> None:
        super().__init__(app_name=app_name, sender=sender)
        self._host = host
        self._port = port
        self._password = password
        self._timeout = timeout
        self._logger = logger

    async def _deliver(
        self, to_email: str, rendered: RenderedEmail, *, kind: str
    ) -> Result[None, EmailDeliveryError]:
        message = self._build_message(to_email, rendered)
        try:
            await asyncio.to_thread(self._send, message)
        except (smtplib.SMTPException, OSError) as e:
            self._logger.error(
                "smtp_delivery_failed", error=e, kind=kind, to_email=to_email
            )
            return Failure(
                error=EmailDeliveryError(
                    code=ErrorCode.EMAIL_DELIVERY_FAILED,
                    message="Email could not be sent",
                    service="smtp",
                )
            )

        self._logger.info("email_sent", kind=kind, to_email=to_email)
        return Success(value=None)

    def _build_message(self, to_email: str, rendered: RenderedEmail) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = rendered.subject
        message["From"] = self._sender
        message["To"] = to_email
        message.set_content(_TAG_PATTERN.sub("", rendered.html))
        message.add_alternative(rendered.html, subtype="html")
        return message

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            server.starttls()
            if self._password:
                server.login(self._sender, self._password)
            server.send_message(message)
