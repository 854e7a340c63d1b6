"""Stub email service for development and testing.

Logs each message instead of sending it. Links are logged in full so a
developer can follow them locally.
"""

from latchkey.core.result import Result, Success
from latchkey.domain.protocols import LoggerProtocol
from latchkey.domain.protocols.email_protocol import EmailDeliveryError
from latchkey.infrastructure.email.templated_email_service import TemplatedEmailService
from latchkey.infrastructure.email.templates import RenderedEmail


class StubEmailService(TemplatedEmailService):
    """Email adapter that only logs."""

    def __init__(self, *, app_name: str, sender: str, logger: LoggerProtocol) -> None:
        super().__init__(app_name=app_name, sender=sender)
        self._logger = logger
        self.sent: list[tuple[str, RenderedEmail]] = []

    async def _deliver(
        self, to_email: str, rendered: RenderedEmail, *, kind: str
    ) -> Result[None, EmailDeliveryError]:
        self.sent.append((to_email, rendered))
        self._logger.info(
            "stub_email_sent",
            kind=kind,
            to_email=to_email,
            subject=rendered.subject,
            body=rendered.html,
        )
        return Success(value=None)
