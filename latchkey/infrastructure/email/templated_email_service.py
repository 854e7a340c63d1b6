"""Shared rendering for email adapters.

Subclasses only implement ``_deliver``; rendering and the EmailProtocol
surface live here.
"""

from latchkey.core.result import Result
from latchkey.domain.protocols.email_protocol import EmailDeliveryError
from latchkey.infrastructure.email.templates import (
    RenderedEmail,
    render_account_deletion_email,
    render_email_change_email,
    render_email_removed_notification,
    render_password_reset_email,
    render_verification_email,
)


class TemplatedEmailService:
    """Base class implementing EmailProtocol on top of ``_deliver``.

    Attributes:
        _app_name: Display name used in subjects and bodies.
        _sender: From address (also the contact address in notices).
    """

    def __init__(self, *, app_name: str, sender: str) -> None:
        self._app_name = app_name
        self._sender = sender

    async def send_verification_email(
        self, to_email: str, username: str, verification_url: str
    ) -> Result[None, EmailDeliveryError]:
        rendered = render_verification_email(self._app_name, username, verification_url)
        return await self._deliver(to_email, rendered, kind="account_verification")

    async def send_email_change_email(
        self, to_email: str, username: str, confirm_url: str
    ) -> Result[None, EmailDeliveryError]:
        rendered = render_email_change_email(self._app_name, username, confirm_url)
        return await self._deliver(to_email, rendered, kind="email_change")

    async def send_email_removed_notification(
        self, to_email: str, username: str
    ) -> Result[None, EmailDeliveryError]:
        rendered = render_email_removed_notification(self._app_name, self._sender)
        return await self._deliver(to_email, rendered, kind="email_removed")

    async def send_password_reset_email(
        self, to_email: str, username: str, reset_url: str
    ) -> Result[None, EmailDeliveryError]:
        rendered = render_password_reset_email(self._app_name, username, reset_url)
        return await self._deliver(to_email, rendered, kind="password_reset")

    async def send_account_deletion_email(
        self, to_email: str, username: str, delete_url: str
    ) -> Result[None, EmailDeliveryError]:
        rendered = render_account_deletion_email(self._app_name, username, delete_url)
        return await self._deliver(to_email, rendered, kind="account_deletion")

    async def _deliver(
        self, to_email: str, rendered: RenderedEmail, *, kind: str
    ) -> Result[None, EmailDeliveryError]:
        raise NotImplementedError
