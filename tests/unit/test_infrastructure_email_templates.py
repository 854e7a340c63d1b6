"""Unit tests for account email templates."""

import pytest

from latchkey.infrastructure.email.templates import (
    render_account_deletion_email,
    render_email_change_email,
    render_email_removed_notification,
    render_password_reset_email,
    render_verification_email,
)

URL = "http://localhost:5173/verify-email?token=" + "ab" * 32


@pytest.mark.unit
class TestEmailTemplates:
    def test_verification_email_contains_link_twice(self):
        email = render_verification_email("Latchkey", "ada_lovelace", URL)

        assert email.subject == "Please confirm your email address for Latchkey"
        assert "Welcome to Latchkey, ada_lovelace" in email.html
        assert email.html.count(URL) == 2

    def test_username_is_escaped(self):
        email = render_password_reset_email("Latchkey", "<script>", URL)

        assert "<script>" not in email.html
        assert "&lt;script&gt;" in email.html

    def test_url_is_attribute_escaped(self):
        email = render_email_change_email("Latchkey", "ada", 'http://x/"onclick="a')

        assert 'href="http://x/&quot;onclick=&quot;a"' in email.html

    def test_removed_notification_has_contact_and_no_link(self):
        email = render_email_removed_notification("Latchkey", "no-reply@latchkey.test")

        assert email.subject == "Your email address was removed from Latchkey"
        assert "no-reply@latchkey.test" in email.html
        assert "href" not in email.html

    def test_account_deletion_subject(self):
        email = render_account_deletion_email("Latchkey", "ada", URL)

        assert email.subject == "Confirm account deletion for Latchkey"
        assert "Confirm account deletion" in email.html
