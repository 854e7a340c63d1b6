"""HTML templates for account emails.

Every user-supplied value is HTML-escaped before interpolation.
"""

from dataclasses import dataclass
from html import escape


@dataclass(frozen=True, slots=True, kw_only=True)
class RenderedEmail:
    """Subject and HTML body ready for delivery."""

    subject: str
    html: str


_LINK_FALLBACK = """
      <p>If the link doesn't work, copy and paste this URL into your browser:</p>
      <p>{url}</p>"""

_IGNORE_NOTICE = """
      <p>If you did not request this, you can safely ignore this email.</p>"""


def _page(heading: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n<html>\n  <body>\n"
        f"    <h2>{heading}</h2>{body}\n"
        "  </body>\n</html>\n"
    )


def _link_block(url: str, label: str) -> str:
    safe_url = escape(url, quote=True)
    return f'\n      <p><a href="{safe_url}">{label}</a></p>' + _LINK_FALLBACK.format(
        url=safe_url
    )


def render_verification_email(
    app_name: str, username: str, verification_url: str
) -> RenderedEmail:
    body = (
        "\n      <p>Thank you for registering. Please verify your email address "
        "to complete your registration by clicking this link:</p>"
        + _link_block(verification_url, "Verify your email address")
        + _IGNORE_NOTICE
    )
    return RenderedEmail(
        subject=f"Please confirm your email address for {app_name}",
        html=_page(f"Welcome to {escape(app_name)}, {escape(username)}", body),
    )


def render_email_change_email(
    app_name: str, username: str, confirm_url: str
) -> RenderedEmail:
    body = (
        f"\n      <p>Hello {escape(username)},</p>"
        "\n      <p>We received a request to change the email address associated "
        "with your account. To confirm this change, please click this link:</p>"
        + _link_block(confirm_url, "Confirm email change")
        + _IGNORE_NOTICE
    )
    return RenderedEmail(
        subject=f"Confirm your email address change for {app_name}",
        html=_page("Email change requested", body),
    )


def render_email_removed_notification(
    app_name: str, contact_email: str
) -> RenderedEmail:
    body = (
        "\n      <p>Hello,</p>"
        "\n      <p>You're receiving this message because this email address was "
        f"recently removed from an account with {escape(app_name)}.</p>"
        "\n      <p>If you made this change, no further action is needed.</p>"
        "\n      <p>If you did <em>not</em> make this change, your account may have "
        "been updated without your knowledge. Please contact "
        f"{escape(contact_email)}.</p>"
    )
    return RenderedEmail(
        subject=f"Your email address was removed from {app_name}",
        html=_page("Email address removed", body),
    )


def render_password_reset_email(
    app_name: str, username: str, reset_url: str
) -> RenderedEmail:
    body = (
        f"\n      <p>Hello {escape(username)},</p>"
        "\n      <p>We received a request to reset the password for your account "
        f"with {escape(app_name)}. You can reset your password by clicking this "
        "link:</p>"
        + _link_block(reset_url, "Reset your password")
        + _IGNORE_NOTICE
    )
    return RenderedEmail(
        subject=f"Reset your password for {app_name}",
        html=_page("Password reset requested", body),
    )


def render_account_deletion_email(
    app_name: str, username: str, delete_url: str
) -> RenderedEmail:
    body = (
        f"\n      <p>Hello {escape(username)},</p>"
        "\n      <p>We received a request to delete your account with "
        f"{escape(app_name)}. If you wish to proceed with the account deletion, "
        "please click this link:</p>"
        + _link_block(delete_url, "Confirm account deletion")
        + "\n      <p>We thank you for using the app and wish you the best.</p>"
        + _IGNORE_NOTICE
    )
    return RenderedEmail(
        subject=f"Confirm account deletion for {app_name}",
        html=_page("Account deletion requested", body),
    )
