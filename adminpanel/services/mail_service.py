"""Mail relay client built from the stored SMTP settings."""

import logging
from email.message import EmailMessage
from email.utils import formataddr
from typing import Any

import aiosmtplib

logger = logging.getLogger(__name__)

DEFAULT_FROM_NAME = "Admin Panel"
TEST_EMAIL_SUBJECT = "Test Email"
TEST_EMAIL_BODY = "This is a test email from your SMTP configuration."

REQUIRED_SMTP_FIELDS = ("host", "port", "user", "pass")


def is_smtp_config_complete(smtp: dict[str, Any] | None) -> bool:
    """Check that host, port, user and password are all set."""
    if not smtp:
        return False
    return all(smtp.get(field) for field in REQUIRED_SMTP_FIELDS)


def is_secure(encryption: Any) -> bool:
    """Map the stored encryption setting to implicit TLS (SSL only)."""
    return str(encryption or "").upper() == "SSL"


class SmtpRelay:
    """Short-lived SMTP client configuration used for a single send."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        secure: bool = False,
        start_tls: bool | None = None,
        timeout: float = 30,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.secure = secure
        self.start_tls = start_tls
        self.timeout = timeout

    @classmethod
    def from_config(cls, smtp: dict[str, Any]) -> "SmtpRelay":
        """Build a relay from an SMTP settings section.

        SSL means implicit TLS on connect. TLS forces STARTTLS and "none"
        disables it; anything else leaves STARTTLS opportunistic.
        """
        secure = is_secure(smtp.get("encryption"))
        encryption = str(smtp.get("encryption") or "").upper()

        if secure:
            start_tls = False
        elif encryption == "TLS":
            start_tls = True
        elif encryption == "NONE":
            start_tls = False
        else:
            start_tls = None

        return cls(
            host=smtp["host"],
            port=int(smtp["port"]),
            username=smtp["user"],
            password=smtp["pass"],
            secure=secure,
            start_tls=start_tls,
        )

    async def send(self, sender: str, recipient: str, subject: str, body: str) -> None:
        """Send one plain-text message."""
        msg = EmailMessage()
        msg["From"] = sender
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.set_content(body)

        await aiosmtplib.send(
            msg,
            hostname=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            use_tls=self.secure,
            start_tls=self.start_tls,
            timeout=self.timeout,
        )


class MailService:
    """Service for sending mail through the configured SMTP relay."""

    def build_sender(self, smtp: dict[str, Any]) -> str:
        """Get the From header for messages sent with these SMTP settings."""
        from_name = smtp.get("fromName") or DEFAULT_FROM_NAME
        from_email = smtp.get("fromEmail") or smtp.get("user")
        return formataddr((from_name, from_email))

    async def send_test_email(self, smtp: dict[str, Any], recipient: str) -> None:
        """Send the fixed test message to ``recipient``.

        Relay errors (connection, authentication, send) propagate unchanged.
        """
        relay = SmtpRelay.from_config(smtp)
        await relay.send(
            sender=self.build_sender(smtp),
            recipient=recipient,
            subject=TEST_EMAIL_SUBJECT,
            body=TEST_EMAIL_BODY,
        )
        logger.info(f"Test email sent via {relay.host}:{relay.port} to {recipient}")


# Singleton instance
_mail_service: MailService | None = None


def get_mail_service() -> MailService:
    """Get the mail service singleton."""
    global _mail_service
    if _mail_service is None:
        _mail_service = MailService()
    return _mail_service
