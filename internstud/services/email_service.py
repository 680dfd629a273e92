"""
Email Service - contact form delivery through the configured SMTP relay.

Messages go out as multipart text + HTML from the site mailbox
(EMAIL_USER) to the configured contact inboxes. Callers cannot choose
the recipients.
"""

import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List

from internstud.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

SENDER_NAME = "InternStud Contact"


class MailDeliveryError(Exception):
    """The SMTP relay rejected or could not deliver the message."""


def build_contact_message(sender: str, recipients: List[str], name: str, email: str, message: str) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = f"Mesaj nou de la {name}"
    msg["From"] = f'"{SENDER_NAME}" <{sender}>'
    msg["To"] = ", ".join(recipients)
    msg["Reply-To"] = email

    text_body = f"Nume: {name}\nEmail: {email}\n\nMesaj:\n{message}\n"
    html_body = (
        "<h3>Mesaj nou de la formularul de contact</h3>"
        f"<p><strong>Nume:</strong> {html.escape(name)}</p>"
        f"<p><strong>Email:</strong> {html.escape(email)}</p>"
        "<p><strong>Mesaj:</strong></p>"
        f"<p>{html.escape(message).replace(chr(10), '<br>')}</p>"
    )
    msg.attach(MIMEText(text_body, "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    return msg


class ContactMailer:
    """
    Sends contact form submissions. One SMTP session per message.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def send_contact(self, name: str, email: str, message: str) -> List[str]:
        """
        Deliver a contact message. Returns the recipient list.
        Raises MailDeliveryError on any SMTP failure.
        """
        recipients = self.settings.contact_recipients
        if not recipients:
            raise MailDeliveryError("No contact recipients configured")

        msg = build_contact_message(self.settings.email_user, recipients, name, email, message)

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=30) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.email_user and self.settings.email_password:
                    server.login(self.settings.email_user, self.settings.email_password)
                server.sendmail(self.settings.email_user, recipients, msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email delivery failed: %s", e)
            raise MailDeliveryError(str(e)) from e

        logger.info("Contact message from %s sent to %s", email, recipients)
        return recipients

    def verify_connection(self) -> bool:
        """Check the relay accepts our credentials (used by /health)."""
        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=10) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.email_user and self.settings.email_password:
                    server.login(self.settings.email_user, self.settings.email_password)
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("SMTP connection failed: %s", e)
            return False


def get_mailer() -> ContactMailer:
    """Dependency for FastAPI route injection."""
    return ContactMailer(get_settings())
