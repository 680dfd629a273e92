import smtplib
from unittest.mock import patch

import pytest

from internstud.core.config import Settings
from internstud.services.email_service import ContactMailer, MailDeliveryError, build_contact_message

VALID = {"name": "Ana", "email": "ana@example.com", "message": "Salut!"}


def test_contact_validation_errors(client, mailer):
    response = client.post("/api/contact", json={"name": " ", "email": "not-an-email", "message": ""})

    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"name", "email", "message"}
    mailer.send_contact.assert_not_called()


def test_contact_sends_message(client, mailer):
    response = client.post("/api/contact", json=VALID)

    assert response.status_code == 200
    assert response.json()["message"] == "Email trimis cu succes"
    mailer.send_contact.assert_called_once_with("Ana", "ana@example.com", "Salut!")


def test_contact_ignores_client_recipients(client, mailer):
    response = client.post("/api/contact", json={**VALID, "to": ["victim@example.org"]})

    assert response.status_code == 200
    mailer.send_contact.assert_called_once_with("Ana", "ana@example.com", "Salut!")


def test_contact_delivery_failure(client, mailer):
    mailer.send_contact.side_effect = MailDeliveryError("relay down")

    response = client.post("/api/contact", json=VALID)

    assert response.status_code == 500
    assert response.json()["detail"] == "Eroare la trimiterea email-ului"


@pytest.fixture
def settings():
    return Settings(
        smtp_host="smtp.example.com",
        smtp_port=587,
        email_user="site@example.com",
        email_password="secret",
        email_user1="office@example.com"
    )


def test_mailer_uses_starttls_and_default_recipients(settings):
    with patch("internstud.services.email_service.smtplib.SMTP") as smtp:
        server = smtp.return_value.__enter__.return_value

        recipients = ContactMailer(settings).send_contact("Ana", "ana@example.com", "Salut!")

    assert recipients == ["site@example.com", "office@example.com"]
    smtp.assert_called_once_with("smtp.example.com", 587, timeout=30)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("site@example.com", "secret")
    assert server.sendmail.call_args.args[:2] == ("site@example.com", recipients)


def test_mailer_wraps_smtp_errors(settings):
    with patch("internstud.services.email_service.smtplib.SMTP") as smtp:
        smtp.return_value.__enter__.return_value.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad")

        with pytest.raises(MailDeliveryError):
            ContactMailer(settings).send_contact("Ana", "ana@example.com", "Salut!")


def test_mailer_without_recipients():
    with pytest.raises(MailDeliveryError):
        ContactMailer(Settings(email_user="", email_user1="")).send_contact("Ana", "a@example.com", "x")


def test_contact_message_escapes_html():
    msg = build_contact_message("site@example.com", ["a@example.com"], "<b>Ana</b>", "ana@example.com", "1 < 2")

    assert msg["Subject"] == "Mesaj nou de la <b>Ana</b>"
    assert msg["Reply-To"] == "ana@example.com"
    html_part = msg.get_payload()[1].get_payload(decode=True).decode("utf-8")
    assert "&lt;b&gt;Ana&lt;/b&gt;" in html_part
    assert "1 &lt; 2" in html_part
