# amc_core/mailing/tests/test_send_html_mail.py
import pytest
from django.core import mail
from django.core.mail import get_connection as django_get_connection
from django.core.mail.backends.smtp import EmailBackend as SmtpBackend

from amc_core.mailing.services import send_html_mail

pytestmark = pytest.mark.django_db


@pytest.fixture
def smtp_kwargs(monkeypatch):
    """Capture the SMTP connection options; deliver to the locmem outbox instead."""
    seen = {}

    def fake_get_connection(**kwargs):
        seen.update(kwargs)
        backend = SmtpBackend(**kwargs)
        seen["backend"] = backend
        return django_get_connection("django.core.mail.backends.locmem.EmailBackend")

    monkeypatch.setattr("amc_core.mailing.services.get_connection", fake_get_connection)
    return seen


def test_plain_port_uses_starttls(mail_setup, smtp_kwargs):
    send_html_mail(setup=mail_setup, to="client@example.com", subject="Hi", html="<p>Hello</p>")

    backend = smtp_kwargs["backend"]
    assert backend.host == "smtp.example.com"
    assert backend.port == 587
    assert backend.username == "mailer"
    assert backend.use_tls is True
    assert backend.use_ssl is False
    assert len(mail.outbox) == 1
    assert mail.outbox[0].body == "Hello"


def test_ssl_port_uses_implicit_tls_only(mail_setup, smtp_kwargs):
    mail_setup.enable_ssl = True
    mail_setup.smtp_port = 465

    send_html_mail(setup=mail_setup, to="client@example.com", subject="Hi", html="<p>Hello</p>")

    backend = smtp_kwargs["backend"]
    assert backend.use_ssl is True
    assert backend.use_tls is False
