# amc_core/mailing/services.py
from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.db import transaction
from django.utils.html import strip_tags

from amc_core.common.api.exceptions import ServiceNotConfigured
from amc_core.mailing.models import MailSetup

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "smtp_host",
    "smtp_port",
    "smtp_user",
    "smtp_password",
    "enable_ssl",
    "sender_name",
    "sender_email",
)


class MailSetupService:
    @staticmethod
    def get() -> MailSetup | None:
        return MailSetup.objects.order_by("id").first()

    @staticmethod
    def require() -> MailSetup:
        setup = MailSetupService.get()
        if setup is None:
            raise ServiceNotConfigured("Email configuration not found. Please configure SMTP settings first.")
        return setup

    @staticmethod
    @transaction.atomic
    def upsert(**fields: Any) -> MailSetup:
        """
        Create the single SMTP row or overwrite the provided fields.
        An omitted or blank smtp_password keeps the stored one.
        """
        values = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        if not values.get("smtp_password"):
            values.pop("smtp_password", None)

        setup = MailSetup.objects.select_for_update().order_by("id").first()
        if setup is None:
            setup = MailSetup.objects.create(**values)
            logger.info("Mail setup created for %s", setup.smtp_host)
            return setup

        for name, value in values.items():
            setattr(setup, name, value)
        setup.save()
        logger.info("Mail setup updated for %s", setup.smtp_host)
        return setup


def send_html_mail(
    *,
    setup: MailSetup,
    to: str,
    subject: str,
    html: str,
    attachment_name: str | None = None,
    attachment: bytes | None = None,
    attachment_mimetype: str = "application/pdf",
) -> None:
    """
    Send one HTML message through the SMTP account stored in MailSetup.
    Delivery errors (smtplib / socket) propagate to the caller.
    """
    connection = get_connection(
        host=setup.smtp_host,
        port=setup.smtp_port,
        username=setup.smtp_user or None,
        password=setup.smtp_password or None,
        use_ssl=setup.enable_ssl,
        # plain-port relays (587) upgrade via STARTTLS
        use_tls=not setup.enable_ssl,
        timeout=getattr(settings, "EMAIL_TIMEOUT", None),
        fail_silently=False,
    )

    message = EmailMultiAlternatives(
        subject=subject,
        body=strip_tags(html),
        from_email=setup.from_address,
        to=[to],
        connection=connection,
    )
    message.attach_alternative(html, "text/html")
    if attachment_name and attachment is not None:
        message.attach(attachment_name, attachment, attachment_mimetype)

    message.send()
    logger.info("Mail '%s' sent to %s", subject, to)
