# amc_core/mailing/models.py
from __future__ import annotations

from django.db import models

from amc_core.common.models import TimeStampedModel


class MailSetup(TimeStampedModel):
    """
    SMTP account used for outbound proposal mail. One row at most;
    read/write it through MailSetupService.
    """
    smtp_host = models.CharField(max_length=255)
    smtp_port = models.PositiveIntegerField(default=587)
    smtp_user = models.CharField(max_length=255, blank=True)
    smtp_password = models.CharField(max_length=255, blank=True)
    enable_ssl = models.BooleanField(default=False)

    sender_name = models.CharField(max_length=255, blank=True)
    sender_email = models.EmailField()

    class Meta:
        db_table = "mailing_mail_setup"

    def __str__(self) -> str:
        return f"{self.smtp_host}:{self.smtp_port}"

    @property
    def from_address(self) -> str:
        if self.sender_name:
            return f'"{self.sender_name}" <{self.sender_email}>'
        return self.sender_email
