# amc_core/mailing/admin.py
from __future__ import annotations

from django.contrib import admin

from amc_core.mailing.models import MailSetup


@admin.register(MailSetup)
class MailSetupAdmin(admin.ModelAdmin):
    list_display = ("id", "smtp_host", "smtp_port", "sender_email", "enable_ssl", "updated_at")
    exclude = ("smtp_password",)
