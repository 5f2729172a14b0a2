# amc_core/mailing/apps.py
from django.apps import AppConfig


class MailingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "amc_core.mailing"
    label = "mailing"
