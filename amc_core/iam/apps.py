# amc_core/iam/apps.py
from django.apps import AppConfig


class IamConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "amc_core.iam"
    label = "iam"

    def ready(self) -> None:
        # registers the drf-spectacular auth extension
        from amc_core.iam import openapi  # noqa: F401
