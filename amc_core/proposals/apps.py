# amc_core/proposals/apps.py
from __future__ import annotations

from django.apps import AppConfig


class ProposalsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "amc_core.proposals"
    label = "proposals"
