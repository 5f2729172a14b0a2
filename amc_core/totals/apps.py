# amc_core/totals/apps.py
from __future__ import annotations

from django.apps import AppConfig


class TotalsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "amc_core.totals"
    label = "totals"

    def ready(self) -> None:
        from amc_core.totals.engine import TotalsEngine, install_engine
        from amc_core.totals.stores import InvoiceTotalsStore, ProposalTotalsStore

        install_engine(TotalsEngine(InvoiceTotalsStore(), ProposalTotalsStore()))
