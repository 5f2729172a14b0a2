# amc_core/totals/stores.py
"""
ORM-backed read/write contract used by the totals engine.

Each store exposes:
- get_parent(parent_id)              row-locked read, NotFound when missing
- list_item_amounts(parent_id)       amounts of items currently linked
- update_parent_totals(parent_id, t) persist derived fields only

Callers must already be inside a transaction (select_for_update).
"""
from __future__ import annotations

from decimal import Decimal

from django.utils import timezone
from rest_framework.exceptions import NotFound

from amc_core.billing.models import Invoice, InvoiceItem
from amc_core.proposals.models import AmcProposal, ProposalItem
from amc_core.totals.calculator import InvoiceTotals, ProposalTotals


class InvoiceTotalsStore:
    def get_parent(self, parent_id: int) -> Invoice:
        invoice = (
            Invoice.objects.select_for_update()
            .only("id", "discount")
            .filter(pk=parent_id)
            .first()
        )
        if invoice is None:
            raise NotFound("Invoice not found.")
        return invoice

    def list_item_amounts(self, parent_id: int) -> list[Decimal]:
        return list(
            InvoiceItem.objects.filter(invoice_id=parent_id)
            .order_by("created_at", "id")
            .values_list("amount", flat=True)
        )

    def update_parent_totals(self, parent_id: int, totals: InvoiceTotals) -> None:
        updated = Invoice.objects.filter(pk=parent_id).update(
            **totals.as_fields(),
            updated_at=timezone.now(),
        )
        if not updated:
            raise NotFound("Invoice not found.")


class ProposalTotalsStore:
    def get_parent(self, parent_id: int) -> AmcProposal:
        proposal = (
            AmcProposal.objects.select_for_update()
            .only("id", "additional_charge", "discount", "tax_rate")
            .filter(pk=parent_id)
            .first()
        )
        if proposal is None:
            raise NotFound("AmcProposal not found.")
        return proposal

    def list_item_amounts(self, parent_id: int) -> list[Decimal]:
        return list(
            ProposalItem.objects.filter(proposal_id=parent_id)
            .order_by("created_at", "id")
            .values_list("amount", flat=True)
        )

    def update_parent_totals(self, parent_id: int, totals: ProposalTotals) -> None:
        updated = AmcProposal.objects.filter(pk=parent_id).update(
            **totals.as_fields(),
            updated_at=timezone.now(),
        )
        if not updated:
            raise NotFound("AmcProposal not found.")
