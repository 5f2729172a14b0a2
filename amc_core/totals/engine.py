# amc_core/totals/engine.py
from __future__ import annotations

import enum
import logging

from django.db import transaction

from amc_core.common.money import ensure_storable
from amc_core.totals.calculator import (
    InvoiceTotals,
    ProposalTotals,
    compute_invoice_totals,
    compute_proposal_totals,
)

logger = logging.getLogger(__name__)


def _ensure_storable(totals: InvoiceTotals | ProposalTotals) -> None:
    for name, value in totals.as_fields().items():
        ensure_storable(value, name)


class DocumentKind(str, enum.Enum):
    INVOICE = "invoice"
    PROPOSAL = "proposal"


class TotalsEngine:
    """
    Keeps derived money fields of invoices/proposals in line with their items.

    The engine knows one parent per recompute. When an item moves between
    documents the caller passes both ids to on_item_updated; nothing else is
    inferred here.

    A missing parent raises NotFound before anything is written.
    """

    def __init__(self, invoice_store, proposal_store):
        self.invoice_store = invoice_store
        self.proposal_store = proposal_store

    # -------------------------------------------------------------------
    # Recompute
    # -------------------------------------------------------------------

    def recalculate_invoice_totals(self, invoice_id: int) -> InvoiceTotals:
        with transaction.atomic():
            invoice = self.invoice_store.get_parent(invoice_id)
            amounts = self.invoice_store.list_item_amounts(invoice_id)
            totals = compute_invoice_totals(amounts, invoice.discount)
            _ensure_storable(totals)
            self.invoice_store.update_parent_totals(invoice_id, totals)

        logger.debug(
            "Invoice %s totals: total=%s subtotal=%s grand_total=%s",
            invoice_id, totals.total, totals.subtotal, totals.grand_total,
        )
        return totals

    def recalculate_proposal_totals(self, proposal_id: int) -> ProposalTotals:
        with transaction.atomic():
            proposal = self.proposal_store.get_parent(proposal_id)
            amounts = self.proposal_store.list_item_amounts(proposal_id)
            totals = compute_proposal_totals(
                amounts,
                additional_charge=proposal.additional_charge,
                discount=proposal.discount,
                tax_rate=proposal.tax_rate,
            )
            _ensure_storable(totals)
            self.proposal_store.update_parent_totals(proposal_id, totals)

        logger.debug(
            "Proposal %s totals: total=%s tax_amount=%s grand_total=%s",
            proposal_id, totals.total, totals.tax_amount, totals.grand_total,
        )
        return totals

    def recalculate(self, kind: DocumentKind, parent_id: int):
        if DocumentKind(kind) is DocumentKind.INVOICE:
            return self.recalculate_invoice_totals(parent_id)
        return self.recalculate_proposal_totals(parent_id)

    # -------------------------------------------------------------------
    # Hooks called by item / parent services
    # -------------------------------------------------------------------

    def on_item_created(self, kind: DocumentKind, parent_id: int) -> None:
        self.recalculate(kind, parent_id)

    def on_item_updated(
        self,
        kind: DocumentKind,
        parent_id: int,
        previous_parent_id: int | None = None,
    ) -> None:
        if previous_parent_id is not None and previous_parent_id != parent_id:
            self.recalculate(kind, previous_parent_id)
        self.recalculate(kind, parent_id)

    def on_item_deleted(self, kind: DocumentKind, parent_id: int) -> None:
        self.recalculate(kind, parent_id)

    def on_parent_fields_changed(self, kind: DocumentKind, parent_id: int) -> None:
        self.recalculate(kind, parent_id)


_engine: TotalsEngine | None = None


def install_engine(engine: TotalsEngine) -> None:
    global _engine
    _engine = engine


def get_engine() -> TotalsEngine:
    if _engine is None:
        raise RuntimeError("Totals engine is not installed; is amc_core.totals in INSTALLED_APPS?")
    return _engine
