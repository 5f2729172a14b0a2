# amc_core/proposals/selectors.py
from __future__ import annotations

from django.db.models import Q, QuerySet

from amc_core.proposals.models import AmcProposal, EmailRecord, ProposalDocument, ProposalItem


def proposals_qs() -> QuerySet[AmcProposal]:
    return AmcProposal.objects.select_related("customer").prefetch_related(
        "items__product",
        "items__location",
    )


def proposals_filtered(
    *,
    customer_id: int | None = None,
    status: str | None = None,
    search: str | None = None,
) -> QuerySet[AmcProposal]:
    qs = proposals_qs().order_by("-created_at", "-id")

    if customer_id:
        qs = qs.filter(customer_id=customer_id)

    if status:
        qs = qs.filter(proposal_status=status)

    if search:
        term = search.strip()
        qs = qs.filter(Q(proposalno__icontains=term) | Q(contract_no__icontains=term))

    return qs


def proposal_items_filtered(*, proposal_id: int | None = None) -> QuerySet[ProposalItem]:
    qs = ProposalItem.objects.select_related("product", "location", "invoice").order_by("-created_at", "-id")

    if proposal_id:
        qs = qs.filter(proposal_id=proposal_id)

    return qs


# -------------------------------------------------------------------
# Logs
# -------------------------------------------------------------------

def proposal_documents_filtered(*, proposalno: str | None = None) -> QuerySet[ProposalDocument]:
    qs = ProposalDocument.objects.order_by("-created_at", "-id")
    if proposalno:
        qs = qs.filter(proposalno=proposalno)
    return qs


def email_records_filtered(*, proposalno: str | None = None) -> QuerySet[EmailRecord]:
    qs = EmailRecord.objects.order_by("-created_at", "-id")
    if proposalno:
        qs = qs.filter(proposalno=proposalno)
    return qs
