# amc_core/billing/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from amc_core.billing.models import Invoice, InvoiceItem


def invoices_qs() -> QuerySet[Invoice]:
    return Invoice.objects.select_related("customer", "location").prefetch_related("items__product")


def invoices_filtered(
    *,
    customer_id: int | None = None,
    status: str | None = None,
    search: str | None = None,
) -> QuerySet[Invoice]:
    qs = invoices_qs().order_by("-created_at", "-id")

    if customer_id:
        qs = qs.filter(customer_id=customer_id)

    if status:
        qs = qs.filter(status=status)

    if search:
        qs = qs.filter(invoice_no__icontains=search.strip())

    return qs


# -------------------------------------------------------------------
# Items
# -------------------------------------------------------------------

def invoice_items_filtered(*, invoice_id: int | None = None) -> QuerySet[InvoiceItem]:
    qs = InvoiceItem.objects.select_related("product", "invoice").order_by("-created_at", "-id")

    if invoice_id:
        qs = qs.filter(invoice_id=invoice_id)

    return qs
