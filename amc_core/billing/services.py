# amc_core/billing/services.py
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound, ValidationError

from amc_core.billing.models import Invoice, InvoiceItem, InvoiceStatus
from amc_core.billing.updates import InvoiceItemUpdate, InvoiceUpdate
from amc_core.common.api.exceptions import DuplicateEntry
from amc_core.common.money import ZERO, ensure_money, ensure_positive_int
from amc_core.totals.engine import DocumentKind, TotalsEngine, get_engine

logger = logging.getLogger(__name__)


def _ensure_invoice_no_free(invoice_no: str, *, exclude_id: int | None = None) -> None:
    qs = Invoice.objects.filter(invoice_no=invoice_no)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        raise DuplicateEntry(f"Invoice number '{invoice_no}' already exists.")


class InvoiceService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        customer_id: int,
        invoice_no: str,
        invoice_date: date,
        location_id: int | None = None,
        discount: Decimal = ZERO,
        status: str = InvoiceStatus.PENDING,
        items: Iterable[Mapping[str, Any]] = (),
        engine: TotalsEngine | None = None,
    ) -> Invoice:
        """
        Create an invoice together with its items; totals are computed before
        commit. Any failing item rolls back the whole invoice.
        """
        invoice_no = (invoice_no or "").strip()
        if not invoice_no:
            raise ValidationError({"invoice_no": "This field is required."})
        _ensure_invoice_no_free(invoice_no)

        try:
            with transaction.atomic():
                invoice = Invoice.objects.create(
                    customer_id=customer_id,
                    location_id=location_id,
                    invoice_no=invoice_no,
                    invoice_date=invoice_date,
                    status=status,
                    discount=ensure_money(discount, "discount"),
                    total=ZERO,
                    subtotal=ZERO,
                    grand_total=ZERO,
                )
        except IntegrityError:
            raise DuplicateEntry(f"Invoice number '{invoice_no}' already exists.")

        for item in items or ():
            InvoiceItem.objects.create(
                invoice=invoice,
                product_id=item["product_id"],
                serial_no=item.get("serial_no") or "",
                quantity=ensure_positive_int(item.get("quantity", 1)),
                amount=ensure_money(item.get("amount")),
            )

        (engine or get_engine()).recalculate_invoice_totals(invoice.id)
        invoice.refresh_from_db()

        logger.info("Invoice %s created (id=%s)", invoice.invoice_no, invoice.id)
        return invoice

    @staticmethod
    @transaction.atomic
    def update(*, invoice_id: int, patch: InvoiceUpdate, engine: TotalsEngine | None = None) -> Invoice:
        invoice = Invoice.objects.select_for_update().get(pk=invoice_id)

        changes = patch.provided()
        if not changes:
            return invoice

        if patch.is_set("invoice_no"):
            new_no = (patch.invoice_no or "").strip()
            if not new_no:
                raise ValidationError({"invoice_no": "This field may not be blank."})
            if new_no != invoice.invoice_no:
                _ensure_invoice_no_free(new_no, exclude_id=invoice.id)
            changes["invoice_no"] = new_no

        if patch.is_set("discount"):
            changes["discount"] = ensure_money(patch.discount, "discount")

        if patch.is_set("customer_id") and patch.customer_id is None:
            raise ValidationError({"customer": "This field may not be null."})

        for name, value in changes.items():
            setattr(invoice, name, value)

        try:
            with transaction.atomic():
                invoice.save(update_fields=[*changes.keys(), "updated_at"])
        except IntegrityError:
            raise DuplicateEntry(f"Invoice number '{invoice.invoice_no}' already exists.")

        if patch.touches_totals:
            (engine or get_engine()).on_parent_fields_changed(DocumentKind.INVOICE, invoice.id)
            invoice.refresh_from_db()

        return invoice

    @staticmethod
    @transaction.atomic
    def delete(*, invoice_id: int) -> None:
        invoice = Invoice.objects.select_for_update().get(pk=invoice_id)
        invoice.delete()
        logger.info("Invoice %s deleted (id=%s)", invoice.invoice_no, invoice_id)


class InvoiceItemService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        invoice_id: int,
        product_id: int,
        amount: Decimal,
        quantity: int = 1,
        serial_no: str = "",
        engine: TotalsEngine | None = None,
    ) -> InvoiceItem:
        if not Invoice.objects.filter(pk=invoice_id).exists():
            raise NotFound("Invoice not found.")

        item = InvoiceItem.objects.create(
            invoice_id=invoice_id,
            product_id=product_id,
            serial_no=serial_no or "",
            quantity=ensure_positive_int(quantity),
            amount=ensure_money(amount),
        )

        (engine or get_engine()).on_item_created(DocumentKind.INVOICE, invoice_id)
        return item

    @staticmethod
    @transaction.atomic
    def update(*, item_id: int, patch: InvoiceItemUpdate, engine: TotalsEngine | None = None) -> InvoiceItem:
        """
        Moving an item (invoice_id change) recomputes both the old and the new invoice.
        """
        item = InvoiceItem.objects.select_for_update().get(pk=item_id)
        previous_invoice_id = item.invoice_id

        changes = patch.provided()
        if not changes:
            return item

        if patch.is_set("invoice_id"):
            if patch.invoice_id is None:
                raise ValidationError({"invoice": "This field may not be null."})
            if not Invoice.objects.filter(pk=patch.invoice_id).exists():
                raise NotFound("Invoice not found.")
        if patch.is_set("product_id") and patch.product_id is None:
            raise ValidationError({"product": "This field may not be null."})
        if patch.is_set("quantity"):
            changes["quantity"] = ensure_positive_int(patch.quantity)
        if patch.is_set("amount"):
            changes["amount"] = ensure_money(patch.amount)
        if patch.is_set("serial_no"):
            changes["serial_no"] = patch.serial_no or ""

        for name, value in changes.items():
            setattr(item, name, value)
        item.save(update_fields=[*changes.keys(), "updated_at"])

        if patch.touches_totals:
            (engine or get_engine()).on_item_updated(
                DocumentKind.INVOICE,
                item.invoice_id,
                previous_parent_id=previous_invoice_id,
            )
        return item

    @staticmethod
    @transaction.atomic
    def delete(*, item_id: int, engine: TotalsEngine | None = None) -> None:
        item = InvoiceItem.objects.select_for_update().get(pk=item_id)
        invoice_id = item.invoice_id
        item.delete()

        (engine or get_engine()).on_item_deleted(DocumentKind.INVOICE, invoice_id)
