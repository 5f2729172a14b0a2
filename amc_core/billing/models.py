# amc_core/billing/models.py
from __future__ import annotations

from decimal import Decimal

from django.db import models

from amc_core.catalog.models import Product
from amc_core.common.models import TimeStampedModel
from amc_core.customers.models import Customer, Location


class InvoiceStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    CANCELLED = "cancelled", "Cancelled"


class Invoice(TimeStampedModel):
    """
    Sales invoice for equipment later covered by AMC proposals.

    total/subtotal/grand_total are derived from the items and `discount`
    by the totals engine; clients never write them.
    """
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name="invoices")
    location = models.ForeignKey(
        Location,
        on_delete=models.SET_NULL,
        related_name="invoices",
        null=True,
        blank=True,
    )

    invoice_no = models.CharField(max_length=64, unique=True)
    invoice_date = models.DateField()
    status = models.CharField(
        max_length=16,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.PENDING,
        db_index=True,
    )

    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    grand_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        db_table = "billing_invoice"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "created_at"], name="invoice_customer_created_idx"),
            models.Index(fields=["status", "created_at"], name="invoice_status_created_idx"),
        ]

    def __str__(self) -> str:
        return self.invoice_no


class InvoiceItem(TimeStampedModel):
    """
    `amount` is the line's contribution to the invoice total (not a unit price).
    """
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="invoice_items")

    serial_no = models.CharField(max_length=128, blank=True)
    quantity = models.PositiveIntegerField(default=1)
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        db_table = "billing_invoice_item"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["invoice", "created_at"], name="invoice_item_invoice_idx"),
        ]
