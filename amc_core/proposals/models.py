# amc_core/proposals/models.py
from __future__ import annotations

from decimal import Decimal

from django.db import models

from amc_core.billing.models import Invoice
from amc_core.catalog.models import Product
from amc_core.common.models import TimeStampedModel
from amc_core.customers.models import Customer, Location


class ProposalStatus(models.TextChoices):
    NEW = "new", "New"
    SENT = "sent", "Sent"
    ACCEPTED = "accepted", "Accepted"
    REJECTED = "rejected", "Rejected"


class AmcProposal(TimeStampedModel):
    """
    Priced AMC offer.

    Manual inputs: additional_charge, discount, tax_rate (percent).
    Derived by the totals engine: total, tax_amount, grand_total.
    """
    proposalno = models.CharField(max_length=64, unique=True)
    proposaldate = models.DateField()
    amc_start_date = models.DateField()
    amc_end_date = models.DateField()

    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name="proposals")

    contract_no = models.CharField(max_length=128, blank=True)
    billing_address = models.TextField(blank=True)
    doclink = models.URLField(max_length=1024, blank=True)
    terms_conditions = models.TextField(blank=True)

    additional_charge = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))

    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    grand_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    proposal_status = models.CharField(
        max_length=16,
        choices=ProposalStatus.choices,
        default=ProposalStatus.NEW,
        db_index=True,
    )

    class Meta:
        db_table = "proposals_amc_proposal"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "created_at"], name="proposal_customer_created_idx"),
        ]

    def __str__(self) -> str:
        return self.proposalno


class ProposalItem(TimeStampedModel):
    """
    A covered unit. `invoice` records which sale the unit came from.
    """
    proposal = models.ForeignKey(AmcProposal, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="proposal_items")
    location = models.ForeignKey(
        Location,
        on_delete=models.SET_NULL,
        related_name="proposal_items",
        null=True,
        blank=True,
    )
    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.SET_NULL,
        related_name="proposal_items",
        null=True,
        blank=True,
    )

    serial_no = models.CharField(max_length=128, blank=True)
    sac_code = models.CharField(max_length=32, blank=True)
    quantity = models.PositiveIntegerField(default=1)
    rate = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        db_table = "proposals_proposal_item"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["proposal", "created_at"], name="proposal_item_proposal_idx"),
        ]


# -------------------------------------------------------------------
# Logs of document generation / email delivery
# -------------------------------------------------------------------

class ProposalDocument(TimeStampedModel):
    proposalno = models.CharField(max_length=64, db_index=True)
    doclink = models.URLField(max_length=1024)
    created_by = models.CharField(max_length=254)

    class Meta:
        db_table = "proposals_proposal_document"
        ordering = ["-created_at"]


class EmailStatus(models.TextChoices):
    SENT = "sent", "Sent"
    FAILED = "failed", "Failed"


class EmailRecord(TimeStampedModel):
    proposalno = models.CharField(max_length=64, db_index=True)
    email = models.EmailField()
    status = models.CharField(max_length=16, choices=EmailStatus.choices)
    sent_by = models.CharField(max_length=254)
    message = models.TextField(blank=True)

    class Meta:
        db_table = "proposals_email_record"
        ordering = ["-created_at"]
