# amc_core/totals/calculator.py
"""
Pure totals arithmetic for invoices and AMC proposals.

Invoice:
    total       = sum(item.amount)
    subtotal    = total - discount
    grand_total = subtotal

Proposal:
    total       = sum(item.amount)
    tax_amount  = (total + additional_charge) * tax_rate / 100
    grand_total = total + additional_charge + tax_amount - discount

Item amounts are line totals; quantity is never re-multiplied here.
Each persisted figure is rounded to cents (ROUND_HALF_UP). grand_total is
derived from the already rounded tax_amount so stored rows add up exactly.
No clamping: negative inputs flow through unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from amc_core.common.money import HUNDRED, quantize_money, sum_money, to_decimal


@dataclass(frozen=True)
class InvoiceTotals:
    total: Decimal
    subtotal: Decimal
    grand_total: Decimal

    def as_fields(self) -> dict[str, Decimal]:
        return {"total": self.total, "subtotal": self.subtotal, "grand_total": self.grand_total}


@dataclass(frozen=True)
class ProposalTotals:
    total: Decimal
    tax_amount: Decimal
    grand_total: Decimal

    def as_fields(self) -> dict[str, Decimal]:
        return {"total": self.total, "tax_amount": self.tax_amount, "grand_total": self.grand_total}


def compute_invoice_totals(amounts: Iterable[Any], discount: Any = None) -> InvoiceTotals:
    total = quantize_money(sum_money(amounts))
    subtotal = quantize_money(total - to_decimal(discount, "discount"))
    return InvoiceTotals(total=total, subtotal=subtotal, grand_total=subtotal)


def compute_proposal_totals(
    amounts: Iterable[Any],
    additional_charge: Any = None,
    discount: Any = None,
    tax_rate: Any = None,
) -> ProposalTotals:
    total = quantize_money(sum_money(amounts))
    charge = to_decimal(additional_charge, "additional_charge")
    rate = to_decimal(tax_rate, "tax_rate")

    taxable = total + charge
    tax_amount = quantize_money(taxable * rate / HUNDRED)
    grand_total = quantize_money(taxable + tax_amount - to_decimal(discount, "discount"))

    return ProposalTotals(total=total, tax_amount=tax_amount, grand_total=grand_total)
