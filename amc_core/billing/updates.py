# amc_core/billing/updates.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from amc_core.common.patch import UNSET, Patch


@dataclass(frozen=True)
class InvoiceUpdate(Patch):
    customer_id: int | Any = UNSET
    location_id: int | None | Any = UNSET
    invoice_no: str | Any = UNSET
    invoice_date: date | Any = UNSET
    discount: Decimal | Any = UNSET
    status: str | Any = UNSET

    @property
    def touches_totals(self) -> bool:
        return self.is_set("discount")


@dataclass(frozen=True)
class InvoiceItemUpdate(Patch):
    invoice_id: int | Any = UNSET
    product_id: int | Any = UNSET
    serial_no: str | Any = UNSET
    quantity: int | Any = UNSET
    amount: Decimal | Any = UNSET

    @property
    def touches_totals(self) -> bool:
        return self.is_set("amount") or self.is_set("invoice_id")
