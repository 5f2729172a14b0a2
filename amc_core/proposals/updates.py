# amc_core/proposals/updates.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from amc_core.common.patch import UNSET, Patch

TOTALS_FIELDS = ("additional_charge", "discount", "tax_rate")


@dataclass(frozen=True)
class AmcProposalUpdate(Patch):
    proposalno: str | Any = UNSET
    proposaldate: date | Any = UNSET
    amc_start_date: date | Any = UNSET
    amc_end_date: date | Any = UNSET
    customer_id: int | Any = UNSET
    contract_no: str | Any = UNSET
    billing_address: str | Any = UNSET
    terms_conditions: str | Any = UNSET
    additional_charge: Decimal | Any = UNSET
    discount: Decimal | Any = UNSET
    tax_rate: Decimal | Any = UNSET
    proposal_status: str | Any = UNSET

    @property
    def touches_totals(self) -> bool:
        return any(self.is_set(name) for name in TOTALS_FIELDS)


@dataclass(frozen=True)
class ProposalItemUpdate(Patch):
    proposal_id: int | Any = UNSET
    product_id: int | Any = UNSET
    location_id: int | None | Any = UNSET
    invoice_id: int | None | Any = UNSET
    serial_no: str | Any = UNSET
    sac_code: str | Any = UNSET
    quantity: int | Any = UNSET
    rate: Decimal | Any = UNSET
    amount: Decimal | Any = UNSET

    @property
    def touches_totals(self) -> bool:
        return self.is_set("amount") or self.is_set("proposal_id")
