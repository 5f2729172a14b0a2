# amc_core/proposals/tests/test_proposal_services.py
from datetime import date
from decimal import Decimal

import pytest
from rest_framework.exceptions import NotFound, ValidationError

from amc_core.common.api.exceptions import DuplicateEntry
from amc_core.proposals.models import AmcProposal, ProposalItem
from amc_core.proposals.services import AmcProposalService, ProposalItemService, build_document_payload
from amc_core.proposals.updates import AmcProposalUpdate, ProposalItemUpdate

pytestmark = pytest.mark.django_db


def _reload(proposal):
    return AmcProposal.objects.get(pk=proposal.pk)


def test_new_proposal_starts_with_zero_totals(proposal):
    p = _reload(proposal)

    assert p.proposal_status == "new"
    assert (p.total, p.tax_amount, p.grand_total) == (Decimal("0.00"), Decimal("0.00"), Decimal("0.00"))


def test_first_item_brings_charge_and_tax(proposal, product):
    ProposalItemService.create(proposal_id=proposal.id, product_id=product.id, amount=Decimal("5000"))

    p = _reload(proposal)
    assert p.total == Decimal("5000.00")
    assert p.tax_amount == Decimal("990.00")
    assert p.grand_total == Decimal("6290.00")


def test_tax_rate_change_recomputes(proposal, product):
    ProposalItemService.create(proposal_id=proposal.id, product_id=product.id, amount=Decimal("5000"))

    p = AmcProposalService.update(proposal_id=proposal.id, patch=AmcProposalUpdate(tax_rate=Decimal("0")))

    assert p.tax_amount == Decimal("0.00")
    assert p.grand_total == Decimal("5300.00")


def test_tax_rate_over_100_rejected(proposal):
    with pytest.raises(ValidationError):
        AmcProposalService.update(proposal_id=proposal.id, patch=AmcProposalUpdate(tax_rate=Decimal("101")))


def test_end_before_start_rejected(customer):
    with pytest.raises(ValidationError):
        AmcProposalService.create(
            proposalno="AMC-BAD",
            proposaldate=date(2024, 4, 1),
            amc_start_date=date(2024, 4, 1),
            amc_end_date=date(2024, 3, 1),
            customer_id=customer.id,
        )


def test_duplicate_proposalno_rejected(proposal, customer):
    with pytest.raises(DuplicateEntry):
        AmcProposalService.create(
            proposalno="AMC-001",
            proposaldate=date(2024, 4, 1),
            amc_start_date=date(2024, 4, 1),
            amc_end_date=date(2025, 3, 31),
            customer_id=customer.id,
        )


def test_rename_to_own_number_allowed(proposal):
    p = AmcProposalService.update(
        proposal_id=proposal.id,
        patch=AmcProposalUpdate(proposalno="AMC-001", contract_no="C-9"),
    )

    assert p.proposalno == "AMC-001"
    assert p.contract_no == "C-9"


def test_text_only_update_keeps_totals(proposal, product):
    ProposalItemService.create(proposal_id=proposal.id, product_id=product.id, amount=Decimal("5000"))

    p = AmcProposalService.update(proposal_id=proposal.id, patch=AmcProposalUpdate(terms_conditions="Net 30"))

    assert p.grand_total == Decimal("6290.00")


def test_deleting_last_item_keeps_charge_minus_discount(proposal, product):
    item = ProposalItemService.create(proposal_id=proposal.id, product_id=product.id, amount=Decimal("5000"))

    ProposalItemService.delete(item_id=item.id)

    # (0 + 500) * 18% = 90; 500 + 90 - 200
    p = _reload(proposal)
    assert p.total == Decimal("0.00")
    assert p.tax_amount == Decimal("90.00")
    assert p.grand_total == Decimal("390.00")


def test_moving_item_between_proposals(proposal, customer, product):
    other = AmcProposalService.create(
        proposalno="AMC-002",
        proposaldate=date(2024, 4, 1),
        amc_start_date=date(2024, 4, 1),
        amc_end_date=date(2025, 3, 31),
        customer_id=customer.id,
    )
    item = ProposalItemService.create(proposal_id=proposal.id, product_id=product.id, amount=Decimal("1000"))

    ProposalItemService.update(item_id=item.id, patch=ProposalItemUpdate(proposal_id=other.id))

    assert _reload(proposal).total == Decimal("0.00")
    assert _reload(other).total == Decimal("1000.00")
    assert _reload(other).grand_total == Decimal("1000.00")


def test_item_for_missing_proposal(product):
    with pytest.raises(NotFound):
        ProposalItemService.create(proposal_id=99999, product_id=product.id, amount=Decimal("1"))

    assert ProposalItem.objects.count() == 0


def test_document_payload_shape(proposal, product, location):
    ProposalItemService.create(
        proposal_id=proposal.id,
        product_id=product.id,
        location_id=location.id,
        amount=Decimal("5000"),
        rate=Decimal("2500"),
        quantity=2,
        serial_no="SN-1",
        sac_code="998713",
    )

    payload = build_document_payload(_reload(proposal))

    assert payload["proposalno"] == "AMC-001"
    assert payload["proposaldate"] == "01/04/2024"
    assert payload["amcenddate"] == "31/03/2025"
    assert payload["customerName"] == "Acme Labs"
    assert payload["grandtotal"] == 6290.0
    assert payload["items"] == [
        {
            "location": "Acme HQ",
            "product": "UPS 5kVA",
            "serialno": "SN-1",
            "saccode": "998713",
            "quantity": 2,
            "rate": 2500.0,
            "amount": 5000.0,
        }
    ]


def test_rename_to_taken_number_rejected(proposal, customer):
    other = AmcProposalService.create(
        proposalno="AMC-002",
        proposaldate=date(2024, 4, 1),
        amc_start_date=date(2024, 4, 1),
        amc_end_date=date(2025, 3, 31),
        customer_id=customer.id,
    )

    with pytest.raises(DuplicateEntry):
        AmcProposalService.update(proposal_id=proposal.id, patch=AmcProposalUpdate(proposalno="AMC-002"))

    assert _reload(proposal).proposalno == "AMC-001"
    assert _reload(other).proposalno == "AMC-002"


def test_tax_pushing_grand_total_past_capacity_rolls_back_item(proposal, product):
    with pytest.raises(ValidationError):
        ProposalItemService.create(proposal_id=proposal.id, product_id=product.id, amount=Decimal("9000000000"))

    assert ProposalItem.objects.count() == 0
    assert _reload(proposal).grand_total == Decimal("0.00")
