# amc_core/common/tests/test_patch.py
from types import SimpleNamespace

from amc_core.billing.updates import InvoiceItemUpdate, InvoiceUpdate
from amc_core.common.patch import UNSET, relation_ids
from amc_core.proposals.updates import AmcProposalUpdate


def test_unset_and_none_are_distinct():
    patch = InvoiceUpdate.from_data({"location_id": None, "unknown": 1})

    assert patch.provided() == {"location_id": None}
    assert patch.is_set("location_id")
    assert not patch.is_set("discount")
    assert patch.discount is UNSET
    assert bool(patch)
    assert not InvoiceUpdate()


def test_totals_relevance():
    assert InvoiceUpdate(discount=1).touches_totals
    assert not InvoiceUpdate(invoice_no="X").touches_totals
    assert InvoiceItemUpdate(invoice_id=3).touches_totals
    assert not InvoiceItemUpdate(quantity=3).touches_totals
    assert AmcProposalUpdate(tax_rate=5).touches_totals
    assert not AmcProposalUpdate(contract_no="C").touches_totals


def test_relation_ids():
    data = {"customer": SimpleNamespace(pk=7), "location": None, "invoice_no": "A"}

    assert relation_ids(data, "customer", "location", "product") == {
        "customer_id": 7,
        "location_id": None,
        "invoice_no": "A",
    }
