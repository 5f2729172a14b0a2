# amc_core/billing/tests/test_invoice_api.py
import pytest

from amc_core.billing.models import Invoice
from amc_core.conftest import client_for

pytestmark = pytest.mark.django_db


def _create(api_client, customer, product, **extra):
    payload = {
        "customer": customer.id,
        "invoice_no": "INV-500",
        "invoice_date": "2024-06-01",
        "discount": "300.00",
        "items": [
            {"product": product.id, "amount": "1000.00"},
            {"product": product.id, "amount": "2500.00", "serial_no": "SN-1"},
        ],
    }
    payload.update(extra)
    return api_client.post("/api/v1/invoices/", payload, format="json")


def test_create_invoice_with_items_returns_totals(api_client, customer, product):
    resp = _create(api_client, customer, product)

    assert resp.status_code == 201
    assert resp.data["invoice_no"] == "INV-500"
    assert resp.data["customer_name"] == "Acme Labs"
    assert resp.data["total"] == "3500.00"
    assert resp.data["subtotal"] == "3200.00"
    assert resp.data["grand_total"] == "3200.00"
    assert len(resp.data["items"]) == 2


def test_client_supplied_totals_are_ignored(api_client, customer, product):
    resp = _create(api_client, customer, product, total="1.00", grand_total="1.00")

    assert resp.status_code == 201
    assert resp.data["grand_total"] == "3200.00"


def test_duplicate_invoice_no_is_409(api_client, customer, product):
    assert _create(api_client, customer, product).status_code == 201

    resp = _create(api_client, customer, product)

    assert resp.status_code == 409
    assert resp.data["error"]["code"] == "duplicate_entry"


def test_items_action_adds_and_lists(api_client, invoice, product):
    resp = api_client.post(
        f"/api/v1/invoices/{invoice.id}/items/",
        {"product": product.id, "amount": "150.00", "quantity": 3},
        format="json",
    )
    assert resp.status_code == 201
    assert resp.data["quantity"] == 3

    resp = api_client.get(f"/api/v1/invoices/{invoice.id}/items/")
    assert resp.status_code == 200
    assert [row["amount"] for row in resp.data] == ["150.00"]

    resp = api_client.get(f"/api/v1/invoices/{invoice.id}/")
    assert resp.data["total"] == "150.00"


def test_patch_discount_and_rename(api_client, invoice):
    resp = api_client.patch(
        f"/api/v1/invoices/{invoice.id}/",
        {"discount": "20.00", "invoice_no": "INV-001"},
        format="json",
    )

    assert resp.status_code == 200
    assert resp.data["discount"] == "20.00"
    assert resp.data["grand_total"] == "-20.00"


def test_negative_amount_is_400(api_client, invoice, product):
    resp = api_client.post(
        f"/api/v1/invoices/{invoice.id}/items/",
        {"product": product.id, "amount": "-5.00"},
        format="json",
    )

    assert resp.status_code == 400
    assert resp.data["error"]["code"] == "validation_error"
    assert "amount" in resp.data["error"]["details"]


def test_invoice_item_endpoints_move_between_invoices(api_client, invoice, customer, product):
    other = _create(api_client, customer, product, items=[]).data
    item = api_client.post(
        "/api/v1/invoice-items/",
        {"invoice": invoice.id, "product": product.id, "amount": "90.00"},
        format="json",
    ).data

    resp = api_client.patch(f"/api/v1/invoice-items/{item['id']}/", {"invoice": other["id"]}, format="json")
    assert resp.status_code == 200

    assert api_client.get(f"/api/v1/invoices/{invoice.id}/").data["total"] == "0.00"
    assert api_client.get(f"/api/v1/invoices/{other['id']}/").data["subtotal"] == "-210.00"

    resp = api_client.delete(f"/api/v1/invoice-items/{item['id']}/")
    assert resp.status_code == 204
    assert api_client.get(f"/api/v1/invoices/{other['id']}/").data["total"] == "0.00"


def test_list_filters_by_status_and_search(api_client, invoice, customer):
    Invoice.objects.filter(pk=invoice.pk).update(status="paid")

    resp = api_client.get("/api/v1/invoices/", {"status": "paid", "search": "001"})

    assert resp.status_code == 200
    assert resp.data["count"] == 1
    assert resp.data["results"][0]["id"] == invoice.id


def test_unknown_invoice_is_404(api_client):
    resp = api_client.get("/api/v1/invoices/424242/")

    assert resp.status_code == 404
    assert resp.data["error"]["message"] == "Invoice not found."


def test_delete_invoice(api_client, invoice):
    assert api_client.delete(f"/api/v1/invoices/{invoice.id}/").status_code == 204
    assert not Invoice.objects.filter(pk=invoice.pk).exists()


def test_readonly_user_can_list_but_not_write(readonly_user, invoice, product):
    c = client_for(readonly_user)

    assert c.get("/api/v1/invoices/").status_code == 200
    assert c.get(f"/api/v1/invoices/{invoice.id}/items/").status_code == 200
    resp = c.post(f"/api/v1/invoices/{invoice.id}/items/", {"product": product.id, "amount": "1.00"}, format="json")
    assert resp.status_code == 403


def test_staff_user_can_write(staff_user, invoice, product):
    c = client_for(staff_user)

    resp = c.post(f"/api/v1/invoices/{invoice.id}/items/", {"product": product.id, "amount": "1.00"}, format="json")

    assert resp.status_code == 201


def test_anonymous_is_401(client, db):
    resp = client.get("/api/v1/invoices/")

    assert resp.status_code == 401


def test_item_pushing_total_past_capacity_is_rejected(api_client, invoice, product):
    url = f"/api/v1/invoices/{invoice.id}/items/"
    assert api_client.post(url, {"product": product.id, "amount": "9000000000.00"}, format="json").status_code == 201

    resp = api_client.post(url, {"product": product.id, "amount": "9000000000.00"}, format="json")

    assert resp.status_code == 400
    assert resp.data["error"]["code"] == "validation_error"
    assert "total" in resp.data["error"]["details"]

    resp = api_client.get(f"/api/v1/invoices/{invoice.id}/")
    assert resp.status_code == 200
    assert resp.data["total"] == "9000000000.00"
    assert len(resp.data["items"]) == 1


def test_invoice_without_location_reports_null_name(api_client, invoice):
    resp = api_client.get(f"/api/v1/invoices/{invoice.id}/")

    assert resp.data["location"] is None
    assert "location_name" in resp.data
    assert resp.data["location_name"] is None
