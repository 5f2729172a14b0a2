# amc_core/proposals/tests/test_proposal_api.py
import pytest
from django.core import mail

from amc_core.conftest import client_for
from amc_core.proposals.models import AmcProposal, EmailRecord, ProposalDocument

pytestmark = pytest.mark.django_db


def _payload(customer, **extra):
    data = {
        "proposalno": "AMC-900",
        "proposaldate": "2024-04-01",
        "amc_start_date": "2024-04-01",
        "amc_end_date": "2025-03-31",
        "customer": customer.id,
        "additional_charge": "500.00",
        "discount": "200.00",
        "tax_rate": "18.00",
    }
    data.update(extra)
    return data


def test_create_add_items_and_read_totals(api_client, customer, product, location):
    resp = api_client.post("/api/v1/proposals/", _payload(customer), format="json")
    assert resp.status_code == 201
    assert resp.data["grand_total"] == "0.00"
    proposal_id = resp.data["id"]

    resp = api_client.post(
        f"/api/v1/proposals/{proposal_id}/items/",
        {"product": product.id, "location": location.id, "quantity": 2, "rate": "2500.00", "amount": "5000.00"},
        format="json",
    )
    assert resp.status_code == 201
    assert resp.data["location_name"] == "Acme HQ"

    resp = api_client.get(f"/api/v1/proposals/{proposal_id}/")
    assert resp.data["total"] == "5000.00"
    assert resp.data["tax_amount"] == "990.00"
    assert resp.data["grand_total"] == "6290.00"
    assert len(resp.data["items"]) == 1


def test_tax_rate_above_100_is_400(api_client, customer):
    resp = api_client.post("/api/v1/proposals/", _payload(customer, tax_rate="120"), format="json")

    assert resp.status_code == 400
    assert "tax_rate" in resp.data["error"]["details"]


def test_duplicate_proposalno_is_409(api_client, customer):
    assert api_client.post("/api/v1/proposals/", _payload(customer), format="json").status_code == 201

    resp = api_client.post("/api/v1/proposals/", _payload(customer), format="json")

    assert resp.status_code == 409


def test_patch_discount_recomputes(api_client, proposal, product):
    api_client.post(
        "/api/v1/proposal-items/",
        {"proposal": proposal.id, "product": product.id, "amount": "5000.00"},
        format="json",
    )

    resp = api_client.patch(f"/api/v1/proposals/{proposal.id}/", {"discount": "0.00"}, format="json")

    assert resp.status_code == 200
    assert resp.data["grand_total"] == "6490.00"


def test_list_search_and_status(api_client, proposal):
    AmcProposal.objects.filter(pk=proposal.pk).update(contract_no="CN-77", proposal_status="sent")

    resp = api_client.get("/api/v1/proposals/", {"search": "CN-77", "status": "sent"})

    assert resp.data["count"] == 1
    assert resp.data["results"][0]["proposalno"] == "AMC-001"


def test_generate_document_endpoint(api_client, proposal, monkeypatch):
    monkeypatch.setattr(
        "amc_core.proposals.integrations.DocumentServiceClient.generate",
        lambda self, data: "https://files.example.com/p.pdf",
    )
    monkeypatch.setattr(
        "amc_core.proposals.integrations.DocumentServiceClient._ensure_configured",
        lambda self: None,
    )

    resp = api_client.post(f"/api/v1/proposals/{proposal.id}/generate_document/")

    assert resp.status_code == 201
    assert resp.data["doclink"] == "https://files.example.com/p.pdf"
    assert resp.data["created_by"] == "admin@example.com"
    assert ProposalDocument.objects.filter(proposalno="AMC-001").count() == 1

    resp = api_client.get("/api/v1/proposal-documents/", {"proposalno": "AMC-001"})
    assert resp.data["count"] == 1


def test_send_email_endpoint(api_client, proposal, mail_setup, monkeypatch):
    AmcProposal.objects.filter(pk=proposal.pk).update(doclink="https://files.example.com/p.pdf")
    monkeypatch.setattr("amc_core.proposals.services.download_file", lambda url, **kw: b"%PDF")

    resp = api_client.post(
        f"/api/v1/proposals/{proposal.id}/send_email/",
        {"email": "client@example.com", "message": "Hi"},
        format="json",
    )

    assert resp.status_code == 201
    assert resp.data["status"] == "sent"
    assert len(mail.outbox) == 1

    resp = api_client.get("/api/v1/email-records/", {"proposalno": "AMC-001"})
    assert resp.data["count"] == 1


def test_send_email_without_document_is_409(api_client, proposal, mail_setup):
    resp = api_client.post(
        f"/api/v1/proposals/{proposal.id}/send_email/",
        {"email": "client@example.com"},
        format="json",
    )

    assert resp.status_code == 409
    assert resp.data["error"]["code"] == "document_not_generated"


def test_send_email_failure_is_502_with_record(api_client, proposal, mail_setup, monkeypatch):
    AmcProposal.objects.filter(pk=proposal.pk).update(doclink="https://files.example.com/p.pdf")

    def fail(url, **kw):
        raise OSError("connection refused")

    monkeypatch.setattr("amc_core.proposals.services.download_file", fail)

    resp = api_client.post(
        f"/api/v1/proposals/{proposal.id}/send_email/",
        {"email": "client@example.com"},
        format="json",
    )

    assert resp.status_code == 502
    record = EmailRecord.objects.get()
    assert record.status == "failed"
    assert resp.data["error"]["details"] == {"email_record_id": record.id}


def test_readonly_user_cannot_send(readonly_user, proposal):
    c = client_for(readonly_user)

    assert c.get(f"/api/v1/proposals/{proposal.id}/").status_code == 200
    resp = c.post(f"/api/v1/proposals/{proposal.id}/send_email/", {"email": "x@example.com"}, format="json")
    assert resp.status_code == 403


def test_delete_proposal(api_client, proposal):
    assert api_client.delete(f"/api/v1/proposals/{proposal.id}/").status_code == 204
    assert not AmcProposal.objects.filter(pk=proposal.pk).exists()


def test_item_without_location_reports_null_name(api_client, proposal, product):
    resp = api_client.post(
        f"/api/v1/proposals/{proposal.id}/items/",
        {"product": product.id, "amount": "10.00"},
        format="json",
    )

    assert resp.status_code == 201
    assert resp.data["location"] is None
    assert resp.data["location_name"] is None
