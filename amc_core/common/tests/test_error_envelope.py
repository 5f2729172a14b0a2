# amc_core/common/tests/test_error_envelope.py
import pytest
from django.db.models import ProtectedError
from rest_framework.exceptions import ValidationError

from amc_core.billing.models import Invoice
from amc_core.common.api.exceptions import UpstreamServiceError, api_exception_handler


def _handle(exc):
    return api_exception_handler(exc, {"request": None, "view": None})


def test_does_not_exist_maps_to_404():
    resp = _handle(Invoice.DoesNotExist())

    assert resp.status_code == 404
    assert resp.data["error"]["code"] == "not_found"
    assert resp.data["error"]["message"] == "Invoice not found."
    assert resp.data["error"]["request_id"]


def test_protected_error_maps_to_409():
    resp = _handle(ProtectedError("still referenced", set()))

    assert resp.status_code == 409
    assert resp.data["error"]["code"] == "protected"


def test_validation_error_details():
    resp = _handle(ValidationError({"amount": ["Must be >= 0."]}))

    assert resp.status_code == 400
    assert resp.data["error"]["message"] == "Request failed."
    assert resp.data["error"]["details"] == {"amount": ["Must be >= 0."]}


def test_upstream_error_carries_extra_details():
    resp = _handle(UpstreamServiceError("Failed to send email: boom", details={"email_record_id": 4}))

    assert resp.status_code == 502
    assert resp.data["error"]["code"] == "upstream_service_error"
    assert resp.data["error"]["details"] == {"email_record_id": 4}


def test_unhandled_error_is_500():
    resp = _handle(RuntimeError("boom"))

    assert resp.status_code == 500
    assert resp.data["error"]["code"] == "server_error"


@pytest.mark.django_db
def test_non_numeric_path_id_is_404(api_client):
    resp = api_client.get("/api/v1/invoices/abc/")

    assert resp.status_code == 404


@pytest.mark.django_db
def test_bad_filter_id_is_400(api_client):
    resp = api_client.get("/api/v1/invoices/", {"customer": "x"})

    assert resp.status_code == 400
    assert "customer" in resp.data["error"]["details"]
