# amc_core/mailing/tests/test_mail_setup_api.py
import pytest

from amc_core.common.api.exceptions import ServiceNotConfigured
from amc_core.conftest import client_for
from amc_core.mailing.models import MailSetup
from amc_core.mailing.services import MailSetupService

pytestmark = pytest.mark.django_db

SETUP = {
    "smtp_host": "smtp.example.com",
    "smtp_port": 465,
    "smtp_user": "mailer",
    "smtp_password": "secret",
    "enable_ssl": True,
    "sender_name": "AMC Desk",
    "sender_email": "amc@example.com",
}


def test_get_before_configuration_is_null(api_client):
    resp = api_client.get("/api/v1/mail-setup/")

    assert resp.status_code == 200
    assert resp.data is None


def test_put_creates_then_updates_single_row(api_client):
    resp = api_client.put("/api/v1/mail-setup/", SETUP, format="json")
    assert resp.status_code == 200
    assert resp.data["has_password"] is True
    assert "smtp_password" not in resp.data

    resp = api_client.put("/api/v1/mail-setup/", {**SETUP, "smtp_port": 587, "smtp_password": ""}, format="json")
    assert resp.status_code == 200
    assert resp.data["smtp_port"] == 587

    assert MailSetup.objects.count() == 1
    # blank password keeps the stored one
    assert MailSetup.objects.get().smtp_password == "secret"


def test_staff_can_read_but_not_write(staff_user, mail_setup):
    c = client_for(staff_user)

    assert c.get("/api/v1/mail-setup/").data["smtp_host"] == "smtp.example.com"
    assert c.put("/api/v1/mail-setup/", SETUP, format="json").status_code == 403


def test_require_raises_when_missing(db):
    with pytest.raises(ServiceNotConfigured):
        MailSetupService.require()


def test_from_address_without_sender_name(mail_setup):
    mail_setup.sender_name = ""

    assert mail_setup.from_address == "amc@example.com"
