# amc_core/conftest.py
from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from amc_core.catalog.models import Product
from amc_core.customers.models import Customer, Location
from amc_core.iam.models import AdminRole, AdminUser


@pytest.fixture
def admin_user(db):
    return AdminUser.objects.create_superuser(email="admin@example.com", password="testpass", name="Admin")


@pytest.fixture
def staff_user(db):
    return AdminUser.objects.create_user(email="staff@example.com", password="testpass", role=AdminRole.STAFF)


@pytest.fixture
def readonly_user(db):
    return AdminUser.objects.create_user(email="viewer@example.com", password="testpass", role=AdminRole.READONLY)


def client_for(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def api_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def customer(db):
    return Customer.objects.create(name="Acme Labs", contact_person="R. Iyer", email="ops@acme.test")


@pytest.fixture
def location(db, customer):
    return Location.objects.create(customer=customer, display_name="Acme HQ", city="Pune")


@pytest.fixture
def product(db):
    return Product.objects.create(name="UPS 5kVA", model="U-5000")


@pytest.fixture
def invoice(customer):
    from amc_core.billing.services import InvoiceService

    return InvoiceService.create(
        customer_id=customer.id,
        invoice_no="INV-001",
        invoice_date=date(2024, 4, 1),
    )


@pytest.fixture
def proposal(customer):
    from amc_core.proposals.services import AmcProposalService

    return AmcProposalService.create(
        proposalno="AMC-001",
        proposaldate=date(2024, 4, 1),
        amc_start_date=date(2024, 4, 1),
        amc_end_date=date(2025, 3, 31),
        customer_id=customer.id,
        additional_charge=Decimal("500.00"),
        discount=Decimal("200.00"),
        tax_rate=Decimal("18.00"),
    )


@pytest.fixture
def mail_setup(db):
    from amc_core.mailing.models import MailSetup

    return MailSetup.objects.create(
        smtp_host="smtp.example.com",
        smtp_port=587,
        smtp_user="mailer",
        smtp_password="secret",
        sender_name="AMC Desk",
        sender_email="amc@example.com",
    )
