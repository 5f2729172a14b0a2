# amc_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from amc_core.billing.api.views import InvoiceItemViewSet, InvoiceViewSet
from amc_core.catalog.api.views import BrandViewSet, CategoryViewSet, ProductViewSet
from amc_core.common.views import HealthView
from amc_core.customers.api.views import CustomerViewSet, LocationViewSet
from amc_core.iam.api.auth import LoginView, LogoutView, RefreshView
from amc_core.iam.api.me import MeView
from amc_core.mailing.api.views import MailSetupView
from amc_core.proposals.api.views import (
    AmcProposalViewSet,
    EmailRecordViewSet,
    ProposalDocumentViewSet,
    ProposalItemViewSet,
)

router = DefaultRouter()

# Master data
router.register(r"customers", CustomerViewSet, basename="customers")
router.register(r"locations", LocationViewSet, basename="locations")
router.register(r"brands", BrandViewSet, basename="brands")
router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"products", ProductViewSet, basename="products")

# Invoices
router.register(r"invoices", InvoiceViewSet, basename="invoices")
router.register(r"invoice-items", InvoiceItemViewSet, basename="invoice-items")

# Proposals + document/email logs
router.register(r"proposals", AmcProposalViewSet, basename="proposals")
router.register(r"proposal-items", ProposalItemViewSet, basename="proposal-items")
router.register(r"proposal-documents", ProposalDocumentViewSet, basename="proposal-documents")
router.register(r"email-records", EmailRecordViewSet, basename="email-records")

urlpatterns = [
    # Auth + /me
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),

    path("health/", HealthView.as_view(), name="health"),
    path("mail-setup/", MailSetupView.as_view(), name="mail-setup"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
