# amc_core/proposals/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from amc_core.billing.models import Invoice
from amc_core.catalog.models import Product
from amc_core.customers.models import Customer, Location
from amc_core.proposals.models import (
    AmcProposal,
    EmailRecord,
    ProposalDocument,
    ProposalItem,
    ProposalStatus,
)

_money = dict(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
_percent = dict(max_digits=5, decimal_places=2, min_value=Decimal("0.00"), max_value=Decimal("100.00"))


class ProposalItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    location_name = serializers.CharField(source="location.display_name", read_only=True, default=None)

    class Meta:
        model = ProposalItem
        fields = [
            "id",
            "proposal",
            "product",
            "product_name",
            "location",
            "location_name",
            "invoice",
            "serial_no",
            "sac_code",
            "quantity",
            "rate",
            "amount",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AmcProposalSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    items = ProposalItemSerializer(many=True, read_only=True)

    class Meta:
        model = AmcProposal
        fields = [
            "id",
            "proposalno",
            "proposaldate",
            "amc_start_date",
            "amc_end_date",
            "customer",
            "customer_name",
            "contract_no",
            "billing_address",
            "doclink",
            "terms_conditions",
            "additional_charge",
            "discount",
            "tax_rate",
            "total",
            "tax_amount",
            "grand_total",
            "proposal_status",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProposalDocumentSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProposalDocument
        fields = ["id", "proposalno", "doclink", "created_by", "created_at"]
        read_only_fields = fields


class EmailRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = EmailRecord
        fields = ["id", "proposalno", "email", "status", "sent_by", "message", "created_at"]
        read_only_fields = fields


# -------------------------------------------------------------------
# Input
# -------------------------------------------------------------------

class AmcProposalCreateSerializer(serializers.Serializer):
    proposalno = serializers.CharField(max_length=64)
    proposaldate = serializers.DateField()
    amc_start_date = serializers.DateField()
    amc_end_date = serializers.DateField()
    customer = serializers.PrimaryKeyRelatedField(queryset=Customer.objects.all())
    contract_no = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")
    billing_address = serializers.CharField(required=False, allow_blank=True, default="")
    terms_conditions = serializers.CharField(required=False, allow_blank=True, default="")
    additional_charge = serializers.DecimalField(default=Decimal("0.00"), **_money)
    discount = serializers.DecimalField(default=Decimal("0.00"), **_money)
    tax_rate = serializers.DecimalField(default=Decimal("0.00"), **_percent)
    proposal_status = serializers.ChoiceField(choices=ProposalStatus.choices, default=ProposalStatus.NEW)


class AmcProposalUpdateSerializer(serializers.Serializer):
    proposalno = serializers.CharField(max_length=64, required=False)
    proposaldate = serializers.DateField(required=False)
    amc_start_date = serializers.DateField(required=False)
    amc_end_date = serializers.DateField(required=False)
    customer = serializers.PrimaryKeyRelatedField(queryset=Customer.objects.all(), required=False)
    contract_no = serializers.CharField(max_length=128, required=False, allow_blank=True)
    billing_address = serializers.CharField(required=False, allow_blank=True)
    terms_conditions = serializers.CharField(required=False, allow_blank=True)
    additional_charge = serializers.DecimalField(required=False, **_money)
    discount = serializers.DecimalField(required=False, **_money)
    tax_rate = serializers.DecimalField(required=False, **_percent)
    proposal_status = serializers.ChoiceField(choices=ProposalStatus.choices, required=False)


class ProposalItemInputSerializer(serializers.Serializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all(), required=False, allow_null=True)
    invoice = serializers.PrimaryKeyRelatedField(queryset=Invoice.objects.all(), required=False, allow_null=True)
    serial_no = serializers.CharField(required=False, allow_blank=True, default="")
    sac_code = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    quantity = serializers.IntegerField(min_value=1, default=1)
    rate = serializers.DecimalField(default=Decimal("0.00"), **_money)
    amount = serializers.DecimalField(**_money)


class ProposalItemCreateSerializer(ProposalItemInputSerializer):
    proposal = serializers.PrimaryKeyRelatedField(queryset=AmcProposal.objects.all())


class ProposalItemUpdateSerializer(serializers.Serializer):
    proposal = serializers.PrimaryKeyRelatedField(queryset=AmcProposal.objects.all(), required=False)
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all(), required=False)
    location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all(), required=False, allow_null=True)
    invoice = serializers.PrimaryKeyRelatedField(queryset=Invoice.objects.all(), required=False, allow_null=True)
    serial_no = serializers.CharField(required=False, allow_blank=True)
    sac_code = serializers.CharField(max_length=32, required=False, allow_blank=True)
    quantity = serializers.IntegerField(min_value=1, required=False)
    rate = serializers.DecimalField(required=False, **_money)
    amount = serializers.DecimalField(required=False, **_money)


class SendEmailSerializer(serializers.Serializer):
    email = serializers.EmailField()
    message = serializers.CharField(required=False, allow_blank=True, default="")
