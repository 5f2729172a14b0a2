# amc_core/billing/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from amc_core.billing.models import Invoice, InvoiceItem, InvoiceStatus
from amc_core.catalog.models import Product
from amc_core.customers.models import Customer, Location

_money = dict(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))


class InvoiceItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = InvoiceItem
        fields = [
            "id",
            "invoice",
            "product",
            "product_name",
            "serial_no",
            "quantity",
            "amount",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    location_name = serializers.CharField(source="location.display_name", read_only=True, default=None)
    items = InvoiceItemSerializer(many=True, read_only=True)

    class Meta:
        model = Invoice
        fields = [
            "id",
            "customer",
            "customer_name",
            "location",
            "location_name",
            "invoice_no",
            "invoice_date",
            "status",
            "discount",
            "total",
            "subtotal",
            "grand_total",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


# -------------------------------------------------------------------
# Input
# -------------------------------------------------------------------

class InvoiceItemInputSerializer(serializers.Serializer):
    """One line of an invoice created together with its items."""
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    serial_no = serializers.CharField(required=False, allow_blank=True, default="")
    quantity = serializers.IntegerField(min_value=1, default=1)
    amount = serializers.DecimalField(**_money)


class InvoiceItemCreateSerializer(InvoiceItemInputSerializer):
    invoice = serializers.PrimaryKeyRelatedField(queryset=Invoice.objects.all())


class InvoiceItemUpdateSerializer(serializers.Serializer):
    invoice = serializers.PrimaryKeyRelatedField(queryset=Invoice.objects.all(), required=False)
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all(), required=False)
    serial_no = serializers.CharField(required=False, allow_blank=True)
    quantity = serializers.IntegerField(min_value=1, required=False)
    amount = serializers.DecimalField(required=False, **_money)


class InvoiceCreateSerializer(serializers.Serializer):
    customer = serializers.PrimaryKeyRelatedField(queryset=Customer.objects.all())
    location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all(), required=False, allow_null=True)
    invoice_no = serializers.CharField(max_length=64)
    invoice_date = serializers.DateField()
    discount = serializers.DecimalField(default=Decimal("0.00"), **_money)
    status = serializers.ChoiceField(choices=InvoiceStatus.choices, default=InvoiceStatus.PENDING)
    items = InvoiceItemInputSerializer(many=True, required=False, default=list)


class InvoiceUpdateSerializer(serializers.Serializer):
    customer = serializers.PrimaryKeyRelatedField(queryset=Customer.objects.all(), required=False)
    location = serializers.PrimaryKeyRelatedField(queryset=Location.objects.all(), required=False, allow_null=True)
    invoice_no = serializers.CharField(max_length=64, required=False)
    invoice_date = serializers.DateField(required=False)
    discount = serializers.DecimalField(required=False, **_money)
    status = serializers.ChoiceField(choices=InvoiceStatus.choices, required=False)
