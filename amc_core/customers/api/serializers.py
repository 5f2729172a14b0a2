# amc_core/customers/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from amc_core.customers.models import Customer, Location


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "details",
            "contact_person",
            "email",
            "address",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class LocationSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True, allow_null=True)

    class Meta:
        model = Location
        fields = [
            "id",
            "customer",
            "customer_name",
            "display_name",
            "location",
            "contact_person",
            "email",
            "phone1",
            "phone2",
            "address",
            "city",
            "state",
            "pin",
            "gstin",
            "pan",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "customer_name", "created_at", "updated_at"]
