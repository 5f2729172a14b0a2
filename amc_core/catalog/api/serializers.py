# amc_core/catalog/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from amc_core.catalog.models import Brand, Category, Product


class BrandSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ["id", "name", "details", "status", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "details", "status", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class ProductSerializer(serializers.ModelSerializer):
    brand_name = serializers.CharField(source="brand.name", read_only=True, allow_null=True)
    category_name = serializers.CharField(source="category.name", read_only=True, allow_null=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "details",
            "model",
            "brand",
            "brand_name",
            "category",
            "category_name",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "brand_name", "category_name", "created_at", "updated_at"]
