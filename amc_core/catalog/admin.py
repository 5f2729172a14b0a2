# amc_core/catalog/admin.py
from __future__ import annotations

from django.contrib import admin

from amc_core.catalog.models import Brand, Category, Product


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("name",)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "model", "brand", "category", "status")
    list_filter = ("status", "brand", "category")
    search_fields = ("name", "details", "model")
    autocomplete_fields = ("brand", "category")
    ordering = ("-created_at",)
