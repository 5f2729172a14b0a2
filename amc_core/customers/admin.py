# amc_core/customers/admin.py
from __future__ import annotations

from django.contrib import admin

from amc_core.customers.models import Customer, Location


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "contact_person", "email", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("name", "email", "contact_person")
    ordering = ("-created_at",)


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("id", "display_name", "customer", "city", "state", "status")
    list_filter = ("status", "state")
    search_fields = ("display_name", "location", "email", "city", "customer__name")
    autocomplete_fields = ("customer",)
    ordering = ("-created_at",)
