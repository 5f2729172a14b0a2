# amc_core/billing/admin.py
from __future__ import annotations

from django.contrib import admin

from amc_core.billing.models import Invoice, InvoiceItem


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    # totals are kept by the API services, not by admin saves
    readonly_fields = ("product", "serial_no", "quantity", "amount")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ("id", "invoice_no", "invoice_date", "customer", "status", "grand_total", "created_at")
    list_filter = ("status", "invoice_date")
    search_fields = ("invoice_no", "customer__name")
    autocomplete_fields = ("customer", "location")
    readonly_fields = ("discount", "total", "subtotal", "grand_total")
    inlines = [InvoiceItemInline]
    ordering = ("-created_at",)
