# amc_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from amc_core.iam.models import AdminUser


@admin.register(AdminUser)
class AdminUserAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "name", "role", "status", "last_login", "created_at")
    list_filter = ("role", "status")
    search_fields = ("email", "name")
    exclude = ("password", "groups", "user_permissions")
    readonly_fields = ("last_login",)
    ordering = ("-created_at",)
