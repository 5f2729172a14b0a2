# amc_core/proposals/admin.py
from __future__ import annotations

from django.contrib import admin

from amc_core.proposals.models import AmcProposal, EmailRecord, ProposalDocument


@admin.register(AmcProposal)
class AmcProposalAdmin(admin.ModelAdmin):
    list_display = ("id", "proposalno", "proposaldate", "customer", "proposal_status", "grand_total")
    list_filter = ("proposal_status",)
    search_fields = ("proposalno", "contract_no", "customer__name")
    autocomplete_fields = ("customer",)
    readonly_fields = ("additional_charge", "discount", "tax_rate", "total", "tax_amount", "grand_total", "doclink")
    ordering = ("-created_at",)


@admin.register(ProposalDocument)
class ProposalDocumentAdmin(admin.ModelAdmin):
    list_display = ("id", "proposalno", "doclink", "created_by", "created_at")
    search_fields = ("proposalno",)


@admin.register(EmailRecord)
class EmailRecordAdmin(admin.ModelAdmin):
    list_display = ("id", "proposalno", "email", "status", "sent_by", "created_at")
    list_filter = ("status",)
    search_fields = ("proposalno", "email")
