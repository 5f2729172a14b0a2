# amc_core/mailing/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from amc_core.mailing.models import MailSetup


class MailSetupSerializer(serializers.ModelSerializer):
    smtp_password = serializers.CharField(write_only=True, required=False, allow_blank=True)
    has_password = serializers.SerializerMethodField()

    class Meta:
        model = MailSetup
        fields = [
            "id",
            "smtp_host",
            "smtp_port",
            "smtp_user",
            "smtp_password",
            "has_password",
            "enable_ssl",
            "sender_name",
            "sender_email",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "has_password", "created_at", "updated_at"]

    def get_has_password(self, obj: MailSetup) -> bool:
        return bool(obj.smtp_password)
