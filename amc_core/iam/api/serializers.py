# amc_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from amc_core.iam.models import AdminUser


class AdminUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminUser
        fields = [
            "id",
            "email",
            "name",
            "role",
            "status",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class LoginResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = AdminUserSerializer()


class RefreshRequestSerializer(serializers.Serializer):
    # optional: the refresh cookie is used when omitted
    refresh = serializers.CharField(required=False)


class RefreshResponseSerializer(serializers.Serializer):
    access = serializers.CharField()


class LogoutResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class MeResponseSerializer(serializers.Serializer):
    user = AdminUserSerializer()
