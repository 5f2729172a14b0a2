# amc_core/iam/services.py
from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied
from rest_framework_simplejwt.tokens import RefreshToken

from amc_core.common.models import RecordStatus
from amc_core.iam.models import AdminRole

logger = logging.getLogger(__name__)


class AuthService:
    @staticmethod
    def login(*, email: str, password: str) -> dict:
        """
        Verify credentials and issue a JWT pair.

        Wrong email/password -> 401 authentication_failed.
        Known but inactive account -> 403 permission_denied.
        """
        User = get_user_model()
        user = User.objects.filter(email__iexact=(email or "").strip()).first()

        if user is None or not user.check_password(password):
            logger.info("Failed login for %s", email)
            raise AuthenticationFailed("Invalid email or password.")

        if not user.is_active:
            raise PermissionDenied("Account is not active.")

        refresh = RefreshToken.for_user(user)
        update_last_login(None, user)

        return {
            "user": user,
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        }


class AdminUserService:
    @staticmethod
    def ensure_admin(*, email: str, password: str, name: str = "") -> tuple[object, bool]:
        """
        Create or refresh the bootstrap admin (idempotent).
        Returns (user, created).
        """
        User = get_user_model()
        email = User.objects.normalize_email(email)

        user = User.objects.filter(email__iexact=email).first()
        created = user is None

        if created:
            user = User.objects.create_superuser(email=email, password=password, name=name)
            return user, True

        user.role = AdminRole.ADMIN
        user.status = RecordStatus.ACTIVE
        user.is_superuser = True
        if name:
            user.name = name
        user.set_password(password)
        user.save()
        return user, False
