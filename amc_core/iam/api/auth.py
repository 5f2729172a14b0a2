# amc_core/iam/api/auth.py

from __future__ import annotations

from datetime import timedelta
from typing import Any

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer

from amc_core.iam.api.serializers import (
    AdminUserSerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    LogoutResponseSerializer,
    RefreshRequestSerializer,
    RefreshResponseSerializer,
)
from amc_core.iam.services import AuthService


def _seconds(value: Any) -> int:
    """
    Convert a JWT lifetime setting into seconds.
    Supports timedelta OR int/float (already seconds).
    """
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    try:
        return int(value)
    except (TypeError, ValueError):
        # 0 means "session cookie"
        return 0


def _cookie_names() -> tuple[str, str]:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    return (
        jwt_cfg.get("AUTH_COOKIE", "amc_access"),
        jwt_cfg.get("AUTH_COOKIE_REFRESH", "amc_refresh"),
    )


def _set_auth_cookies(response: Response, *, access: str, refresh: str | None = None) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    access_name, refresh_name = _cookie_names()

    secure = bool(jwt_cfg.get("AUTH_COOKIE_SECURE", False))
    samesite = jwt_cfg.get("AUTH_COOKIE_SAMESITE", "Lax")

    response.set_cookie(
        access_name,
        access,
        max_age=_seconds(jwt_cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(minutes=60))),
        httponly=True,
        secure=secure,
        samesite=samesite,
        path="/",
    )
    if refresh:
        response.set_cookie(
            refresh_name,
            refresh,
            max_age=_seconds(jwt_cfg.get("REFRESH_TOKEN_LIFETIME", timedelta(days=7))),
            httponly=True,
            secure=secure,
            samesite=samesite,
            path="/",
        )


def _clear_auth_cookies(response: Response) -> None:
    access_name, refresh_name = _cookie_names()
    response.delete_cookie(access_name, path="/")
    response.delete_cookie(refresh_name, path="/")


class _TokenEndpoint(APIView):
    """
    Login/refresh run without authenticators so a stale access cookie
    cannot block them. Credential failures must still answer 401, which
    DRF only does when a WWW-Authenticate value is available.
    """
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def get_authenticate_header(self, request):
        return 'Bearer realm="api"'


class LoginView(_TokenEndpoint):
    @extend_schema(
        request=LoginRequestSerializer,
        responses={200: LoginResponseSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        ser = LoginRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = AuthService.login(
            email=ser.validated_data["email"],
            password=ser.validated_data["password"],
        )

        res = Response(
            {
                "access": result["access"],
                "refresh": result["refresh"],
                "user": AdminUserSerializer(result["user"]).data,
            },
            status=status.HTTP_200_OK,
        )
        _set_auth_cookies(res, access=result["access"], refresh=result["refresh"])
        return res


class RefreshView(_TokenEndpoint):
    @extend_schema(
        request=RefreshRequestSerializer,
        responses={200: RefreshResponseSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        _, refresh_cookie_name = _cookie_names()
        refresh = request.data.get("refresh") or request.COOKIES.get(refresh_cookie_name)
        if not refresh:
            raise NotAuthenticated("Refresh token missing.")

        serializer = TokenRefreshSerializer(data={"refresh": refresh})
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as exc:
            raise InvalidToken(exc.args[0])

        access = serializer.validated_data["access"]
        new_refresh = serializer.validated_data.get("refresh")

        res = Response({"access": access}, status=status.HTTP_200_OK)
        _set_auth_cookies(res, access=access, refresh=new_refresh)
        return res


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=None,
        responses={200: LogoutResponseSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        res = Response({"detail": "logged out"}, status=status.HTTP_200_OK)
        _clear_auth_cookies(res)
        return res
