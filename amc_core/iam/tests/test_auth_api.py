# amc_core/iam/tests/test_auth_api.py
import pytest
from django.core.management import CommandError, call_command
from rest_framework.test import APIClient

from amc_core.common.models import RecordStatus
from amc_core.iam.models import AdminRole, AdminUser

pytestmark = pytest.mark.django_db


def _login(client, email="staff@example.com", password="testpass"):
    return client.post("/api/v1/auth/login/", {"email": email, "password": password}, format="json")


def test_login_returns_tokens_and_sets_cookies(staff_user):
    c = APIClient()
    resp = _login(c)

    assert resp.status_code == 200
    assert resp.data["access"]
    assert resp.data["refresh"]
    assert resp.data["user"]["email"] == "staff@example.com"
    assert resp.data["user"]["role"] == "staff"
    assert resp.cookies["amc_access"]["httponly"]
    assert "amc_refresh" in resp.cookies

    staff_user.refresh_from_db()
    assert staff_user.last_login is not None


def test_cookie_authenticates_follow_up_requests(staff_user):
    c = APIClient()
    _login(c)

    resp = c.get("/api/v1/me/")

    assert resp.status_code == 200
    assert resp.data["user"]["email"] == "staff@example.com"


def test_bearer_header_authenticates(staff_user):
    access = _login(APIClient()).data["access"]
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

    assert c.get("/api/v1/me/").status_code == 200


def test_wrong_password_is_401(staff_user):
    resp = _login(APIClient(), password="nope")

    assert resp.status_code == 401
    assert resp.data["error"]["message"] == "Invalid email or password."
    assert resp.data["error"]["code"] == "authentication_failed"
    assert resp["WWW-Authenticate"] == 'Bearer realm="api"'


def test_unknown_email_is_401(db):
    assert _login(APIClient(), email="ghost@example.com").status_code == 401


def test_inactive_account_is_403(staff_user):
    staff_user.status = RecordStatus.INACTIVE
    staff_user.save()

    resp = _login(APIClient())

    assert resp.status_code == 403
    assert resp.data["error"]["code"] == "permission_denied"


def test_deactivated_account_token_stops_working(staff_user):
    access = _login(APIClient()).data["access"]
    AdminUser.objects.filter(pk=staff_user.pk).update(status=RecordStatus.INACTIVE)
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

    assert c.get("/api/v1/me/").status_code == 401


def test_refresh_from_cookie(staff_user):
    c = APIClient()
    _login(c)

    resp = c.post("/api/v1/auth/refresh/", {}, format="json")

    assert resp.status_code == 200
    assert resp.data["access"]


def test_refresh_without_token_is_401(db):
    resp = APIClient().post("/api/v1/auth/refresh/", {}, format="json")

    assert resp.status_code == 401
    assert resp.data["error"]["code"] == "not_authenticated"


def test_refresh_with_garbage_token_is_401(db):
    resp = APIClient().post("/api/v1/auth/refresh/", {"refresh": "not-a-jwt"}, format="json")

    assert resp.status_code == 401


def test_stale_access_cookie_does_not_block_login(staff_user):
    c = APIClient()
    c.cookies["amc_access"] = "expired-or-garbage"

    assert _login(c).status_code == 200


def test_logout_clears_cookies(staff_user):
    c = APIClient()
    _login(c)

    resp = c.post("/api/v1/auth/logout/")

    assert resp.status_code == 200
    assert resp.cookies["amc_access"].value == ""
    assert resp.cookies["amc_refresh"].value == ""


def test_me_requires_auth(db):
    assert APIClient().get("/api/v1/me/").status_code == 401


def test_health_is_public(db):
    resp = APIClient().get("/api/v1/health/")

    assert resp.status_code == 200
    assert resp.data["status"] == "ok"


def test_ensure_admin_creates_then_updates(capsys):
    call_command("ensure_admin", email="root@example.com", password="first-pass", name="Root")
    user = AdminUser.objects.get(email="root@example.com")
    assert user.role == AdminRole.ADMIN
    assert user.is_superuser

    user.status = RecordStatus.INACTIVE
    user.save()
    call_command("ensure_admin", email="root@example.com", password="second-pass")

    user.refresh_from_db()
    assert user.is_active
    assert user.check_password("second-pass")
    assert AdminUser.objects.filter(email="root@example.com").count() == 1
    assert "updated" in capsys.readouterr().out


def test_ensure_admin_needs_credentials(monkeypatch):
    monkeypatch.delenv("ADMIN_EMAIL", raising=False)
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)

    with pytest.raises(CommandError):
        call_command("ensure_admin", email="", password="")
