# amc_core/common/permissions.py

from __future__ import annotations

from typing import Set

from rest_framework.permissions import SAFE_METHODS, BasePermission

ROLE_ADMIN = "admin"
ROLE_STAFF = "staff"
ROLE_READONLY = "readonly"

ALL_ROLES = {ROLE_ADMIN, ROLE_STAFF, ROLE_READONLY}
WRITERS = {ROLE_ADMIN, ROLE_STAFF}


def _user_roles(user) -> Set[str]:
    """
    Resolve roles for an authenticated admin-panel user.

    - Superuser is treated as admin.
    - AdminUser.role is the primary source.
    - Authenticated users without a role can still read.
    """
    roles: Set[str] = set()

    if not user or not getattr(user, "is_authenticated", False):
        return roles

    if getattr(user, "is_superuser", False):
        roles.add(ROLE_ADMIN)
        return roles

    role = getattr(user, "role", None)
    if role:
        roles.add(str(role))

    if not roles:
        roles.add(ROLE_READONLY)

    return roles


class BaseRolePermission(BasePermission):
    """
    Role-based access control per viewset action.

    - Requires an authenticated, active user.
    - ADMIN bypass.
    - SAFE methods are checked as list/retrieve; unknown write actions
      are denied.
    """
    message = "You do not have permission to perform this action."

    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": WRITERS,
        "update": WRITERS,
        "partial_update": WRITERS,
        "destroy": WRITERS,
    }

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False
        if not getattr(user, "is_active", False):
            return False

        roles = _user_roles(user)

        if ROLE_ADMIN in roles:
            return True

        action = self._infer_action(request, view)

        # GET on custom actions (e.g. /invoices/1/items/) is a read
        if request.method in SAFE_METHODS and action not in ("list", "retrieve"):
            kwargs = getattr(view, "kwargs", {}) or {}
            action = "retrieve" if ("pk" in kwargs or "id" in kwargs) else "list"

        allowed = self.allowed_roles_per_action.get(action)
        if allowed is not None:
            return bool(roles & allowed)

        return False

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


class MasterDataPermission(BaseRolePermission):
    """Customers, sites, brands, categories, products"""


class InvoicePermission(BaseRolePermission):
    """Permissions for invoices and their items"""
    allowed_roles_per_action = {
        **BaseRolePermission.allowed_roles_per_action,
        "items": WRITERS,
    }


class ProposalPermission(BaseRolePermission):
    """Permissions for AMC proposals, their items and document/email actions"""
    allowed_roles_per_action = {
        **BaseRolePermission.allowed_roles_per_action,
        "items": WRITERS,
        "generate_document": WRITERS,
        "send_email": WRITERS,
    }


class MailSetupPermission(BaseRolePermission):
    """SMTP settings: everyone reads, only ADMIN writes"""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": set(),
        "update": set(),
        "partial_update": set(),
        "destroy": set(),
    }
