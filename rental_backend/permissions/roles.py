# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import SAFE_METHODS, BasePermission


# =========================================================
# ROLE CONSTANTS (STAFF JOB ROLES)
# =========================================================
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_RENTAL_AGENT = "rental_agent"
ROLE_CUSTOMER = "customer"

STAFF_ROLES = {
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_RENTAL_AGENT,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views should protect capabilities, not raw roles.
CAP_RENTALS_VIEW = "rentals.view"
CAP_RENTALS_EDIT = "rentals.edit"            # header fields + order lines
CAP_RENTALS_TRANSITION = "rentals.transition"  # send / confirm / cancel / print
CAP_RENTALS_DELETE = "rentals.delete"

CAP_CATALOG_EDIT = "catalog.edit"            # products + rates

CAP_ORDERS_MANAGE = "orders.manage"          # quotations, orders, contracts, reservations

CAP_REPORTS_VIEW = "reports.view"

ALL_CAPABILITIES = {
    CAP_RENTALS_VIEW,
    CAP_RENTALS_EDIT,
    CAP_RENTALS_TRANSITION,
    CAP_RENTALS_DELETE,
    CAP_CATALOG_EDIT,
    CAP_ORDERS_MANAGE,
    CAP_REPORTS_VIEW,
}


# =========================================================
# ROLE → CAPABILITY MAP (DEFAULT)
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_MANAGER: {
        CAP_RENTALS_VIEW,
        CAP_RENTALS_EDIT,
        CAP_RENTALS_TRANSITION,
        CAP_RENTALS_DELETE,
        CAP_CATALOG_EDIT,
        CAP_ORDERS_MANAGE,
        CAP_REPORTS_VIEW,
    },
    ROLE_RENTAL_AGENT: {
        CAP_RENTALS_VIEW,
        CAP_RENTALS_EDIT,
        CAP_RENTALS_TRANSITION,
        CAP_ORDERS_MANAGE,
        # deliberately NOT delete / catalog edit / reports
    },
    ROLE_CUSTOMER: set(),
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def effective_capabilities_for(user) -> set[str]:
    if getattr(user, "is_superuser", False):
        return set(ALL_CAPABILITIES)
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def _is_authenticated(user) -> bool:
    return bool(user and user.is_authenticated)


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_REPORTS_VIEW
    """

    def has_permission(self, request, view):
        user = request.user
        if not _is_authenticated(user):
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # If not set, deny-by-default to avoid accidental open endpoints
            return False

        return required in effective_capabilities_for(user)


class HasActionCapability(BasePermission):
    """
    Per-action capability for viewsets.

    Usage:
        view.action_capabilities = {
            "default": CAP_RENTALS_VIEW,
            "perform_action": CAP_RENTALS_TRANSITION,
        }

    A "<action>:<method>" key (e.g. "order_lines:post") wins over the
    plain action key. Unknown actions fall back to "default"; no default means deny.
    """

    def has_permission(self, request, view):
        user = request.user
        if not _is_authenticated(user):
            return False

        mapping = getattr(view, "action_capabilities", None) or {}
        action_name = getattr(view, "action", None)
        method = (request.method or "").lower()
        required = (
            mapping.get(f"{action_name}:{method}")
            or mapping.get(action_name)
            or mapping.get("default")
        )
        if not required:
            return False

        return required in effective_capabilities_for(user)


class HasCapabilityOrReadOnly(HasCapability):
    """
    Any authenticated user may read; writes require view.required_capability.
    """

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return _is_authenticated(request.user)
        return super().has_permission(request, view)

