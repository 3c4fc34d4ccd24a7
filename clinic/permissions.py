"""
Custom permission classes for role and tenant based access control.
"""
from rest_framework.permissions import BasePermission

from .constants import FINANCE_ROLES


class IsFinanceRole(BasePermission):
    """Allow access only to tenant administrators and owners."""
    message = 'Only administrators and owners may manage financial records'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in FINANCE_ROLES)


class HasTenant(BasePermission):
    """The caller must be bound to a tenant."""
    message = 'User is not bound to a tenant'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "tenant_id", None))


class IsTenantMember(BasePermission):
    """User must belong to the tenant named in the URL (``tenant`` kwarg)."""
    message = 'Forbidden for this tenant'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if user.is_superuser:
            return True
        tenant = getattr(view, 'kwargs', {}).get('tenant')
        return bool(tenant) and getattr(user, "tenant_id", None) == tenant
