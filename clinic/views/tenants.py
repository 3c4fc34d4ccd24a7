"""
Tenant scoped endpoints used by the dashboard shell.

All routes take the tenant slug from the path and require the caller
to belong to that tenant.
"""
from __future__ import annotations

import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import Tenant
from clinic.navigation import build_navigation, navigation_to_dict
from clinic.permissions import IsTenantMember
from clinic.services import subscriptions
from clinic.services.patients import list_tenant_users

logger = logging.getLogger(__name__)


def _tenant_missing(tenant: str):
    if Tenant.objects.filter(slug=tenant).exists():
        return None
    return Response({'error': 'Tenant not found'}, status=404)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTenantMember])
def subscription(request, tenant: str):
    """Return the tenant's plan tier (``planType`` is null without a subscription)."""
    missing = _tenant_missing(tenant)
    if missing:
        return missing
    try:
        payload = subscriptions.get_subscription(tenant)
    except Exception:
        logger.exception('Error in GET /api/%s/subscription', tenant)
        return Response({'error': 'Failed to fetch subscription'}, status=500)
    return Response(payload)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTenantMember])
def navigation(request, tenant: str):
    """Return the sidebar sections for the caller's role and the tenant's plan."""
    missing = _tenant_missing(tenant)
    if missing:
        return missing
    try:
        plan = subscriptions.get_plan(tenant)
    except Exception:
        logger.exception('Error in GET /api/%s/navigation', tenant)
        return Response({'error': 'Failed to build navigation'}, status=500)
    sections = build_navigation(tenant, request.user.role, plan)
    return Response({
        'role': request.user.role,
        'planType': plan.value,
        'sections': navigation_to_dict(sections),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTenantMember])
def patients(request, tenant: str):
    """List the tenant's users, newest first, without passwords."""
    missing = _tenant_missing(tenant)
    if missing:
        return missing
    try:
        users = list_tenant_users(tenant)
    except Exception:
        logger.exception('Error in GET /api/%s/patients', tenant)
        return Response({'error': 'Failed to fetch users'}, status=500)
    return Response(users)
