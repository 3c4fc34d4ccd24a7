"""
Tenant subscription lookups.

The plan tier is read on every sidebar load, so it is cached per tenant
in the default cache and dropped whenever the subscription changes (see
``clinic.signals``).
"""
from __future__ import annotations

from typing import Optional

from django.conf import settings
from django.core.cache import cache

from clinic.constants import Plan
from clinic.models import Subscription

# Tenants without a subscription record get the full menu
DEFAULT_PLAN = Plan.PLUS


def cache_key(tenant_slug: str) -> str:
    return f'subscription:{tenant_slug}'


def subscription_payload(tenant_slug: str) -> dict:
    sub = Subscription.objects.filter(tenant_id=tenant_slug).first()
    return {
        'tenant': tenant_slug,
        'planType': sub.plan_type if sub else None,
        'active': sub.active if sub else False,
    }


def get_subscription(tenant_slug: str) -> dict:
    payload = cache.get(cache_key(tenant_slug))
    if payload is None:
        payload = subscription_payload(tenant_slug)
        cache.set(cache_key(tenant_slug), payload, settings.SUBSCRIPTION_CACHE_TTL)
    return payload


def get_plan(tenant_slug: str) -> Plan:
    plan_type: Optional[str] = get_subscription(tenant_slug)['planType']
    if not plan_type:
        return DEFAULT_PLAN
    return Plan.coerce(plan_type)


def invalidate(tenant_slug: str) -> None:
    cache.delete(cache_key(tenant_slug))
