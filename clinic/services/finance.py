"""
Bill and income record operations.

Both record types share one shape, so every helper takes the model
class.  All queries are scoped to a tenant; a record of another tenant
is treated exactly like a missing one.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import Sum

from clinic.models import Bill, Income, Tenant
from clinic.services.audit import log_action


def serialize_record(record) -> dict:
    return {
        'id': record.id,
        'name': record.name,
        'amount': float(record.amount),
        'date': record.date.isoformat(),
        'category': record.category,
        'createdAt': record.created_at.isoformat() if record.created_at else None,
        'updatedAt': record.updated_at.isoformat() if record.updated_at else None,
    }


def list_records(model, tenant: Tenant) -> list[dict]:
    qs = model.objects.filter(tenant=tenant).order_by('-created_at', '-id')
    return [serialize_record(r) for r in qs]


def get_record(model, tenant: Tenant, pk) -> Optional[object]:
    return model.objects.filter(tenant=tenant, pk=pk).first()


def create_record(model, tenant: Tenant, user, data: dict):
    with transaction.atomic():
        record = model.objects.create(tenant=tenant, **data)
        log_action(user=user, action=f'{model._meta.model_name}.create', record=record,
                   detail={'amount': str(record.amount), 'category': record.category})
    return record


def update_record(record, user, data: dict):
    with transaction.atomic():
        for field, value in data.items():
            setattr(record, field, value)
        record.save()
        log_action(user=user, action=f'{record._meta.model_name}.update', record=record,
                   detail={'fields': sorted(data)})
    return record


def delete_record(record, user) -> None:
    with transaction.atomic():
        log_action(user=user, action=f'{record._meta.model_name}.delete', record=record,
                   detail={'name': record.name, 'amount': str(record.amount)})
        record.delete()


def _totals(model, tenant: Tenant, month: Optional[int], year: Optional[int]) -> dict:
    qs = model.objects.filter(tenant=tenant)
    if month:
        qs = qs.filter(date__month=month)
    if year:
        qs = qs.filter(date__year=year)
    by_category = {
        row['category']: float(row['total'])
        for row in qs.values('category').annotate(total=Sum('amount')).order_by('category')
    }
    total = qs.aggregate(total=Sum('amount'))['total'] or Decimal('0')
    return {'total': float(total), 'count': qs.count(), 'byCategory': by_category}


def summarize(tenant: Tenant, month: Optional[int] = None, year: Optional[int] = None) -> dict:
    """Income against expenses for a tenant, optionally for one month/year."""
    income = _totals(Income, tenant, month, year)
    expenses = _totals(Bill, tenant, month, year)
    return {
        'month': month,
        'year': year,
        'income': income,
        'expenses': expenses,
        'balance': round(income['total'] - expenses['total'], 2),
    }
