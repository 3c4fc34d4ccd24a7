"""
Database models for the clinic backend.

These models capture the tenant (a clinic or hospital using the
dashboard), its subscription plan, the staff users bound to it and the
financial records (bills and income) it owns.  Field names follow the
JSON shapes returned by the API where possible so that the views can
serialize them with little translation.
"""
from __future__ import annotations

from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.core.validators import MinValueValidator
from django.db import models

from .constants import BILL_CATEGORIES, INCOME_CATEGORIES, PLAN_CHOICES, ROLE_CHOICES


class Tenant(models.Model):
    """An isolated customer organization.

    The slug is the identifier used in URLs (``/api/<slug>/...``) and in
    navigation paths.
    """
    slug = models.SlugField(max_length=64, primary_key=True)
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.slug})"


class Subscription(models.Model):
    """The plan a tenant is subscribed to; gates some navigation entries."""
    tenant = models.OneToOneField(Tenant, on_delete=models.CASCADE, related_name='subscription')
    plan_type = models.CharField(max_length=20, choices=PLAN_CHOICES, default='starter')
    active = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.tenant_id}: {self.plan_type}"


class User(AbstractUser):
    """Custom user model with a role and a tenant binding.

    Roles mirror the dashboard roles: 'user', 'doctor', 'admin' and
    'owner'.
    """
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='user')
    tenant = models.ForeignKey(
        Tenant, null=True, blank=True, on_delete=models.SET_NULL, related_name='users', db_index=True
    )

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class FinancialRecord(models.Model):
    """Common fields of bills and income entries."""
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name='+')
    name = models.CharField(max_length=255)
    amount = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))]
    )
    date = models.DateField(db_index=True)
    category = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.name} {self.amount} ({self.date})"


class Bill(FinancialRecord):
    """A hospital expense."""
    CATEGORY_CHOICES = [(c, c) for c in BILL_CATEGORIES]

    category = models.CharField(max_length=64, choices=CATEGORY_CHOICES)

    class Meta(FinancialRecord.Meta):
        indexes = [models.Index(fields=['tenant', 'date'], name='clinic_bill_tenant_date_idx')]


class Income(FinancialRecord):
    """A revenue entry."""
    CATEGORY_CHOICES = [(c, c) for c in INCOME_CATEGORIES]

    category = models.CharField(max_length=64, choices=CATEGORY_CHOICES)

    class Meta(FinancialRecord.Meta):
        verbose_name_plural = 'income'
        indexes = [models.Index(fields=['tenant', 'date'], name='clinic_income_tenant_date_idx')]


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='clinic_audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='clinic_audit_object_idx'),
        ]
