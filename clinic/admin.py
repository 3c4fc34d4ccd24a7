"""
Django admin registrations for the clinic models.

Superusers can inspect tenants, subscriptions, staff and financial
records through ``/admin/``.
"""

from django.contrib import admin

from .models import AuditEvent, Bill, Income, Subscription, Tenant, User


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ('slug', 'name', 'created_at')
    search_fields = ('slug', 'name')


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ('tenant', 'plan_type', 'active', 'updated_at')
    list_filter = ('plan_type', 'active')


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'tenant', 'is_staff', 'is_superuser')
    list_filter = ('role', 'tenant')
    search_fields = ('username', 'first_name', 'last_name', 'email')
    exclude = ('password',)


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ('name', 'amount', 'date', 'category', 'tenant')
    list_filter = ('category', 'tenant')
    search_fields = ('name',)
    date_hierarchy = 'date'


@admin.register(Income)
class IncomeAdmin(admin.ModelAdmin):
    list_display = ('name', 'amount', 'date', 'category', 'tenant')
    list_filter = ('category', 'tenant')
    search_fields = ('name',)
    date_hierarchy = 'date'


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'object_type', 'object_id', 'user', 'created_at')
    list_filter = ('action', 'object_type')
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
