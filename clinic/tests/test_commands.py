from io import StringIO

import pytest
from django.core.cache import cache
from django.core.management import call_command
from django.core.management.base import CommandError

from clinic.constants import BILL_CATEGORIES, INCOME_CATEGORIES
from clinic.models import Bill, Income, Subscription, User
from clinic.services import subscriptions

pytestmark = pytest.mark.django_db


def test_ensure_test_users_is_idempotent():
    call_command('ensure_test_users', '--tenant', 'demo', '--plan', 'starter', stdout=StringIO())
    call_command('ensure_test_users', '--tenant', 'demo', '--plan', 'starter', stdout=StringIO())
    assert User.objects.filter(tenant_id='demo').count() == 4
    assert set(User.objects.values_list('role', flat=True)) == {'owner', 'admin', 'doctor', 'user'}
    assert Subscription.objects.get(tenant_id='demo').plan_type == 'starter'
    assert User.objects.get(username='owner1').check_password('P@ssw0rd1')


def test_populate_data_covers_every_category():
    call_command('ensure_test_users', stdout=StringIO())
    out = StringIO()
    call_command('populate_data', '--tenant', 'demo', '--seed', '7', stdout=out)
    assert set(Bill.objects.values_list('category', flat=True)) == set(BILL_CATEGORIES)
    assert set(Income.objects.values_list('category', flat=True)) == set(INCOME_CATEGORIES)
    assert Income.objects.count() == 2 * len(INCOME_CATEGORIES)
    assert 'Created' in out.getvalue()


def test_populate_data_needs_tenant():
    with pytest.raises(CommandError):
        call_command('populate_data', '--tenant', 'missing', stdout=StringIO())


def test_refresh_caches_warms_subscription(tenant):
    cache.set(subscriptions.cache_key('acme'), {'tenant': 'acme', 'planType': 'stale', 'active': True})
    call_command('refresh_caches', stdout=StringIO())
    assert cache.get(subscriptions.cache_key('acme'))['planType'] == 'plus'
