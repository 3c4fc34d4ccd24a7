"""
URL mappings for the clinic API.

Paths mirror the ones the dashboard front-end calls.  Trailing slashes
are deliberately omitted (``APPEND_SLASH`` is off).
"""
from django.urls import path, include

from .views import health
from .views.auth import login_view, jwt_refresh_view, logout_view, verify_role
from .views.finance import bills, bill_detail, income, income_detail, finance_summary
from .views.tenants import subscription, navigation, patients


urlpatterns = [
    path('', include('django_prometheus.urls')),  # /metrics
    path('healthz', health.healthz),
    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    # Financial records
    path('api/bills', bills, name='bills'),
    path('api/bills/<int:pk>', bill_detail, name='bill_detail'),
    path('api/income', income, name='income'),
    path('api/income/<int:pk>', income_detail, name='income_detail'),
    path('api/finance/summary', finance_summary, name='finance_summary'),
    # Tenant scoped
    path('api/<slug:tenant>/auth/verify-role', verify_role, name='verify_role'),
    path('api/<slug:tenant>/subscription', subscription, name='subscription'),
    path('api/<slug:tenant>/navigation', navigation, name='navigation'),
    path('api/<slug:tenant>/patients', patients, name='patients'),
]
