"""
Authentication views.

Username/password login issuing both a DRF token and a JWT pair, JWT
refresh, logout, and the tenant scoped role check used by the sidebar.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsTenantMember
from clinic.serializers.auth import LoginSerializer
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """
    Login with username/password. The role always comes from the
    database; a ``tenant`` field, if sent, must match the user's tenant.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    user = authenticate(request, username=vd['username'], password=vd['password'])
    wanted_tenant = vd.get('tenant')
    if user and wanted_tenant and user.tenant_id != wanted_tenant and not user.is_superuser:
        user = None
    if not user:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'username': vd['username'], 'ip': request.META.get('REMOTE_ADDR')})
        logger.info('Failed login for %s', vd['username'])
        return Response({'error': 'Invalid username or password'}, status=400)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})

    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)

    return Response({
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'role': user.role,
        'tenant': user.tenant_id,
        'user': {
            'id': user.id,
            'username': user.username,
            'name': user.get_full_name() or user.username,
            'email': user.email,
            'role': user.role,
        },
    }, status=200)

# DRF ScopedRateThrottle uses throttle_scope on the view function
login_view.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from refresh token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError:
        return Response({'error': 'Invalid refresh token'}, status=401)
    data = dict(s.validated_data)
    data['jwt_access'] = data.pop('access')
    return Response(data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Drop the caller's DRF token and blacklist refresh tokens (one or all)."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
            count = 1
        except TokenError:
            return Response({'error': 'Invalid refresh token'}, status=400)
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    Token.objects.filter(user=request.user).delete()
    log_action(user=request.user, action='logout', object_type='user', object_id=request.user.id)
    return Response({'ok': True, 'blacklisted': count})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsTenantMember])
def verify_role(request, tenant: str):
    return Response({'role': request.user.role, 'tenant': tenant})
