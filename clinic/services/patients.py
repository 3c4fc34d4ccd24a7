from django.contrib.auth import get_user_model

User = get_user_model()


def serialize_user(user) -> dict:
    # never include the password hash
    return {
        'id': user.id,
        'username': user.username,
        'name': user.get_full_name() or user.username,
        'email': user.email,
        'role': user.role,
        'tenant': user.tenant_id,
        'isActive': user.is_active,
        'createdAt': user.date_joined.isoformat() if user.date_joined else None,
    }


def list_tenant_users(tenant_slug: str) -> list[dict]:
    qs = User.objects.filter(tenant_id=tenant_slug).defer('password').order_by('-date_joined', '-id')
    return [serialize_user(u) for u in qs]
