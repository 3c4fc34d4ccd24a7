from typing import Optional, Any, Dict
from django.contrib.auth import get_user_model
from clinic.models import AuditEvent

User = get_user_model()

def log_action(*, user: Optional[User], action: str, record=None, object_type: Optional[str]=None,
               object_id: Optional[int]=None, detail: Optional[Dict[str, Any]]=None) -> AuditEvent:
    """Persist an audit event; ``record`` fills in the object type and id."""
    if record is not None:
        object_type = object_type or record._meta.model_name
        object_id = object_id if object_id is not None else record.pk
    return AuditEvent.objects.create(
        user=user if getattr(user, 'is_authenticated', False) else None,
        action=action,
        object_type=object_type, object_id=object_id,
        detail=detail or {},
    )
