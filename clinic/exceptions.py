import logging

from rest_framework.exceptions import ValidationError
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = 'Internal server error'


def _first_message(data) -> str:
    """Flatten DRF error payloads (dicts/lists of messages) into one string."""
    if isinstance(data, dict):
        if 'detail' in data:
            return _first_message(data['detail'])
        for field, value in data.items():
            msg = _first_message(value)
            if field == 'non_field_errors':
                return msg
            return f'{field}: {msg}'
        return ''
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ''
    return str(data)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.exception('Unhandled error on %s', getattr(request, 'path', '?'))
        return Response({'error': GENERIC_SERVER_ERROR}, status=500)
    message = _first_message(resp.data)
    if isinstance(exc, ValidationError) and not message:
        message = 'Invalid input'
    return Response({'error': message}, status=resp.status_code, headers=_passthrough_headers(resp))


def _passthrough_headers(resp) -> dict:
    # keep WWW-Authenticate and Retry-After set by DRF
    return {k: v for k, v in resp.items() if k in ('WWW-Authenticate', 'Retry-After')}
