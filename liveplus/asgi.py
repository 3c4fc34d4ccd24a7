"""
ASGI config for the liveplus project.

HTTP only; the dashboard has no WebSocket traffic.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "liveplus.settings")

application = get_asgi_application()
