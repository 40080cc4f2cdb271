"""
ASGI config for the art archive.

The AI endpoints are async views, so serve through an ASGI server
(e.g. uvicorn djangoconfig.asgi:application).
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "djangoconfig.settings")

application = get_asgi_application()
