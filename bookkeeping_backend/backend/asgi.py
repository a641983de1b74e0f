# backend/asgi.py
"""
ASGI entry point for the bookkeeping API (uvicorn / daphne).

Same settings rule as wsgi.py: production exports backend.settings.prod.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_asgi_application()
