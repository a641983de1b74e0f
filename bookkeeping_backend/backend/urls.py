# backend/urls.py
"""
PROJECT URLS

Everything public lives under /api/:

- /api/              index of the API surface (AllowAny)
- /api/health/       DB round-trip + whether ledger lock timeouts are enforced
- /api/schema/       OpenAPI, /api/docs/ Swagger UI
- /api/auth/...      SimpleJWT token pair + current user
- /api/ledger/...    cash accounts, transactions, invoices, clients (tenant-scoped)

The Django admin mount point comes from ADMIN_PATH.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import admin
from django.db import connection
from django.db.utils import OperationalError
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

logger = logging.getLogger(__name__)

LEDGER_ROUTES = {
    "cash_accounts": "/api/ledger/cash-accounts/",
    "transactions": "/api/ledger/transactions/",
    "invoices": "/api/ledger/invoices/",
    "update_overdue": "/api/ledger/invoices/update-overdue/",
    "clients": "/api/ledger/clients/",
}


@extend_schema(responses={200: {"type": "object"}})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_index(request):
    return Response(
        {
            "service": settings.SPECTACULAR_SETTINGS["TITLE"],
            "version": settings.SPECTACULAR_SETTINGS["VERSION"],
            "auth": {
                "token": "/api/auth/jwt/create/",
                "refresh": "/api/auth/jwt/refresh/",
                "me": "/api/auth/me/",
            },
            "docs": "/api/docs/",
            "ledger": LEDGER_ROUTES,
        }
    )


@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "db": {"type": "string"},
                "lock_timeouts": {"type": "boolean"},
            },
        },
        503: {"type": "object"},
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    Liveness for load balancers.

    lock_timeouts is false on non-PostgreSQL databases: there the ledger's
    units of work run without SET LOCAL lock/statement timeouts.
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except OperationalError as exc:
        logger.warning("Health check: database unreachable", extra={"error": str(exc)})
        return Response({"status": "degraded", "db": "down"}, status=503)

    return Response(
        {
            "status": "ok",
            "db": connection.vendor,
            "lock_timeouts": connection.vendor == "postgresql",
        }
    )


def _admin_prefix() -> str:
    prefix = getattr(settings, "ADMIN_PATH", "admin/") or "admin/"
    return prefix if prefix.endswith("/") else f"{prefix}/"


api_urlpatterns = [
    path("", api_index, name="api-index"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("auth/", include("users.urls")),
    path("ledger/", include("ledger.api.urls")),
]

urlpatterns = [
    path(_admin_prefix(), admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
