# backend/urls.py
"""
PROJECT URLS

Everything API-facing is mounted under /api/:
- auth/           registration, login, JWT, profile
- products/       catalog (stock is read-only here)
- shops/          seller shops and wallet balance
- orders/         checkout, fulfilment, refunds, cancellation
- notifications/  in-app inbox

The admin site sits on ADMIN_PATH (configurable, trailing slash enforced).
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.db import connections
from django.db.utils import OperationalError
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema, inline_serializer
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

API_MODULES = ("auth", "products", "shops", "orders", "notifications")


def _admin_path() -> str:
    value = getattr(settings, "ADMIN_PATH", "admin/") or "admin/"
    return value if value.endswith("/") else f"{value}/"


@extend_schema(
    responses=inline_serializer(
        name="ApiIndex",
        fields={
            "message": serializers.CharField(),
            "docs": serializers.DictField(child=serializers.CharField()),
            "modules": serializers.DictField(child=serializers.CharField()),
        },
    ),
)
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Marketplace Backend API is running",
            "docs": {"swagger": "/api/docs/", "schema": "/api/schema/"},
            "modules": {name: f"/api/{name}/" for name in API_MODULES},
        }
    )


@extend_schema(
    responses={
        200: inline_serializer(
            name="Health",
            fields={
                "status": serializers.CharField(),
                "db": serializers.CharField(),
                "order_emails": serializers.BooleanField(),
            },
        ),
        503: inline_serializer(
            name="HealthDegraded",
            fields={
                "status": serializers.CharField(),
                "db": serializers.CharField(),
                "error": serializers.CharField(),
            },
        ),
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """DB round-trip plus the transactional email toggle."""
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except OperationalError as exc:
        return Response({"status": "degraded", "db": "down", "error": str(exc)}, status=503)

    emails = bool(getattr(settings, "MARKETPLACE", {}).get("ORDER_EMAILS_ENABLED", True))
    return Response({"status": "ok", "db": "ok", "order_emails": emails})


api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/", include("users.urls")),
    path("products/", include("products.urls")),
    path("shops/", include("shops.urls")),
    path("orders/", include("orders.urls")),
    path("notifications/", include("notifications.urls")),
]

urlpatterns = [
    path(_admin_path(), admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
