"""
URL configuration for DeviceLicenseService project.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from core.views import HealthDBView, HealthView, ReadyView

urlpatterns = [
    path("admin/", admin.site.urls),
    # Health check endpoints
    path("health/", HealthView.as_view(), name="health"),
    path("health/db/", HealthDBView.as_view(), name="health-db"),
    path("ready/", ReadyView.as_view(), name="ready"),
    # API endpoints
    path("api/v1/auth/", include(("api.v1.auth.urls", "auth"), namespace="auth")),
    path("api/v1/license/", include(("api.v1.license.urls", "license"), namespace="license")),
    path("api/v1/checkout/", include(("api.v1.checkout.urls", "checkout"), namespace="checkout")),
    path("api/v1/orders/", include(("api.v1.orders.urls", "orders"), namespace="orders")),
    # OpenAPI Schema
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path(
        "api/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]
