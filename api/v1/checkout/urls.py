"""
URL configuration for checkout API endpoints.
"""

from django.urls import path

from api.v1.checkout import views

urlpatterns = [
    path("prices", views.PricesView.as_view(), name="prices"),
    path("create-order", views.CreateOrderView.as_view(), name="create-order"),
    path("capture-order", views.CaptureOrderView.as_view(), name="capture-order"),
    path("test-purchase", views.TestPurchaseView.as_view(), name="test-purchase"),
]
