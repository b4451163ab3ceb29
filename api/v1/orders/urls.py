"""
URL configuration for orders API endpoints.
"""

from django.urls import path

from api.v1.orders import views

urlpatterns = [
    path("", views.ListOrdersView.as_view(), name="list-orders"),
    path("<str:order_id>", views.OrderDetailView.as_view(), name="order-detail"),
]
