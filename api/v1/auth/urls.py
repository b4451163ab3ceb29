"""
URL configuration for admin authentication endpoints.
"""

from django.urls import path

from api.v1.auth import views

urlpatterns = [
    path("login", views.LoginView.as_view(), name="login"),
]
