"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path("validate", views.ValidateLicenseView.as_view(), name="validate-license"),
    path("verify", views.VerifyCredentialView.as_view(), name="verify-credential"),
    path("create", views.CreateLicenseView.as_view(), name="create-license"),
    path("list", views.ListLicensesView.as_view(), name="list-licenses"),
    path("activate", views.ActivateLicenseView.as_view(), name="activate-license"),
    path("deactivate", views.DeactivateLicenseView.as_view(), name="deactivate-license"),
    path("reset-hardware", views.ResetHardwareView.as_view(), name="reset-hardware"),
    path("renew", views.RenewLicenseView.as_view(), name="renew-license"),
    path("<str:license_key>", views.DeleteLicenseView.as_view(), name="delete-license"),
]
