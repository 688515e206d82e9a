"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

app_name = "admin-api"

urlpatterns = [
    path(
        "licenses/create",
        views.GenerateLicensesView.as_view(),
        name="generate-licenses",
    ),
    path(
        "licenses",
        views.ListLicensesView.as_view(),
        name="list-licenses",
    ),
    path(
        "activations",
        views.ListActivationsView.as_view(),
        name="list-activations",
    ),
]
