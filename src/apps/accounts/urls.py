"""Admin API URL configuration."""

from django.urls import path

from . import views

app_name = "accounts"

urlpatterns = [
    path("login", views.AdminLoginView.as_view(), name="login"),
    path("contacts", views.AdminContactsView.as_view(), name="contacts"),
]
