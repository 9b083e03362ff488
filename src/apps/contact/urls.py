"""Contact app URL configuration."""

from django.urls import path

from . import views

app_name = "contact"

urlpatterns = [
    path("contact", views.ContactSubmitView.as_view(), name="submit"),
]
