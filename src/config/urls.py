"""
URL configuration for the cyber portfolio API.
"""

from django.urls import include, path

urlpatterns = [
    path("api/", include("apps.core.urls")),
    path("api/", include("apps.contact.urls")),
    path("api/admin/", include("apps.accounts.urls")),
]

handler400 = "apps.core.views.bad_request"
handler404 = "apps.core.views.not_found"
handler500 = "apps.core.views.server_error"
