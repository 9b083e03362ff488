"""Core app views: health check and JSON error fallbacks."""

import logging

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views import View

logger = logging.getLogger(__name__)


class HealthView(View):
    """Report that the API process is up."""

    async def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse(
            {
                "status": "OK",
                "message": "Cyber Portfolio API is running",
                "timestamp": timezone.now().isoformat(),
                "environment": settings.ENVIRONMENT,
            }
        )


def bad_request(request: HttpRequest, exception=None) -> JsonResponse:
    return JsonResponse({"success": False, "message": "Bad request", "code": "bad_request"}, status=400)


def not_found(request: HttpRequest, exception=None) -> JsonResponse:
    return JsonResponse({"success": False, "message": "Route not found", "code": "not_found"}, status=404)


def server_error(request: HttpRequest) -> JsonResponse:
    # Django has already logged the traceback via django.request
    return JsonResponse(
        {"success": False, "message": "Internal server error", "code": "server_error"},
        status=500,
    )
