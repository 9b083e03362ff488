"""Admin API views."""

import logging

from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.core.exceptions import AuthError
from apps.core.responses import error_response, read_payload
from apps.core.views import bad_request

from . import services

logger = logging.getLogger(__name__)


def _bearer_token(request: HttpRequest) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


@method_decorator(csrf_exempt, name="dispatch")
class AdminLoginView(View):
    """API: exchange the admin credential pair for a session token."""

    async def post(self, request: HttpRequest) -> JsonResponse:
        try:
            payload = read_payload(request)
        except ValueError:
            return bad_request(request)

        try:
            token = services.login(payload.get("username"), payload.get("password"))
        except AuthError as exc:
            return error_response(exc)

        return JsonResponse({"success": True, "message": "Login successful", "token": token})


class AdminContactsView(View):
    """API: list recent contact submissions for an authenticated admin."""

    async def get(self, request: HttpRequest) -> JsonResponse:
        try:
            listing = await services.list_submissions(_bearer_token(request))
        except AuthError as exc:
            logger.info("Rejected admin contacts request: %s", exc.code)
            return error_response(exc)

        return JsonResponse(listing.as_dict())
