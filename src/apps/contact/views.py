"""Contact app views."""

from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.core.mixins import RateLimitMixin
from apps.core.ratelimit import contact_limiter
from apps.core.responses import read_payload
from apps.core.views import bad_request

from .services import submit_contact


@method_decorator(csrf_exempt, name="dispatch")
class ContactSubmitView(RateLimitMixin, View):
    """API: accept a contact form submission."""

    rate_limiter = contact_limiter

    async def post(self, request: HttpRequest) -> JsonResponse:
        """Validate, store and forward a submission."""
        try:
            payload = read_payload(request)
        except ValueError:
            return bad_request(request)

        result = await submit_contact(payload, source_address=request.client_ip)
        return JsonResponse(result.as_dict(), status=result.status)
