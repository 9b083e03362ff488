"""JSON response helpers shared by the API views."""

import json

from django.http import HttpRequest, JsonResponse

from .exceptions import PortfolioError, RateLimited


def error_response(error: PortfolioError) -> JsonResponse:
    """Translate an API error into its ``{success: false, ...}`` response."""
    response = JsonResponse(error.as_dict(), status=error.status)
    if isinstance(error, RateLimited) and error.retry_after:
        response["Retry-After"] = str(error.retry_after)
    return response


def read_payload(request: HttpRequest) -> dict:
    """
    Return the request body as a dict.

    JSON bodies are decoded; anything else falls back to form data.
    Raises ``ValueError`` for a malformed or pathologically nested JSON body.
    """
    if request.content_type == "application/json":
        if not request.body:
            return {}
        try:
            data = json.loads(request.body)
        except RecursionError as exc:
            raise ValueError("JSON body is nested too deeply") from exc
        if not isinstance(data, dict):
            raise ValueError("JSON body must be an object")
        return data
    return request.POST.dict()
