"""
Global API rate limiting.

Every request under ``/api/`` counts against the process-wide
``api_limiter`` for its client address. Requests over the cap are answered
with a 429 before they reach any view. Expired keys are pruned by the
limiter itself as it is hit.
"""

import logging

from .exceptions import RateLimited
from .ratelimit import api_limiter, get_client_ip
from .responses import error_response

logger = logging.getLogger(__name__)


class ApiRateLimitMiddleware:
    """Apply the global per-address request cap to API traffic."""

    limiter = api_limiter

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith("/api/"):
            return self.get_response(request)

        ip = get_client_ip(request)
        decision = self.limiter.hit(ip)
        if not decision.allowed:
            logger.warning("Rate limit '%s' exceeded for %s (%s %s)", self.limiter.name, ip, request.method, request.path)
            return error_response(RateLimited(retry_after=decision.retry_after))

        response = self.get_response(request)
        response["X-RateLimit-Limit"] = str(self.limiter.max_requests)
        response["X-RateLimit-Remaining"] = str(decision.remaining)
        return response
