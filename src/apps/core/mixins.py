"""View mixins for the API."""

import logging

from .exceptions import RateLimited
from .ratelimit import SlidingWindowRateLimiter, get_client_ip
from .responses import error_response

logger = logging.getLogger(__name__)


class RateLimitMixin:
    """
    Mixin for async class-based views that applies an extra per-address limiter.

    Only methods listed in ``rate_limited_methods`` are charged; anything else
    (a stray GET, a HEAD, a 405) passes through untouched. Sets
    ``request.client_ip`` before dispatching to the handler.
    """

    rate_limiter: SlidingWindowRateLimiter
    rate_limited_methods = ("post",)

    async def dispatch(self, request, *args, **kwargs):
        """Check the view's limiter before dispatching to the handler."""
        client_ip = get_client_ip(request)
        if request.method.lower() in self.rate_limited_methods:
            decision = self.rate_limiter.hit(client_ip)
            if not decision.allowed:
                logger.warning("Rate limit '%s' exceeded for %s", self.rate_limiter.name, client_ip)
                return error_response(RateLimited(retry_after=decision.retry_after))

        request.client_ip = client_ip
        return await super().dispatch(request, *args, **kwargs)
