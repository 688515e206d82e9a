"""
Rate limiting middleware.

Limits public activation requests per client IP in fixed windows
stored in the Django cache.
"""

import hashlib
import time
from typing import Callable, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total

ACTIVATION_PATHS = ("/api/v1/license/activate", "/activate")


class RateLimitMiddleware:
    """
    Rate limiting middleware for the activation endpoints.

    Default limit: 30 requests per minute per client IP
    (``ACTIVATION_RATE_LIMIT``). Disabled when ``RATE_LIMIT_ENABLED`` is False.
    """

    RATE_LIMIT_WINDOW = 60  # seconds

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def _get_client_ip(self, request: HttpRequest) -> str:
        """
        Extract the client IP from the request.

        ``X-Forwarded-For`` is honoured only when
        ``RATE_LIMIT_TRUST_FORWARDED_FOR`` is enabled.
        """
        if getattr(settings, "RATE_LIMIT_TRUST_FORWARDED_FOR", False):
            forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
            if forwarded:
                return forwarded.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR", "unknown")

    def _get_rate_limit_key(self, client_ip: str, window_start: int) -> str:
        ip_hash = hashlib.sha256(client_ip.encode()).hexdigest()[:16]
        return f"rate_limit:activate:{ip_hash}:{window_start}"

    def _check_rate_limit(self, client_ip: str, limit: int) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Args:
            client_ip: Client IP address
            limit: Requests allowed per window

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / self.RATE_LIMIT_WINDOW)
        reset_time = (window_start + 1) * self.RATE_LIMIT_WINDOW
        full_key = self._get_rate_limit_key(client_ip, window_start)

        if cache.get(full_key, 0) >= limit:
            return False, 0, reset_time

        if cache.add(full_key, 1, timeout=self.RATE_LIMIT_WINDOW):
            new_count = 1
        else:
            try:
                new_count = cache.incr(full_key, 1)
            except ValueError:
                # Expired between add and incr
                cache.set(full_key, 1, timeout=self.RATE_LIMIT_WINDOW)
                new_count = 1

        return True, max(0, limit - new_count), reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if not getattr(settings, "RATE_LIMIT_ENABLED", True):
            return self.get_response(request)

        if request.path.rstrip("/") not in ACTIVATION_PATHS:
            return self.get_response(request)

        limit = getattr(settings, "ACTIVATION_RATE_LIMIT", 30)
        is_allowed, remaining, reset_time = self._check_rate_limit(
            self._get_client_ip(request), limit
        )

        if not is_allowed:
            errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()
            response = JsonResponse(
                {
                    "success": False,
                    "error": "Rate limit exceeded. Please try again later.",
                    "code": "RATE_LIMIT_EXCEEDED",
                },
                status=429,
            )
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))
        else:
            response = self.get_response(request)

        response["X-RateLimit-Limit"] = str(limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        return response
