"""
Admin API key authentication middleware.

Admin endpoints (license generation and listings) require an API key
whose SHA-256 hash matches one of the configured admin keys.
"""

import hashlib
import hmac
import logging
from typing import FrozenSet, Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/v1/admin/"


def hash_api_key(api_key: str) -> str:
    """Return the hex SHA-256 digest of an API key."""
    return hashlib.sha256(api_key.encode()).hexdigest()


class APIKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for admin API key authentication.

    This middleware:
    1. Leaves public paths (activation, health, docs) untouched
    2. Validates the API key for admin APIs (/api/v1/admin/*)
    3. Returns 401 Unauthorized if authentication fails
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if not request.path.startswith(ADMIN_API_PREFIX):
            return None
        return self._authenticate_admin_api(request)

    def _get_api_key(self, request: HttpRequest) -> str:
        api_key = request.headers.get("X-API-Key")
        if api_key:
            return api_key.strip()
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header[7:].strip()
        return ""

    def _allowed_hashes(self) -> FrozenSet[str]:
        return frozenset(
            hash_api_key(key) for key in getattr(settings, "ADMIN_API_KEYS", []) if key
        )

    def _authenticate_admin_api(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Authenticate admin API request.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if auth fails, None if successful
        """
        api_key = self._get_api_key(request)
        if not api_key:
            return JsonResponse(
                {
                    "success": False,
                    "error": "Missing API key. Provide X-API-Key header.",
                    "code": "UNAUTHORIZED",
                },
                status=401,
            )

        api_key_hash = hash_api_key(api_key)
        if not any(hmac.compare_digest(api_key_hash, allowed) for allowed in self._allowed_hashes()):
            logger.warning("Invalid admin API key attempted", extra={"path": request.path})
            return JsonResponse(
                {"success": False, "error": "Invalid API key", "code": "UNAUTHORIZED"},
                status=401,
            )

        request.admin_key_id = api_key_hash[:12]  # type: ignore
        return None
