"""
OpenAPI parameters shared by the admin API views.

The matching ``AdminApiKey`` security scheme is appended to the schema
through ``SPECTACULAR_SETTINGS``.
"""

from drf_spectacular.utils import OpenApiParameter

ADMIN_API_KEY_PARAMETER = OpenApiParameter(
    name="X-API-Key",
    type=str,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Admin API key. One of the keys configured in ADMIN_API_KEYS.",
)
