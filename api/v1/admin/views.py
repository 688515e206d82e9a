"""
Admin API views.

These endpoints are used by the store owner's tooling to:
- Generate license keys in bulk
- List recently issued licenses
- List live activations

Access is checked by APIKeyAuthenticationMiddleware before the view runs.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.handlers.list_active_activations_handler import (
    ListActiveActivationsHandler,
)
from activations.application.queries.list_active_activations import ListActiveActivationsQuery
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from api.v1.admin.serializers import (
    ActivationListItemSerializer,
    ActivationListResponseSerializer,
    GenerateLicensesRequestSerializer,
    GenerateLicensesResponseSerializer,
    LicenseListItemSerializer,
    LicenseListResponseSerializer,
    ListingQuerySerializer,
)
from api.v1.license.serializers import FailureResponseSerializer
from core.domain.exceptions import InvalidLicenseCountError
from core.instrumentation import Status, StatusCode, get_tracer
from core.schema_extensions import ADMIN_API_KEY_PARAMETER
from licenses.application.commands.generate_licenses import GenerateLicensesCommand
from licenses.application.handlers.generate_licenses_handler import GenerateLicensesHandler
from licenses.application.handlers.list_licenses_handler import ListLicensesHandler
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_activation_repo = DjangoActivationRepository()

tracer = get_tracer(__name__)


def _listing_limit(request: Request) -> int:
    """Resolve the listing size from the optional ``limit`` query parameter."""
    serializer = ListingQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    limit = serializer.validated_data.get("limit", settings.ADMIN_LISTING_LIMIT)
    return min(limit, settings.ADMIN_LISTING_LIMIT)


class GenerateLicensesView(APIView):
    """View for bulk license generation."""

    parser_classes = [JSONParser, FormParser, MultiPartParser]

    @extend_schema(
        operation_id="generate_licenses",
        summary="Generate Licenses",
        description="Issue `count` new, unbound license keys in one transaction.",
        tags=["Admin API"],
        parameters=[ADMIN_API_KEY_PARAMETER],
        request=GenerateLicensesRequestSerializer,
        responses={
            200: GenerateLicensesResponseSerializer,
            400: FailureResponseSerializer,
            401: FailureResponseSerializer,
            500: FailureResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Generate license keys."""
        return async_to_sync(self._handle_generate_licenses)(request)

    async def _handle_generate_licenses(self, request: Request) -> Response:
        """Async handler for generate licenses."""
        with tracer.start_as_current_span("generate_licenses") as span:
            span.set_attribute("operation", "generate_licenses")

            serializer = GenerateLicensesRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                raise InvalidLicenseCountError(settings.LICENSE_GENERATION_MAX_COUNT)

            handler = GenerateLicensesHandler(
                license_repository=_license_repo,
                prefix=settings.LICENSE_KEY_PREFIX,
                max_count=settings.LICENSE_GENERATION_MAX_COUNT,
                max_attempts=settings.LICENSE_GENERATION_MAX_ATTEMPTS,
            )
            result = await handler.handle(
                GenerateLicensesCommand(count=serializer.validated_data.get("count"))
            )

            span.set_attribute("licenses.created", result.created)
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "created": result.created,
                    "licenseKeys": result.license_keys,
                },
                status=status.HTTP_200_OK,
            )


class ListLicensesView(APIView):
    """View for listing recently issued licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="Return the most recently issued licenses, newest first.",
        tags=["Admin API"],
        parameters=[
            ADMIN_API_KEY_PARAMETER,
            OpenApiParameter(
                name="limit",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Maximum number of rows, capped at ADMIN_LISTING_LIMIT",
            ),
        ],
        responses={200: LicenseListResponseSerializer, 401: FailureResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list_licenses)(request)

    async def _handle_list_licenses(self, request: Request) -> Response:
        """Async handler for list licenses."""
        with tracer.start_as_current_span("list_licenses") as span:
            limit = _listing_limit(request)
            span.set_attribute("limit", limit)

            handler = ListLicensesHandler(license_repository=_license_repo)
            licenses = await handler.handle(ListLicensesQuery(limit=limit))

            span.set_attribute("licenses.count", len(licenses))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "licenses": LicenseListItemSerializer(licenses, many=True).data,
                },
                status=status.HTTP_200_OK,
            )


class ListActivationsView(APIView):
    """View for listing live activations."""

    @extend_schema(
        operation_id="list_activations",
        summary="List Active Activations",
        description="Return active activations, most recently activated first.",
        tags=["Admin API"],
        parameters=[
            ADMIN_API_KEY_PARAMETER,
            OpenApiParameter(
                name="limit",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Maximum number of rows, capped at ADMIN_LISTING_LIMIT",
            ),
        ],
        responses={200: ActivationListResponseSerializer, 401: FailureResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List active activations."""
        return async_to_sync(self._handle_list_activations)(request)

    async def _handle_list_activations(self, request: Request) -> Response:
        """Async handler for list activations."""
        with tracer.start_as_current_span("list_activations") as span:
            limit = _listing_limit(request)
            span.set_attribute("limit", limit)

            handler = ListActiveActivationsHandler(activation_repository=_activation_repo)
            activations = await handler.handle(ListActiveActivationsQuery(limit=limit))

            span.set_attribute("activations.count", len(activations))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "activations": ActivationListItemSerializer(activations, many=True).data,
                },
                status=status.HTTP_200_OK,
            )
