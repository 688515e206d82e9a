"""
License API views.

The activation endpoint is public: storefront themes call it with the
license key the merchant entered.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from api.exceptions import first_error_message
from api.v1.license.serializers import (
    ActivateLicenseRequestSerializer,
    ActivateLicenseResponseSerializer,
    ActivationSerializer,
    FailureResponseSerializer,
)
from core.domain.exceptions import ActivationValidationError, DomainException
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import license_activations_total
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_activation_repo = DjangoActivationRepository()

tracer = get_tracer(__name__)


class ActivateLicenseView(APIView):
    """View for binding a license key to a storefront domain."""

    parser_classes = [JSONParser, FormParser, MultiPartParser]

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Bind a license key to a storefront domain. A key can be active on one "
            "domain at a time; repeating the activation for the bound domain is a "
            "no-op that refreshes the activation time."
        ),
        tags=["License API"],
        request=ActivateLicenseRequestSerializer,
        responses={
            200: ActivateLicenseResponseSerializer,
            400: FailureResponseSerializer,
            429: FailureResponseSerializer,
            500: FailureResponseSerializer,
        },
        examples=[
            OpenApiExample(
                "Activation request",
                value={"licenseKey": "TL-XXXXXXXX-XXXXXXXX", "domain": "store.myshopify.com"},
                request_only=True,
            ),
        ],
    )
    def post(self, request: Request) -> Response:
        """Activate a license for a domain."""
        return async_to_sync(self._handle_activate_license)(request)

    async def _handle_activate_license(self, request: Request) -> Response:
        """Async handler for activate license."""
        with tracer.start_as_current_span("activate_license") as span:
            span.set_attribute("operation", "activate_license")

            serializer = ActivateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                license_activations_total.labels(outcome="validation_error").inc()
                raise ActivationValidationError(first_error_message(serializer.errors))

            handler = ActivateLicenseHandler(
                license_repository=_license_repo,
                activation_repository=_activation_repo,
                domain_suffix=settings.LICENSE_DOMAIN_SUFFIX,
            )
            command = ActivateLicenseCommand(
                license_key=serializer.validated_data.get("license_key"),
                domain=serializer.validated_data.get("domain"),
                theme_id=serializer.validated_data.get("theme_id"),
            )

            try:
                result = await handler.handle(command)
            except DomainException as e:
                span.set_attribute("error.code", e.code)
                span.set_status(Status(StatusCode.ERROR, e.code))
                license_activations_total.labels(outcome=e.code.lower()).inc()
                raise

            span.set_attribute("license.domain", result.domain)
            span.set_attribute("binding_kind", result.binding_kind)
            span.set_status(Status(StatusCode.OK))
            license_activations_total.labels(outcome=result.binding_kind).inc()

            return Response(
                {
                    "success": True,
                    "message": result.message,
                    "activation": ActivationSerializer(result).data,
                },
                status=status.HTTP_200_OK,
            )
