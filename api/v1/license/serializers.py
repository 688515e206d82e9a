"""
Serializers for the public license activation endpoint.
"""

from rest_framework import serializers


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """
    Serializer for activate license request.

    Presence and format checks belong to the activation policy so that
    missing fields produce the domain validation message.
    """

    licenseKey = serializers.CharField(
        source="license_key", required=False, allow_blank=True, allow_null=True
    )
    domain = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    themeId = serializers.CharField(
        source="theme_id", required=False, allow_blank=True, allow_null=True, max_length=255
    )


class ActivationSerializer(serializers.Serializer):
    """Serializer for the activation block of a successful response."""

    licenseKey = serializers.CharField(source="license_key")
    domain = serializers.CharField()
    activatedAt = serializers.DateTimeField(source="activated_at")


class ActivateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for activate license response."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    activation = ActivationSerializer()


class FailureResponseSerializer(serializers.Serializer):
    """Serializer for the failure shape, used for schema generation."""

    success = serializers.BooleanField()
    error = serializers.CharField()
    code = serializers.CharField()
