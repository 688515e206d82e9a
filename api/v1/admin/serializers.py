"""
Serializers for admin API endpoints.
"""

from rest_framework import serializers


class GenerateLicensesRequestSerializer(serializers.Serializer):
    """Serializer for bulk license generation request."""

    count = serializers.IntegerField(required=False, allow_null=True)


class GenerateLicensesResponseSerializer(serializers.Serializer):
    """Serializer for bulk license generation response."""

    success = serializers.BooleanField()
    created = serializers.IntegerField()
    licenseKeys = serializers.ListField(child=serializers.CharField(), source="license_keys")


class ListingQuerySerializer(serializers.Serializer):
    """Serializer for the optional ``limit`` query parameter."""

    limit = serializers.IntegerField(required=False, min_value=1)


class LicenseListItemSerializer(serializers.Serializer):
    """Serializer for a license listing row."""

    licenseKey = serializers.CharField(source="license_key")
    domain = serializers.CharField(allow_null=True)
    isActive = serializers.BooleanField(source="is_active")
    createdAt = serializers.DateTimeField(source="created_at")
    activatedAt = serializers.DateTimeField(source="activated_at", allow_null=True)


class ActivationListItemSerializer(serializers.Serializer):
    """Serializer for an activation listing row."""

    licenseKey = serializers.CharField(source="license_key")
    domain = serializers.CharField()
    themeId = serializers.CharField(source="theme_id", allow_null=True)
    isActive = serializers.BooleanField(source="is_active")
    activatedAt = serializers.DateTimeField(source="activated_at")


class LicenseListResponseSerializer(serializers.Serializer):
    """Serializer for the license listing response."""

    success = serializers.BooleanField()
    licenses = LicenseListItemSerializer(many=True)


class ActivationListResponseSerializer(serializers.Serializer):
    """Serializer for the activation listing response."""

    success = serializers.BooleanField()
    activations = ActivationListItemSerializer(many=True)
