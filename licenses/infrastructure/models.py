"""
License Django ORM model.

This is the infrastructure layer model for issued licenses.
Domain entities are in licenses.domain.license.
"""
from django.db import models
from django.utils import timezone


class License(models.Model):
    """
    An issued theme license key.

    ``domain`` and ``is_active`` mirror the live activation so the
    binding check is a single-row conditional update.
    """

    license_key = models.CharField(max_length=100, primary_key=True)
    domain = models.CharField(max_length=255, null=True, blank=True)
    is_active = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False, db_index=True)
    activated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["domain"], name="licenses_domain_idx"),
        ]

    def clean(self):
        """Validate license fields."""
        from django.core.exceptions import ValidationError

        if not self.license_key or len(self.license_key.strip()) == 0:
            raise ValidationError("License key cannot be empty")
        if self.is_active and not self.domain:
            raise ValidationError("Active license must have a domain")

    def __str__(self):
        return self.license_key
