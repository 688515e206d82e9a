"""
Activation Django ORM model.

This is the infrastructure layer model for activations.
Domain entities are in activations.domain.activation.
"""
import uuid

from django.db import models
from django.db.models import Q
from django.utils import timezone


class Activation(models.Model):
    """
    A binding of a license key to a storefront domain.

    One row per (license, domain) pair; at most one active row per license.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.CASCADE,
        related_name="activations",
        db_column="license_key",
    )
    domain = models.CharField(max_length=255)
    theme_id = models.CharField(max_length=255, null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    activated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "license_activations"
        ordering = ["-activated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["license", "domain"],
                name="activation_license_domain_uniq",
            ),
            models.UniqueConstraint(
                fields=["license"],
                condition=Q(is_active=True),
                name="activation_one_active_per_license",
            ),
        ]
        indexes = [
            models.Index(fields=["license", "is_active"], name="activation_license_active_idx"),
            models.Index(fields=["is_active", "activated_at"], name="activation_active_at_idx"),
        ]

    def clean(self):
        """Validate activation fields."""
        from django.core.exceptions import ValidationError

        if not self.domain or len(self.domain.strip()) == 0:
            raise ValidationError("Domain cannot be empty")

    def __str__(self):
        return f"{self.license_id} @ {self.domain}"
