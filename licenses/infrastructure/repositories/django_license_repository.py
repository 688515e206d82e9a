"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import Iterable, List, Optional, Set

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Q

from core.domain.exceptions import LicenseKeyCollisionError
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


def claim_binding(license_key: str, domain: str, activated_at: datetime) -> int:
    """
    Conditionally bind a license row to ``domain``.

    Issues a single UPDATE that only matches when the license is unbound
    or already bound to ``domain``. Must run inside the caller's transaction
    when combined with other writes.

    Args:
        license_key: License key string
        domain: Storefront domain
        activated_at: Activation time

    Returns:
        Number of rows updated (0 or 1)
    """
    # pylint: disable=no-member
    return (
        LicenseModel.objects.filter(license_key=license_key)
        .filter(Q(is_active=False) | Q(domain=domain))
        .update(domain=domain, is_active=True, activated_at=activated_at)
    )


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            license_key=model.license_key,
            domain=model.domain,
            is_active=model.is_active,
            created_at=model.created_at,
            activated_at=model.activated_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to an unsaved Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        return LicenseModel(
            license_key=license.license_key,
            domain=license.domain,
            is_active=license.is_active,
            created_at=license.created_at,
            activated_at=license.activated_at,
        )

    @sync_to_async
    def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its key string.

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = LicenseModel.objects.get(license_key=license_key)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def update_binding(self, license_key: str, domain: str, activated_at: datetime) -> bool:
        """
        Bind a license to a domain if it is unbound or already bound there.

        Args:
            license_key: License key string
            domain: Storefront domain
            activated_at: Activation time

        Returns:
            True if the license row was updated, False otherwise
        """
        return claim_binding(license_key, domain, activated_at) == 1

    @sync_to_async
    def insert_many(self, licenses: List[License]) -> List[License]:
        """
        Insert a batch of new licenses atomically.

        Args:
            licenses: License entities to insert

        Returns:
            Inserted license entities

        Raises:
            LicenseKeyCollisionError: If any key already exists
        """
        models = [self._to_model(license) for license in licenses]
        try:
            with transaction.atomic():
                # pylint: disable=no-member
                LicenseModel.objects.bulk_create(models)
        except IntegrityError as e:
            raise LicenseKeyCollisionError() from e
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_existing_keys(self, license_keys: Iterable[str]) -> Set[str]:
        """
        Return which of the given keys are already issued.

        Args:
            license_keys: Candidate key strings

        Returns:
            Set of keys present in the registry
        """
        # pylint: disable=no-member
        return set(
            LicenseModel.objects.filter(license_key__in=list(license_keys)).values_list(
                "license_key", flat=True
            )
        )

    @sync_to_async
    def list_recent(self, limit: int) -> List[License]:
        """
        List the most recently issued licenses, newest first.

        Args:
            limit: Maximum number of licenses

        Returns:
            List of License entities
        """
        # pylint: disable=no-member
        models = LicenseModel.objects.order_by("-created_at", "-license_key")[:limit]
        return [self._to_domain(model) for model in models]
