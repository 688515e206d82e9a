"""
Django implementation of ActivationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import logging
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, OperationalError, transaction

from activations.domain.activation import Activation
from activations.infrastructure.models import Activation as ActivationModel
from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import (
    InvalidLicenseKeyError,
    LicenseAlreadyBoundError,
    RegistryIntegrityError,
)
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import claim_binding

logger = logging.getLogger(__name__)


class DjangoActivationRepository(ActivationRepository):
    """
    Django ORM implementation of ActivationRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Upserts activations keyed by (license key, domain)
    3. Implements the atomic binding write
    """

    def _to_domain(self, model: ActivationModel) -> Activation:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Activation model

        Returns:
            Activation domain entity
        """
        return Activation(
            id=model.id,
            license_key=model.license_id,
            domain=model.domain,
            theme_id=model.theme_id,
            is_active=model.is_active,
            activated_at=model.activated_at,
        )

    def _upsert_model(
        self,
        license_key: str,
        domain: str,
        theme_id: Optional[str],
        is_active: bool,
        activated_at: datetime,
    ) -> ActivationModel:
        defaults = {"is_active": is_active, "activated_at": activated_at}
        if theme_id is not None:
            defaults["theme_id"] = theme_id
        # pylint: disable=no-member
        model, _ = ActivationModel.objects.update_or_create(
            license_id=license_key,
            domain=domain,
            defaults=defaults,
        )
        return model

    @sync_to_async
    def find_active_by_license_key(self, license_key: str) -> List[Activation]:
        """
        Find all active activations for a license key.

        Args:
            license_key: License key string

        Returns:
            List of active Activation entities
        """
        # pylint: disable=no-member
        models = ActivationModel.objects.filter(license_id=license_key, is_active=True)
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def upsert(self, activation: Activation) -> Activation:
        """
        Insert or update the activation for a (license key, domain) pair.

        Args:
            activation: Activation entity

        Returns:
            Saved activation entity
        """
        try:
            with transaction.atomic():
                model = self._upsert_model(
                    activation.license_key,
                    activation.domain,
                    activation.theme_id,
                    activation.is_active,
                    activation.activated_at,
                )
        except IntegrityError as e:
            raise RegistryIntegrityError(str(e)) from e
        return self._to_domain(model)

    @sync_to_async
    def record_binding(
        self,
        license_key: str,
        domain: str,
        theme_id: Optional[str],
        activated_at: datetime,
    ) -> Activation:
        """
        Atomically bind a license to a domain.

        Args:
            license_key: License key string
            domain: Storefront domain
            theme_id: Optional theme identifier
            activated_at: Activation time

        Returns:
            The active Activation entity

        Raises:
            InvalidLicenseKeyError: If the license does not exist
            LicenseAlreadyBoundError: If the license is bound elsewhere
            RegistryIntegrityError: If the store rejects the write
        """
        try:
            with transaction.atomic():
                if claim_binding(license_key, domain, activated_at) == 0:
                    # pylint: disable=no-member
                    current = LicenseModel.objects.filter(license_key=license_key).first()
                    if current is None:
                        raise InvalidLicenseKeyError()
                    logger.info(
                        "Conditional binding lost for license",
                        extra={"bound_domain": current.domain, "requested_domain": domain},
                    )
                    raise LicenseAlreadyBoundError(current.domain)

                model = self._upsert_model(license_key, domain, theme_id, True, activated_at)
        except IntegrityError as e:
            raise RegistryIntegrityError(str(e)) from e
        except OperationalError as e:
            self._raise_for_lost_lock(license_key, domain, e)
        return self._to_domain(model)

    def _raise_for_lost_lock(self, license_key: str, domain: str, error: OperationalError):
        """
        Report a binding write that failed on a database lock.

        If the lock holder bound the license to another domain the request
        lost the race; anything else is a store fault.
        """
        # pylint: disable=no-member
        current = LicenseModel.objects.filter(license_key=license_key).first()
        if current is not None and current.is_active and current.domain != domain:
            logger.info(
                "Binding write lost a lock race",
                extra={"bound_domain": current.domain, "requested_domain": domain},
            )
            raise LicenseAlreadyBoundError(current.domain) from error
        raise RegistryIntegrityError(str(error)) from error

    @sync_to_async
    def list_active(self, limit: int) -> List[Activation]:
        """
        List active activations, most recently activated first.

        Args:
            limit: Maximum number of activations

        Returns:
            List of active Activation entities
        """
        # pylint: disable=no-member
        models = ActivationModel.objects.filter(is_active=True).order_by("-activated_at")[:limit]
        return [self._to_domain(model) for model in models]
