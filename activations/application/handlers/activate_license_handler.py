"""
ActivateLicenseHandler.

Handler for binding a license key to a storefront domain.
"""

import logging
from typing import Callable

from django.utils import timezone

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.dto.activation_dto import ActivateLicenseResponseDTO
from activations.domain.events import LicenseActivated
from activations.domain.services import ActivationPolicy
from activations.ports.activation_repository import ActivationRepository
from core.infrastructure.events import event_bus
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

ACTIVATION_SUCCESS_MESSAGE = "License activated successfully! You can now refresh your theme."


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        domain_suffix: str = ".myshopify.com",
        clock: Callable = timezone.now,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.activation_repository = activation_repository
        self.domain_suffix = domain_suffix
        self.clock = clock

    async def handle(self, command: ActivateLicenseCommand) -> ActivateLicenseResponseDTO:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivateLicenseResponseDTO with the binding

        Raises:
            MissingActivationFieldsError: If key or domain is blank
            InvalidDomainError: If the domain lacks the storefront suffix
            InvalidLicenseKeyError: If the license key is unknown
            LicenseAlreadyBoundError: If the key is bound to another domain
            RegistryIntegrityError: If the registry is inconsistent
        """
        license_key, domain = ActivationPolicy.validate_request(
            command.license_key, command.domain, self.domain_suffix
        )

        license = await self.license_repository.find_by_key(license_key)
        current = ActivationPolicy.current_binding(
            await self.activation_repository.find_active_by_license_key(license_key)
        )
        binding_kind = ActivationPolicy.decide(license, current, domain)

        # The write re-checks the binding, a concurrent winner surfaces here
        activation = await self.activation_repository.record_binding(
            license_key=license_key,
            domain=domain.value,
            theme_id=command.theme_id or None,
            activated_at=self.clock(),
        )

        logger.info(
            "License activated",
            extra={
                "domain": activation.domain,
                "binding_kind": binding_kind.value,
            },
        )

        await event_bus.publish(
            LicenseActivated(
                license_key=license_key,
                domain=activation.domain,
                binding_kind=binding_kind.value,
                theme_id=activation.theme_id,
            )
        )

        return ActivateLicenseResponseDTO(
            license_key=license_key,
            domain=activation.domain,
            activated_at=activation.activated_at,
            binding_kind=binding_kind.value,
            message=ACTIVATION_SUCCESS_MESSAGE,
        )
