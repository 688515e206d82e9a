"""
GenerateLicensesHandler.

Handles the bulk license generation command.
"""

import logging
from typing import Callable, Set

from django.utils import timezone

from core.domain.exceptions import LicenseKeyCollisionError, RegistryIntegrityError
from core.infrastructure.events import event_bus
from licenses.application.commands.generate_licenses import GenerateLicensesCommand
from licenses.application.dto.license_dto import GenerateLicensesResponseDTO
from licenses.domain.events import LicensesGenerated
from licenses.domain.services import LicenseIssuer
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class GenerateLicensesHandler:
    """Handler for GenerateLicensesCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        prefix: str = "TL",
        max_count: int = 100,
        max_attempts: int = 5,
        clock: Callable = timezone.now,
    ):
        """Initialize handler with repository and generation settings."""
        self.license_repository = license_repository
        self.prefix = prefix
        self.max_count = max_count
        self.max_attempts = max_attempts
        self.clock = clock

    async def handle(self, command: GenerateLicensesCommand) -> GenerateLicensesResponseDTO:
        """
        Handle generate licenses command.

        Args:
            command: GenerateLicensesCommand

        Returns:
            GenerateLicensesResponseDTO with the issued keys

        Raises:
            InvalidLicenseCountError: If count is out of bounds
            RegistryIntegrityError: If unique keys could not be issued
        """
        count = LicenseIssuer.validate_count(command.count, self.max_count)

        keys: Set[str] = set()
        for attempt in range(1, self.max_attempts + 1):
            keys = await LicenseIssuer.draw_keys(
                count, self.prefix, self.license_repository, keys
            )
            if len(keys) < count:
                logger.warning(
                    "Generated keys collide with issued keys, regenerating",
                    extra={"attempt": attempt, "count": count},
                )
                continue

            licenses = LicenseIssuer.issue_all(sorted(keys), self.clock())
            try:
                saved = await self.license_repository.insert_many(licenses)
            except LicenseKeyCollisionError:
                # Another writer issued one of the keys between check and insert
                logger.warning(
                    "License key collision on insert, regenerating batch",
                    extra={"attempt": attempt, "count": count},
                )
                keys = set()
                continue

            license_keys = [license.license_key for license in saved]
            logger.info(
                "Generated %d license(s)",
                len(license_keys),
                extra={"count": len(license_keys)},
            )
            await event_bus.publish(LicensesGenerated(license_keys=license_keys))
            return GenerateLicensesResponseDTO(
                created=len(license_keys),
                license_keys=license_keys,
            )

        raise RegistryIntegrityError("Could not generate unique license keys")
