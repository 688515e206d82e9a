"""
Activation repository port (interface).

This defines the contract for activation persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from activations.domain.activation import Activation


class ActivationRepository(ABC):
    """
    Abstract repository for Activation entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_active_by_license_key(self, license_key: str) -> List[Activation]:
        """
        Find all active activations for a license key.

        More than one result means the registry is inconsistent.

        Args:
            license_key: License key string

        Returns:
            List of active Activation entities
        """
        pass

    @abstractmethod
    async def upsert(self, activation: Activation) -> Activation:
        """
        Insert or update the activation for a (license key, domain) pair.

        ``theme_id`` is only overwritten when the entity carries one.

        Args:
            activation: Activation entity

        Returns:
            Saved activation entity
        """
        pass

    @abstractmethod
    async def record_binding(
        self,
        license_key: str,
        domain: str,
        theme_id: Optional[str],
        activated_at: datetime,
    ) -> Activation:
        """
        Atomically bind a license to a domain.

        Updates the license row only if it is unbound or bound to the same
        domain, then upserts the activation, all in one transaction.

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
        pass

    @abstractmethod
    async def list_active(self, limit: int) -> List[Activation]:
        """
        List active activations, most recently activated first.

        Args:
            limit: Maximum number of activations

        Returns:
            List of active Activation entities
        """
        pass
