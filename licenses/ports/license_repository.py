"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional, Set

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its key string.

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def update_binding(
        self, license_key: str, domain: str, activated_at: datetime
    ) -> bool:
        """
        Bind a license to a domain if it is unbound or already bound there.

        The check and the write are a single conditional update.

        Args:
            license_key: License key string
            domain: Storefront domain
            activated_at: Activation time

        Returns:
            True if the license row was updated, False otherwise
        """
        pass

    @abstractmethod
    async def insert_many(self, licenses: List[License]) -> List[License]:
        """
        Insert a batch of new licenses atomically.

        Args:
            licenses: License entities to insert

        Returns:
            Inserted license entities
        """
        pass

    @abstractmethod
    async def find_existing_keys(self, license_keys: Iterable[str]) -> Set[str]:
        """
        Return which of the given keys are already issued.

        Args:
            license_keys: Candidate key strings

        Returns:
            Set of keys present in the registry
        """
        pass

    @abstractmethod
    async def list_recent(self, limit: int) -> List[License]:
        """
        List the most recently issued licenses, newest first.

        Args:
            limit: Maximum number of licenses

        Returns:
            List of License entities
        """
        pass
