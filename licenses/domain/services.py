"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from datetime import datetime
from typing import List, Optional, Set

from core.domain.exceptions import InvalidLicenseCountError
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key
from licenses.ports.license_repository import LicenseRepository


class LicenseIssuer:
    """Domain service for bulk license issuance."""

    @staticmethod
    def validate_count(count, max_count: int) -> int:
        """
        Validate a requested batch size.

        Args:
            count: Requested number of licenses
            max_count: Largest batch allowed

        Returns:
            The validated count

        Raises:
            InvalidLicenseCountError: If count is not an integer in 1..max_count
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidLicenseCountError(max_count)
        if count < 1 or count > max_count:
            raise InvalidLicenseCountError(max_count)
        return count

    @staticmethod
    async def draw_keys(
        count: int,
        prefix: str,
        repository: LicenseRepository,
        keys: Optional[Set[str]] = None,
    ) -> Set[str]:
        """
        Run one round of key generation.

        Tops ``keys`` up to ``count`` fresh candidates and drops the ones
        already issued. The batch is ready when the result holds ``count``
        keys; otherwise the caller runs another round.

        Args:
            count: Number of keys
            prefix: Key prefix
            repository: License repository used for the collision check
            keys: Clean candidates kept from the previous round

        Returns:
            Set of candidates not present in the registry
        """
        keys = set(keys or ())
        while len(keys) < count:
            keys.add(generate_license_key(prefix))
        taken = await repository.find_existing_keys(sorted(keys))
        return keys - set(taken)

    @staticmethod
    def issue_all(keys: List[str], issued_at: datetime) -> List[License]:
        """
        Build unbound License entities for freshly generated keys.

        Args:
            keys: Unique key strings
            issued_at: Issuance time

        Returns:
            List of License entities
        """
        return [License.issue(key, issued_at) for key in keys]
