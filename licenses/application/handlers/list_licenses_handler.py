"""
ListLicensesHandler.

Handler for listing recently issued licenses.
"""

from typing import List

from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.ports.license_repository import LicenseRepository


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        """
        Handle list licenses query.

        Args:
            query: ListLicensesQuery

        Returns:
            List of LicenseDTO, newest first
        """
        licenses = await self.license_repository.list_recent(query.limit)
        return [
            LicenseDTO(
                license_key=license.license_key,
                domain=license.domain,
                is_active=license.is_active,
                created_at=license.created_at,
                activated_at=license.activated_at,
            )
            for license in licenses
        ]
