"""
ListActiveActivationsHandler.

Handler for listing live license bindings.
"""

from typing import List

from activations.application.dto.activation_dto import ActivationDTO
from activations.application.queries.list_active_activations import ListActiveActivationsQuery
from activations.ports.activation_repository import ActivationRepository


class ListActiveActivationsHandler:
    """Handler for ListActiveActivationsQuery."""

    def __init__(self, activation_repository: ActivationRepository):
        """Initialize handler with repository."""
        self.activation_repository = activation_repository

    async def handle(self, query: ListActiveActivationsQuery) -> List[ActivationDTO]:
        """
        Handle list active activations query.

        Args:
            query: ListActiveActivationsQuery

        Returns:
            List of ActivationDTO, most recently activated first
        """
        activations = await self.activation_repository.list_active(query.limit)
        return [
            ActivationDTO(
                license_key=activation.license_key,
                domain=activation.domain,
                theme_id=activation.theme_id,
                is_active=activation.is_active,
                activated_at=activation.activated_at,
            )
            for activation in activations
        ]
