"""
Activation domain entity.

This is the core domain entity representing a license binding to a
storefront domain. It is independent of infrastructure.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Activation:
    """
    Activation domain entity.

    Records that a license key was bound to a domain. Rows are kept as
    history; ``is_active`` marks the live binding.
    """

    id: uuid.UUID
    license_key: str
    domain: str
    theme_id: Optional[str]
    is_active: bool
    activated_at: datetime

    def __post_init__(self):
        """Validate activation entity."""
        if not self.license_key:
            raise ValueError("License key is required")
        if not self.domain:
            raise ValueError("Domain is required")

    @classmethod
    def create(
        cls,
        license_key: str,
        domain: str,
        activated_at: datetime,
        theme_id: Optional[str] = None,
        activation_id: Optional[uuid.UUID] = None,
    ) -> "Activation":
        """
        Create a new active Activation entity.

        Args:
            license_key: License key string
            domain: Storefront domain
            activated_at: Activation time
            theme_id: Optional theme identifier
            activation_id: Optional UUID (generated if not provided)

        Returns:
            Activation entity instance
        """
        return cls(
            id=activation_id or uuid.uuid4(),
            license_key=license_key,
            domain=domain,
            theme_id=theme_id,
            is_active=True,
            activated_at=activated_at,
        )
