"""
License domain entity.

This is the core domain entity representing an issued theme license.
It contains business logic and is independent of infrastructure.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents an issued license key and its last known domain binding.
    This is an immutable value object with business logic.
    """

    license_key: str
    domain: Optional[str]
    is_active: bool
    created_at: datetime
    activated_at: Optional[datetime]

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key or len(self.license_key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if len(self.license_key) > 100:
            raise ValueError("License key too long")
        if self.is_active and not self.domain:
            raise ValueError("Active license must have a domain")

    @classmethod
    def issue(cls, license_key: str, issued_at: datetime) -> "License":
        """
        Create a new, unbound License entity.

        Args:
            license_key: Generated license key string
            issued_at: Issuance time

        Returns:
            License entity instance
        """
        return cls(
            license_key=license_key,
            domain=None,
            is_active=False,
            created_at=issued_at,
            activated_at=None,
        )
