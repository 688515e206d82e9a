"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class LicenseActivated(DomainEvent):
    """Event raised when a license is bound (or re-bound) to a domain."""

    def __init__(
        self,
        license_key: str,
        domain: str,
        binding_kind: str,
        theme_id: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseActivated event.

        Args:
            license_key: License key string
            domain: Bound storefront domain
            binding_kind: "new_binding" or "reactivation"
            theme_id: Optional theme identifier
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=license_key,
            event_type="LicenseActivated",
        )
        self.license_key = license_key
        self.domain = domain
        self.binding_kind = binding_kind
        self.theme_id = theme_id

    def to_dict(self):
        """Convert event to dictionary for serialization."""
        data = super().to_dict()
        data.update(
            {
                "domain": self.domain,
                "binding_kind": self.binding_kind,
                "theme_id": self.theme_id,
            }
        )
        return data
