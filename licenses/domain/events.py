"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from core.domain.events import DomainEvent


class LicensesGenerated(DomainEvent):
    """Event raised when a batch of licenses is issued."""

    def __init__(
        self,
        license_keys: List[str],
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicensesGenerated event.

        Args:
            license_keys: Keys issued in the batch
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=license_keys[0] if license_keys else "",
            event_type="LicensesGenerated",
        )
        self.license_keys = list(license_keys)

    @property
    def count(self) -> int:
        """Number of licenses in the batch."""
        return len(self.license_keys)

    def to_dict(self):
        """Convert event to dictionary for serialization."""
        data = super().to_dict()
        data["count"] = self.count
        return data
