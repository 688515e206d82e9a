"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class LicenseDTO:
    """DTO for license information."""

    license_key: str
    domain: Optional[str]
    is_active: bool
    created_at: datetime
    activated_at: Optional[datetime]


@dataclass
class GenerateLicensesResponseDTO:
    """DTO for bulk generation response."""

    created: int
    license_keys: List[str]
