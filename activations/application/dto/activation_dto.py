"""
Activation DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ActivationDTO:
    """DTO for activation information."""

    license_key: str
    domain: str
    theme_id: Optional[str]
    is_active: bool
    activated_at: datetime


@dataclass
class ActivateLicenseResponseDTO:
    """DTO for activate license response."""

    license_key: str
    domain: str
    activated_at: datetime
    binding_kind: str
    message: str
