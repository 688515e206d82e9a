"""
ActivateLicenseCommand.

Command to bind a license key to a storefront domain.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license for a domain."""

    license_key: Optional[str]
    domain: Optional[str]
    theme_id: Optional[str] = None
