"""
Licenses module - Theme license key issuance.

This module handles:
- License entity and domain logic
- License key format and generation
- Bulk license issuance
"""
