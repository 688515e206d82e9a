"""
Activations module - License binding to storefront domains.

This module handles:
- Activation entity and domain logic
- The one-active-domain binding policy
- Atomic binding writes and activation history
"""

