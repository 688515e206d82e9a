"""
ListActiveActivationsQuery.

Query for the most recently activated live bindings.
"""

from dataclasses import dataclass


@dataclass
class ListActiveActivationsQuery:
    """Query to list active activations, newest first."""

    limit: int = 50
