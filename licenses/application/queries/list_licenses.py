"""
ListLicensesQuery.

Query for the most recently issued licenses.
"""

from dataclasses import dataclass


@dataclass
class ListLicensesQuery:
    """Query to list recent licenses, newest first."""

    limit: int = 50
