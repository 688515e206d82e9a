"""
GenerateLicensesCommand.

Command to issue a batch of new, unbound license keys.
"""

from dataclasses import dataclass


@dataclass
class GenerateLicensesCommand:
    """
    Command to generate license keys.

    ``count`` is validated by the handler so that raw request values
    (including non-integers) produce the domain validation error.
    """

    count: object
