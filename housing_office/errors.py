"""
Domain Exceptions

The registry raises these; the command layer catches exactly these types
and turns them into command results. None of them is fatal.
"""

from typing import Any


class HousingOfficeError(Exception):
    """Base exception for housing office domain errors."""
    pass


class ResidentNotFoundError(HousingOfficeError):
    """No resident is registered under the given id."""

    def __init__(self, resident_id: int):
        self.resident_id = resident_id
        super().__init__(f"Resident with ID {resident_id} not found")


class NotFoundError(HousingOfficeError):
    """A name search matched no resident."""

    def __init__(self, substring: str):
        self.substring = substring
        super().__init__(f'No resident name contains "{substring}"')


class InvalidArgumentError(HousingOfficeError, ValueError):
    """
    An argument is outside its domain.

    Raised for negative or non-finite amounts and rates, and for menu
    numbers that map to no service.
    """

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")
