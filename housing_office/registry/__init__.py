"""Resident registry package."""

from housing_office.registry.office import HousingOffice

__all__ = ["HousingOffice"]
