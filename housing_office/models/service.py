"""
Utility Services

The closed set of services the office bills for.

DESIGN DECISION: Display labels and billing units are kept in lookup
tables keyed by the enumeration. Domain code only ever uses the enum
members as keys; presentation reads the tables.
"""

from enum import Enum

from housing_office.errors import InvalidArgumentError


class Service(str, Enum):
    """
    Billable utility services.

    Used as the key into the tariff table and as the tag on every
    consumption entry. The set never changes at runtime.
    """
    ELECTRICITY = "electricity"
    WATER = "water"
    GAS = "gas"
    HEATING = "heating"
    MAINTENANCE = "maintenance"

    @classmethod
    def coerce(cls, value: object) -> "Service":
        """Accept a member or its string value; anything else is rejected."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(
                "service",
                value,
                f"must be one of {[s.value for s in cls]}",
            )

    @classmethod
    def from_menu_choice(cls, choice: int) -> "Service":
        """
        Map a 1-based menu number to a service.

        The front end lists services in declaration order, so 1 is
        ELECTRICITY and 5 is MAINTENANCE.
        """
        members = list(cls)
        if not 1 <= choice <= len(members):
            raise InvalidArgumentError(
                "service_choice",
                choice,
                f"must be between 1 and {len(members)}",
            )
        return members[choice - 1]


SERVICE_LABELS: dict[Service, str] = {
    Service.ELECTRICITY: "Electricity",
    Service.WATER: "Water",
    Service.GAS: "Gas",
    Service.HEATING: "Heating",
    Service.MAINTENANCE: "Maintenance",
}

SERVICE_UNITS: dict[Service, str] = {
    Service.ELECTRICITY: "kWh",
    Service.WATER: "m³",
    Service.GAS: "m³",
    Service.HEATING: "Gcal",
    Service.MAINTENANCE: "month",
}


def service_label(service: Service) -> str:
    """Human-readable name of a service."""
    return SERVICE_LABELS.get(service, "Unknown service")


def service_unit(service: Service) -> str:
    """Billing unit a tariff for this service is quoted per."""
    return SERVICE_UNITS.get(service, "unit")


def default_tariffs() -> dict[Service, float]:
    """A fresh tariff table with every service at a zero rate."""
    return {service: 0.0 for service in Service}
