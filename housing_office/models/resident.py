"""
Resident Models

A resident is a billed occupant: a fixed identity plus an append-only
list of consumption entries. The resident knows how to price its own
consumption against whatever tariff table it is given, but it never owns
tariffs itself.

DESIGN DECISION: Consumption is stored as ONE list of (service, amount)
records. There are no parallel arrays that have to be kept the same
length by hand.
"""

import math
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from housing_office.errors import InvalidArgumentError
from housing_office.models.reports import (
    ConsumptionLine,
    ResidentReport,
    ResidentSummary,
)
from housing_office.models.service import Service, service_label, service_unit


def ensure_non_negative(field: str, value: float) -> float:
    """
    Reject negative, NaN and infinite quantities.

    The front end only ever passes values >= 0, but the core can be called
    directly, so amounts and rates are checked again here.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(field, value, "must be a number")
    except OverflowError:
        raise InvalidArgumentError(field, value, "must be a finite number")
    if not math.isfinite(number):
        raise InvalidArgumentError(field, value, "must be a finite number")
    if number < 0:
        raise InvalidArgumentError(field, value, "must not be negative")
    return number


class ConsumptionEntry(BaseModel):
    """A single recorded (service, amount) pair."""
    model_config = ConfigDict(frozen=True)

    service: Service
    amount: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Units consumed, in the service's billing unit"
    )

    def cost(self, tariffs: Mapping[Service, float]) -> float:
        """Price this entry; a service with no tariff costs nothing."""
        return tariffs.get(self.service, 0.0) * self.amount


class Resident(BaseModel):
    """
    A registered resident.

    Identity fields are frozen once the registry creates the resident.
    The only mutation is appending consumption via record_consumption().
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Registry-assigned ID")
    name: str = Field(..., description="Full name, searched by substring")
    address: str = Field(..., description="Postal address")

    _consumption: list[ConsumptionEntry] = PrivateAttr(default_factory=list)

    @property
    def consumption(self) -> tuple[ConsumptionEntry, ...]:
        """Recorded entries in insertion order."""
        return tuple(self._consumption)

    def record_consumption(self, service: Service, amount: float) -> ConsumptionEntry:
        """Append one consumption entry and return it."""
        entry = ConsumptionEntry(
            service=service,
            amount=ensure_non_negative("amount", amount),
        )
        self._consumption.append(entry)
        return entry

    def total_cost(self, tariffs: Mapping[Service, float]) -> float:
        """Sum of rate * amount over every entry, at the given tariffs."""
        return sum((entry.cost(tariffs) for entry in self._consumption), 0.0)

    def name_contains(self, substring: str) -> bool:
        """Literal, case-sensitive substring test against the full name."""
        return substring in self.name

    def summary(self) -> ResidentSummary:
        return ResidentSummary(id=self.id, name=self.name, address=self.address)

    def describe(
        self,
        tariffs: Mapping[Service, float],
        currency_unit: str = "RUB",
    ) -> ResidentReport:
        """
        Build a read-only report of this resident.

        Every entry is priced against the tariffs passed in, not against
        the rates in effect when it was recorded.
        """
        lines = tuple(
            ConsumptionLine(
                service=entry.service,
                label=service_label(entry.service),
                unit=service_unit(entry.service),
                amount=entry.amount,
                rate=tariffs.get(entry.service, 0.0),
                cost=entry.cost(tariffs),
            )
            for entry in self._consumption
        )
        return ResidentReport(
            resident_id=self.id,
            name=self.name,
            address=self.address,
            lines=lines,
            total_cost=sum((line.cost for line in lines), 0.0),
            currency_unit=currency_unit,
        )
