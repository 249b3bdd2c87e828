"""
Housing Office Registry

The aggregate root of the billing core. One HousingOffice owns:
- every registered resident, in id order
- the single tariff table shared by all cost computations
- the cumulative revenue total

DESIGN DECISION: The registry is an ordinary object. Callers construct it
and pass it to whatever needs it; there is no module-level instance. Tests
build as many independent offices as they like.

REVENUE vs COST:
- cumulative_revenue is accrued when consumption is recorded, at the rate
  in effect at that moment. Tariff changes never touch it afterwards.
- A resident's total cost is always recomputed from the CURRENT tariffs.
The two can therefore diverge after a tariff change. This is intended.
"""

from types import MappingProxyType
from typing import Mapping, Optional

import structlog

from housing_office.errors import ResidentNotFoundError
from housing_office.models.reports import (
    ResidentReport,
    ResidentSummary,
    StatsSnapshot,
)
from housing_office.models.resident import (
    ConsumptionEntry,
    Resident,
    ensure_non_negative,
)
from housing_office.models.service import Service, default_tariffs

logger = structlog.get_logger(__name__)


class HousingOffice:
    """
    Registry of residents and tariffs.

    All operations are synchronous and run to completion. Domain failures
    are raised as HousingOfficeError subclasses; the command layer turns
    them into results.
    """

    def __init__(self, currency_unit: str = "RUB"):
        self._residents: list[Resident] = []
        self._tariffs: dict[Service, float] = default_tariffs()
        self._cumulative_revenue = 0.0
        self._currency_unit = currency_unit

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def residents(self) -> tuple[Resident, ...]:
        """
        Detached copies of every resident, in id order.

        Recording consumption on a copy does not reach the registry; use
        add_service_consumption so revenue is accrued.
        """
        return tuple(resident.model_copy(deep=True) for resident in self._residents)

    @property
    def tariffs(self) -> Mapping[Service, float]:
        return MappingProxyType(self._tariffs)

    @property
    def cumulative_revenue(self) -> float:
        return self._cumulative_revenue

    @property
    def resident_count(self) -> int:
        return len(self._residents)

    @property
    def currency_unit(self) -> str:
        return self._currency_unit

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _next_id(self) -> int:
        # Ids are assigned in increasing order and residents are never
        # removed, so the last resident holds the maximum id.
        if not self._residents:
            return 1
        return self._residents[-1].id + 1

    def add_resident(self, name: str, address: str) -> int:
        """
        Register a new resident and return its id.

        Always succeeds. Duplicate names are allowed.
        """
        resident = Resident(id=self._next_id(), name=name, address=address)
        self._residents.append(resident)
        logger.debug("resident_added", resident_id=resident.id)
        return resident.id

    def add_service_consumption(
        self,
        resident_id: int,
        service: Service,
        amount: float,
    ) -> ConsumptionEntry:
        """
        Record consumption for a resident and accrue revenue.

        Raises:
            InvalidArgumentError: service is not a Service, or amount is
                negative or not finite
            ResidentNotFoundError: no resident has this id

        Nothing is mutated when either error is raised.
        """
        service = Service.coerce(service)
        amount = ensure_non_negative("amount", amount)
        resident = self._find_resident(resident_id)

        entry = resident.record_consumption(service, amount)
        charged = entry.cost(self._tariffs)
        self._cumulative_revenue += charged

        logger.debug(
            "consumption_recorded",
            resident_id=resident_id,
            service=service.value,
            amount=amount,
            charged=charged,
        )
        return entry

    def set_tariff(self, service: Service, rate: float) -> None:
        """
        Overwrite the rate for a service.

        Applies to every cost computed from now on. Previously accrued
        revenue is left as it is.
        """
        service = Service.coerce(service)
        self._tariffs[service] = ensure_non_negative("rate", rate)
        logger.debug("tariff_set", service=service.value, rate=self._tariffs[service])

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _find_resident(self, resident_id: int) -> Resident:
        for resident in self._residents:
            if resident.id == resident_id:
                return resident
        logger.warning("resident_not_found", resident_id=resident_id)
        raise ResidentNotFoundError(resident_id)

    def _find_by_name(self, substring: str) -> Optional[Resident]:
        for resident in self._residents:
            if resident.name_contains(substring):
                return resident
        return None

    def get_resident(self, resident_id: int) -> Resident:
        """Detached copy of a resident, looked up by id (linear scan)."""
        return self._find_resident(resident_id).model_copy(deep=True)

    def find_by_name(self, substring: str) -> Optional[Resident]:
        """Copy of the first resident, in id order, whose name contains substring."""
        resident = self._find_by_name(substring)
        return resident.model_copy(deep=True) if resident else None

    def total_cost_by_surname(self, substring: str) -> Optional[float]:
        """
        Live total cost of the first resident whose name contains substring.

        NOTE: This matches any part of the full name, not a separate
        surname field. "Ivanov" therefore also matches "Ivanova O.".

        Returns None when no name matches. A match with no consumption
        returns 0.0, which is a valid cost and not "not found".
        """
        resident = self._find_by_name(substring)
        if resident is None:
            return None
        return resident.total_cost(self._tariffs)

    def resident_detail(self, resident_id: int) -> ResidentReport:
        """Report for one resident, priced at the current tariffs."""
        resident = self._find_resident(resident_id)
        return resident.describe(self._tariffs, self._currency_unit)

    def list_residents(self) -> list[ResidentSummary]:
        return [resident.summary() for resident in self._residents]

    def stats(self) -> StatsSnapshot:
        """Aggregate snapshot of the office. Never mutates state."""
        return StatsSnapshot(
            resident_count=len(self._residents),
            tariffs=dict(self._tariffs),
            cumulative_revenue=self._cumulative_revenue,
            residents=tuple(self.list_residents()),
            currency_unit=self._currency_unit,
        )
