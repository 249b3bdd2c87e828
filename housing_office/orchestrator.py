"""
Command Orchestrator for Housing Office

This module exposes the command surface the front end calls, and ties the
registry, audit trail and configuration together.

DESIGN DECISION: The orchestrator enforces the boundaries:
- The registry raises domain errors; commands never do
- Every failure comes back as a CommandResult the front end can show
- Every mutation and every rejected command is audited

Input retry loops (re-asking for a number until it parses) belong to the
front end and are deliberately absent here.
"""

from typing import Optional

import structlog

from housing_office.audit import AuditLogger, configure_logging
from housing_office.config import Settings, get_settings
from housing_office.errors import (
    InvalidArgumentError,
    NotFoundError,
    ResidentNotFoundError,
)
from housing_office.models.reports import (
    CommandResult,
    CommandStatus,
    ResidentSummary,
    StatsSnapshot,
)
from housing_office.models.service import Service, service_label, service_unit
from housing_office.registry import HousingOffice
from housing_office.storage import InMemoryAuditStorage

logger = structlog.get_logger(__name__)


class OfficeCommands:
    """
    Command surface over one HousingOffice.

    Commands:
    1. add_resident                    -> resident_id
    2. set_tariff                      -> OK / INVALID_ARGUMENT
    3. add_consumption                 -> OK / RESIDENT_NOT_FOUND / INVALID_ARGUMENT
    4. total_cost_for_name_containing  -> value / NOT_FOUND
    5. get_stats                       -> StatsSnapshot
    6. get_resident_detail             -> report / RESIDENT_NOT_FOUND
    7. list_residents                  -> list of summaries

    The registry is injected; this class never creates a global one.
    """

    def __init__(
        self,
        office: HousingOffice,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._office = office
        self._audit_logger = audit_logger

    @property
    def office(self) -> HousingOffice:
        return self._office

    def _invalid(self, command: str, error: InvalidArgumentError) -> CommandResult:
        logger.warning(
            "command_rejected",
            command=command,
            field=error.field,
            reason=error.reason,
        )
        if self._audit_logger:
            self._audit_logger.log_invalid_argument(
                command=command,
                field=error.field,
                value=error.value,
                reason=error.reason,
            )
        return CommandResult(
            command=command,
            status=CommandStatus.INVALID_ARGUMENT,
            message=str(error),
        )

    def _resident_not_found(
        self,
        command: str,
        error: ResidentNotFoundError,
    ) -> CommandResult:
        if self._audit_logger:
            self._audit_logger.log_resident_not_found(
                resident_id=error.resident_id,
                command=command,
            )
        return CommandResult(
            command=command,
            status=CommandStatus.RESIDENT_NOT_FOUND,
            message=str(error),
            resident_id=error.resident_id,
        )

    # -------------------------------------------------------------------------
    # Mutating commands
    # -------------------------------------------------------------------------

    def add_resident(self, name: str, address: str) -> CommandResult:
        """Register a resident. Always succeeds."""
        resident_id = self._office.add_resident(name, address)

        if self._audit_logger:
            self._audit_logger.log_resident_added(
                resident_id=resident_id,
                name=name,
                address=address,
            )

        return CommandResult(
            command="add_resident",
            status=CommandStatus.OK,
            message=f"Resident added successfully. ID: {resident_id}",
            resident_id=resident_id,
        )

    def set_tariff(self, service: Service, rate: float) -> CommandResult:
        """Overwrite the tariff for one service."""
        try:
            service = Service.coerce(service)
            previous_rate = self._office.tariffs.get(service)
            self._office.set_tariff(service, rate)
        except InvalidArgumentError as e:
            return self._invalid("set_tariff", e)

        new_rate = self._office.tariffs[service]
        if self._audit_logger:
            self._audit_logger.log_tariff_set(
                service=service.value,
                rate=new_rate,
                previous_rate=previous_rate,
            )

        return CommandResult(
            command="set_tariff",
            status=CommandStatus.OK,
            message=(
                f"Tariff for {service_label(service)} set: {new_rate:.2f} "
                f"{self._office.currency_unit}/{service_unit(service)}"
            ),
            value=new_rate,
        )

    def add_consumption(
        self,
        resident_id: int,
        service: Service,
        amount: float,
    ) -> CommandResult:
        """
        Record consumption for a resident.

        On RESIDENT_NOT_FOUND or INVALID_ARGUMENT the registry is unchanged.
        """
        try:
            service = Service.coerce(service)
            entry = self._office.add_service_consumption(resident_id, service, amount)
        except ResidentNotFoundError as e:
            return self._resident_not_found("add_consumption", e)
        except InvalidArgumentError as e:
            return self._invalid("add_consumption", e)

        charged = entry.cost(self._office.tariffs)
        if self._audit_logger:
            self._audit_logger.log_consumption_recorded(
                resident_id=resident_id,
                service=service.value,
                amount=entry.amount,
                charged=charged,
            )

        return CommandResult(
            command="add_consumption",
            status=CommandStatus.OK,
            message="Service consumption added successfully.",
            resident_id=resident_id,
            value=charged,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def total_cost_for_name_containing(self, substring: str) -> CommandResult:
        """
        Total cost of the first resident whose name contains substring.

        A match with zero cost is OK with value 0.0; no match is NOT_FOUND
        with value None.
        """
        total = self._office.total_cost_by_surname(substring)
        if total is None:
            if self._audit_logger:
                self._audit_logger.log_name_search_not_found(substring)
            return CommandResult(
                command="total_cost_for_name_containing",
                status=CommandStatus.NOT_FOUND,
                message=str(NotFoundError(substring)),
            )

        resident = self._office.find_by_name(substring)
        if self._audit_logger:
            self._audit_logger.log_cost_queried(substring, total)

        return CommandResult(
            command="total_cost_for_name_containing",
            status=CommandStatus.OK,
            message=(
                f'Total for resident with name containing "{substring}": '
                f"{total:.2f} {self._office.currency_unit}"
            ),
            resident_id=resident.id if resident else None,
            value=total,
        )

    def get_resident_detail(self, resident_id: int) -> CommandResult:
        """Detailed report for one resident, priced at current tariffs."""
        try:
            report = self._office.resident_detail(resident_id)
        except ResidentNotFoundError as e:
            return self._resident_not_found("get_resident_detail", e)

        if self._audit_logger:
            self._audit_logger.log_resident_viewed(resident_id)

        return CommandResult(
            command="get_resident_detail",
            status=CommandStatus.OK,
            message=f"Resident {resident_id}: {report.name}",
            resident_id=resident_id,
            value=report.total_cost,
            report=report,
        )

    def get_stats(self) -> StatsSnapshot:
        return self._office.stats()

    def list_residents(self) -> list[ResidentSummary]:
        return self._office.list_residents()


def create_office_components(
    settings: Optional[Settings] = None,
) -> tuple[HousingOffice, OfficeCommands, Optional[AuditLogger]]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to build from. Defaults to get_settings().

    Returns:
        (office, commands, audit_logger)
        audit_logger is None when auditing is disabled.
    """
    settings = settings or get_settings()
    app_settings = settings.app
    log_settings = settings.logging

    # debug_mode forces DEBUG regardless of LOG_LEVEL
    level = "DEBUG" if app_settings.debug_mode else log_settings.level
    configure_logging(level, log_settings.json_output)

    office = HousingOffice(currency_unit=app_settings.currency_unit)

    audit_logger = None
    if app_settings.audit_enabled:
        audit_logger = AuditLogger(
            InMemoryAuditStorage(max_events=app_settings.audit_max_events)
        )

    commands = OfficeCommands(office, audit_logger=audit_logger)

    logger.info(
        "office_created",
        environment=app_settings.app_environment,
        currency_unit=app_settings.currency_unit,
        audit_enabled=app_settings.audit_enabled,
    )
    return office, commands, audit_logger
