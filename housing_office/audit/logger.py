"""
Audit Logger

DESIGN DECISION: Every command outcome is logged.
This provides:
1. Complete traceability of registrations, tariffs and billing
2. Debugging capability when the operator reports a wrong total
3. A history of tariff changes, which the tariff table does not keep

The audit logger:
- Is synchronous, like the rest of the core
- Gracefully handles storage failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace one operator session
"""

import logging
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from housing_office.models.audit import AuditEvent, AuditEventBuilder
from housing_office.storage import AuditStorageInterface, StorageError


def _processors(json_output: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def _configure_structlog(json_output: bool) -> None:
    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Loggers that have already emitted keep the processors they were
    first bound with (cache_logger_on_first_use), so call this at startup.
    """
    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(level)
    _configure_structlog(json_output)


# Configure structlog for local logging
_configure_structlog(json_output=True)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for inspection during the session)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
        correlation_id: Optional[UUID] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for the trail.
                    If None, only logs locally.
            correlation_id: Attached to every event this logger builds.
                    A fresh one is created if omitted.
        """
        self._storage = storage
        self._correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger("housing_office.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except StorageError as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_resident_added(self, resident_id: int, name: str, address: str) -> None:
        self.log(AuditEventBuilder.resident_added(
            resident_id=resident_id,
            name=name,
            address=address,
            correlation_id=self._correlation_id,
        ))

    def log_tariff_set(
        self,
        service: str,
        rate: float,
        previous_rate: Optional[float],
    ) -> None:
        self.log(AuditEventBuilder.tariff_set(
            service=service,
            rate=rate,
            previous_rate=previous_rate,
            correlation_id=self._correlation_id,
        ))

    def log_consumption_recorded(
        self,
        resident_id: int,
        service: str,
        amount: float,
        charged: float,
    ) -> None:
        self.log(AuditEventBuilder.consumption_recorded(
            resident_id=resident_id,
            service=service,
            amount=amount,
            charged=charged,
            correlation_id=self._correlation_id,
        ))

    def log_cost_queried(self, substring: str, total_cost: float) -> None:
        self.log(AuditEventBuilder.cost_queried(
            substring=substring,
            total_cost=total_cost,
            correlation_id=self._correlation_id,
        ))

    def log_resident_viewed(self, resident_id: int) -> None:
        self.log(AuditEventBuilder.resident_viewed(
            resident_id=resident_id,
            correlation_id=self._correlation_id,
        ))

    def log_resident_not_found(self, resident_id: int, command: str) -> None:
        """Log a command rejected because the resident id is unknown."""
        self.log(AuditEventBuilder.resident_not_found(
            resident_id=resident_id,
            command=command,
            correlation_id=self._correlation_id,
        ))

    def log_name_search_not_found(self, substring: str) -> None:
        self.log(AuditEventBuilder.name_search_not_found(
            substring=substring,
            correlation_id=self._correlation_id,
        ))

    def log_invalid_argument(
        self,
        command: str,
        field: str,
        value: Any,
        reason: str,
    ) -> None:
        """Log a command rejected for an out-of-domain argument."""
        self.log(AuditEventBuilder.invalid_argument(
            command=command,
            field=field,
            value=value,
            reason=reason,
            correlation_id=self._correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of an operator session and pass it to the
    AuditLogger for that session.
    """
    return uuid4()
