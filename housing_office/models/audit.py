"""
Audit Models for Housing Office

Every command that changes the office, and every command that fails,
produces an audit event. This provides:
1. A trace of who was registered and what was billed
2. A record of tariff changes (the tariff table itself keeps no history)
3. Debugging information when a command is rejected

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Mutations
    RESIDENT_ADDED = "resident_added"
    TARIFF_SET = "tariff_set"
    CONSUMPTION_RECORDED = "consumption_recorded"

    # Queries worth tracing
    COST_QUERIED = "cost_queried"
    RESIDENT_VIEWED = "resident_viewed"

    # Rejected commands
    RESIDENT_NOT_FOUND = "resident_not_found"
    NAME_SEARCH_NOT_FOUND = "name_search_not_found"
    INVALID_ARGUMENT = "invalid_argument"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'resident', 'tariff')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Resident ID this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate events from one operator session"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.resident_added(resident_id, name, address)
        event = AuditEventBuilder.tariff_set(service, rate, correlation_id)
    """

    @staticmethod
    def resident_added(
        resident_id: int,
        name: str,
        address: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RESIDENT_ADDED,
            entity_type="resident",
            entity_id=resident_id,
            correlation_id=correlation_id,
            description=f"Resident added: {name} (ID {resident_id})",
            details={
                "name": name,
                "address": address,
            },
        )

    @staticmethod
    def tariff_set(
        service: str,
        rate: float,
        previous_rate: Optional[float],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TARIFF_SET,
            entity_type="tariff",
            correlation_id=correlation_id,
            description=f"Tariff for {service} set to {rate:.2f}",
            details={
                "service": service,
                "rate": rate,
                "previous_rate": previous_rate,
            },
        )

    @staticmethod
    def consumption_recorded(
        resident_id: int,
        service: str,
        amount: float,
        charged: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONSUMPTION_RECORDED,
            entity_type="resident",
            entity_id=resident_id,
            correlation_id=correlation_id,
            description=f"Consumption recorded: {amount} of {service}",
            details={
                "service": service,
                "amount": amount,
                "charged": charged,
            },
        )

    @staticmethod
    def cost_queried(
        substring: str,
        total_cost: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COST_QUERIED,
            severity=AuditSeverity.DEBUG,
            entity_type="resident",
            correlation_id=correlation_id,
            description=f'Total cost queried for name containing "{substring}"',
            details={
                "substring": substring,
                "total_cost": total_cost,
            },
        )

    @staticmethod
    def resident_viewed(
        resident_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RESIDENT_VIEWED,
            severity=AuditSeverity.DEBUG,
            entity_type="resident",
            entity_id=resident_id,
            correlation_id=correlation_id,
            description=f"Resident {resident_id} viewed",
        )

    @staticmethod
    def resident_not_found(
        resident_id: int,
        command: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RESIDENT_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="resident",
            entity_id=resident_id,
            correlation_id=correlation_id,
            description=f"{command}: resident {resident_id} not found",
            details={"command": command},
            error_code="resident_not_found",
        )

    @staticmethod
    def name_search_not_found(
        substring: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NAME_SEARCH_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="resident",
            correlation_id=correlation_id,
            description=f'No resident name contains "{substring}"',
            details={"substring": substring},
            error_code="not_found",
        )

    @staticmethod
    def invalid_argument(
        command: str,
        field: str,
        value: Any,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_ARGUMENT,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"{command}: invalid {field}",
            details={
                "command": command,
                "field": field,
                "value": repr(value),
            },
            error_code="invalid_argument",
            error_message=reason,
        )
