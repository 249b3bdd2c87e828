"""
Data Models Package

This package contains the domain entities, value types and Pydantic report
models used by the Housing Office core.
"""

from housing_office.models.service import (
    SERVICE_LABELS,
    SERVICE_UNITS,
    Service,
    default_tariffs,
    service_label,
    service_unit,
)
from housing_office.models.reports import (
    CommandResult,
    CommandStatus,
    ConsumptionLine,
    ResidentReport,
    ResidentSummary,
    StatsSnapshot,
)
from housing_office.models.resident import (
    ConsumptionEntry,
    Resident,
    ensure_non_negative,
)
from housing_office.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Services
    "SERVICE_LABELS",
    "SERVICE_UNITS",
    "Service",
    "default_tariffs",
    "service_label",
    "service_unit",
    # Residents
    "ConsumptionEntry",
    "Resident",
    "ensure_non_negative",
    # Reports
    "CommandResult",
    "CommandStatus",
    "ConsumptionLine",
    "ResidentReport",
    "ResidentSummary",
    "StatsSnapshot",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
