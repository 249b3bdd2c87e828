"""
Report Models

Read-only snapshots returned by registry queries and the command layer.
They carry structured data only; turning them into text is the front
end's job.

DESIGN DECISION: Every report is a frozen Pydantic model. Two snapshots
taken with no mutation in between compare equal, and callers cannot write
back into the registry through them.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from housing_office.models.service import Service


# =============================================================================
# RESIDENT REPORTS
# =============================================================================

class ResidentSummary(BaseModel):
    """Identity of one resident, as shown in resident lists."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Resident ID")
    name: str = Field(..., description="Full name as entered")
    address: str = Field(..., description="Address as entered")


class ConsumptionLine(BaseModel):
    """
    One consumption entry priced against the current tariffs.
    """
    model_config = ConfigDict(frozen=True)

    service: Service
    label: str = Field(..., description="Display name of the service")
    unit: str = Field(..., description="Billing unit (e.g., kWh, m³)")
    amount: float = Field(..., ge=0, description="Units consumed")
    rate: float = Field(..., ge=0, description="Tariff applied per unit")
    cost: float = Field(..., ge=0, description="rate * amount")


class ResidentReport(BaseModel):
    """
    Detailed view of one resident.

    Costs are computed live from the tariff table at the moment the report
    is built, so a later tariff change shows up in the next report.
    """
    model_config = ConfigDict(frozen=True)

    resident_id: int = Field(..., ge=1)
    name: str
    address: str
    lines: tuple[ConsumptionLine, ...] = Field(default_factory=tuple)
    total_cost: float = Field(..., ge=0)
    currency_unit: str = Field(default="RUB")

    @property
    def has_consumption(self) -> bool:
        """Whether any service has been consumed yet."""
        return len(self.lines) > 0


# =============================================================================
# OFFICE STATISTICS
# =============================================================================

class StatsSnapshot(BaseModel):
    """
    Aggregate view of the whole office.

    cumulative_revenue is accrued at the tariff in effect when each entry
    was recorded. It is NOT recomputed when tariffs change.
    """
    model_config = ConfigDict(frozen=True)

    resident_count: int = Field(..., ge=0)
    tariffs: dict[Service, float] = Field(
        ...,
        description="Current rate for every service"
    )
    cumulative_revenue: float = Field(..., ge=0)
    residents: tuple[ResidentSummary, ...] = Field(default_factory=tuple)
    currency_unit: str = Field(default="RUB")


# =============================================================================
# COMMAND RESULTS
# =============================================================================

class CommandStatus(str, Enum):
    """Outcome of a single command."""
    OK = "ok"
    RESIDENT_NOT_FOUND = "resident_not_found"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"


class CommandResult(BaseModel):
    """
    Result of executing a command against the registry.

    Domain failures are returned here instead of raised, so the front end
    can report them and keep its loop running. Which optional field is set
    depends on the command.
    """
    model_config = ConfigDict(frozen=True)

    command: str = Field(..., description="Name of the command executed")
    status: CommandStatus
    message: str = Field(..., description="Human-readable outcome")

    resident_id: Optional[int] = None
    value: Optional[float] = Field(
        default=None,
        description="Numeric answer (e.g., total cost for a name search)"
    )
    report: Optional[ResidentReport] = None

    @property
    def success(self) -> bool:
        return self.status == CommandStatus.OK
