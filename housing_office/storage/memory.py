"""
In-Memory Audit Storage

Keeps the audit trail in a list for the lifetime of the process.
Nothing is persisted across runs.
"""

from typing import Optional
from uuid import UUID

from housing_office.models.audit import AuditEvent
from housing_office.storage.interface import (
    AuditStorageInterface,
    CapacityError,
)


class InMemoryAuditStorage(AuditStorageInterface):
    """
    List-backed audit storage.

    max_events bounds the trail; None means unbounded. Once the bound is
    reached append_event raises CapacityError rather than dropping old
    events, since the trail is append-only.
    """

    def __init__(self, max_events: Optional[int] = None):
        self._events: list[AuditEvent] = []
        self._max_events = max_events

    def __len__(self) -> int:
        return len(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        if self._max_events is not None and len(self._events) >= self._max_events:
            raise CapacityError(
                f"Audit trail is full ({self._max_events} events)"
            )
        self._events.append(event)
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: Optional[int] = None,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type
            and (entity_id is None or e.entity_id == entity_id)
        ]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events[-limit:])) if limit > 0 else []
