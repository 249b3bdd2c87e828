"""
Abstract Audit Storage Interface

DESIGN DECISION: The audit logger talks to storage through this interface.
This allows us to:
1. Keep the trail in memory, which is all the office needs today
2. Swap in a file or database backend without touching the logger
3. Inspect the trail directly in tests

Audit logs are append-only - we never delete or modify them.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from housing_office.models.audit import AuditEvent


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully

        Raises:
            StorageError: If the event could not be stored
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one operator session).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: Optional[int] = None,
    ) -> list[AuditEvent]:
        """
        Get all events for an entity type, optionally one entity.

        Args:
            entity_type: Type of entity (e.g., 'resident', 'tariff')
            entity_id: Resident ID; None matches every entity of the type

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CapacityError(StorageError):
    """The storage backend cannot accept more events."""
    pass
