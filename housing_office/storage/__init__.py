"""
Storage Package

Provides the audit storage interface and its in-memory implementation.
"""

from housing_office.storage.interface import (
    AuditStorageInterface,
    CapacityError,
    StorageError,
)
from housing_office.storage.memory import InMemoryAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "CapacityError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
]
