"""
virtualmodel Persistence Layer - Base Classes

This module provides the abstract interface for record persistence backends.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class PersistenceError(Exception):
    """Base exception for persistence operations"""
    pass


class RecordNotFoundError(PersistenceError):
    """Raised when a record cannot be found in the backend"""
    pass


class NoRowsUpdatedError(PersistenceError):
    """Raised when an update did not touch any stored record"""
    pass


class RecordPersistenceBackend(ABC):
    """
    Abstract base class for record persistence backends.

    Records are stored per table as plain attribute mappings keyed by id.
    Implementations only move attribute mappings around; they know nothing
    about virtual properties.
    """

    @abstractmethod
    async def insert(self, table: str, attributes: Dict[str, Any], id_attribute: str = "id") -> Any:
        """
        Store a new record.

        Args:
            table: Table (namespace) the record belongs to
            attributes: Attribute mapping to store
            id_attribute: Name of the identity attribute

        Returns:
            The identity assigned to the stored record
        """
        pass

    @abstractmethod
    async def update(self, table: str, record_id: Any, attributes: Dict[str, Any], patch: bool = False) -> int:
        """
        Update an existing record.

        Args:
            table: Table (namespace) the record belongs to
            record_id: Identity of the stored record
            attributes: Attributes to write
            patch: Merge into the stored attributes instead of replacing them

        Returns:
            Number of records updated
        """
        pass

    @abstractmethod
    async def load(self, table: str, record_id: Any) -> Optional[Dict[str, Any]]:
        """
        Load stored attributes for a record.

        Returns:
            A copy of the stored attributes if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, table: str, record_id: Any) -> bool:
        """
        Delete a record.

        Returns:
            True if a record was removed, False otherwise
        """
        pass

    async def exists(self, table: str, record_id: Any) -> bool:
        """Check if a record exists in the backend."""
        return await self.load(table, record_id) is not None
