"""
virtualmodel Persistence Layer - Memory Backend

In-memory record persistence implementation for development and testing.
"""

import logging
from typing import Any, Dict, Optional
from uuid import uuid4

from .base import RecordPersistenceBackend

logger = logging.getLogger(__name__)


class MemoryRepo(RecordPersistenceBackend):
    """
    In-memory record persistence implementation (Singleton).

    Provides fast persistence for development and testing.
    Data is lost when the application restarts.
    Uses singleton pattern to ensure single shared instance.
    """

    _instance = None

    def __new__(cls):
        """Implement singleton pattern (one instance per backend class)."""
        if cls.__dict__.get("_instance") is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize memory persistence backend (only once)."""
        if not hasattr(self, "_tables"):
            self._tables: Dict[str, Dict[Any, Dict[str, Any]]] = {}

    def _table(self, table: str) -> Dict[Any, Dict[str, Any]]:
        return self._tables.setdefault(table, {})

    async def insert(self, table: str, attributes: Dict[str, Any], id_attribute: str = "id") -> Any:
        """Store a new record, generating an id when none is supplied."""
        record_id = attributes.get(id_attribute)
        if record_id is None:
            record_id = uuid4().hex
        stored = dict(attributes)
        stored[id_attribute] = record_id
        self._table(table)[record_id] = stored
        logger.debug(f"Inserted {table}:{record_id}")
        return record_id

    async def update(self, table: str, record_id: Any, attributes: Dict[str, Any], patch: bool = False) -> int:
        """Merge (patch) or replace the stored attributes of a record."""
        rows = self._table(table)
        if record_id not in rows:
            return 0
        if patch:
            rows[record_id].update(attributes)
        else:
            rows[record_id] = dict(attributes)
        logger.debug(f"Updated {table}:{record_id} ({'patch' if patch else 'full'}): {sorted(attributes)}")
        return 1

    async def load(self, table: str, record_id: Any) -> Optional[Dict[str, Any]]:
        """Load a copy of the stored attributes."""
        stored = self._table(table).get(record_id)
        return dict(stored) if stored is not None else None

    async def delete(self, table: str, record_id: Any) -> bool:
        """Delete a record from memory."""
        existed = self._table(table).pop(record_id, None) is not None
        if existed:
            logger.debug(f"Deleted {table}:{record_id}")
        return existed

    def clear(self) -> None:
        """Drop every stored record."""
        self._tables.clear()


# Convenience function to get singleton instance
def get_memory_persistence() -> MemoryRepo:
    """Get the singleton memory persistence instance."""
    return MemoryRepo()
