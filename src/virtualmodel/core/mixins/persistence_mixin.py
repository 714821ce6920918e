"""
PersistenceMixin: Persistence operations without attribute-storage dependencies.

This mixin provides save, fetch and destroy on top of the concrete record's
``attributes`` mapping and its get/set, delegating storage to a persistence backend.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Tuple, Type, TYPE_CHECKING

from ..options import SaveOptions
from ...persistence import get_backend, PersistenceError, RecordNotFoundError, NoRowsUpdatedError

if TYPE_CHECKING:
    from ...persistence import RecordPersistenceBackend

logger = logging.getLogger(__name__)


class PersistenceMixin:
    """
    Persistence operations mixin.

    Provides save, fetch and destroy methods that work with any
    persistence backend through the record's configuration.
    """

    # Configuration as class attributes
    id_attribute: str = "id"
    table_name: Optional[str] = None
    _persistence_backend_class: Optional[Type['RecordPersistenceBackend']] = None

    @property
    def persistence_backend(self) -> 'RecordPersistenceBackend':
        """Get the persistence backend for this record."""
        if self._persistence_backend_class is not None:
            return self._persistence_backend_class()
        return get_backend()

    @property
    def table(self) -> str:
        return self.table_name or self.__class__.__name__.lower()

    @property
    def id(self) -> Any:
        return self.get(self.id_attribute)

    def is_new(self) -> bool:
        """True until the record has a persisted identity."""
        return self.id is None

    def save_method(self, method: Optional[str] = None) -> str:
        """Resolve the save method, defaulting to insert for new records."""
        return method or ("insert" if self.is_new() else "update")

    @staticmethod
    def _save_arguments(key, value, options: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Normalize ``save("key", value)`` and ``save({...})`` call shapes."""
        if key is None or isinstance(key, Mapping):
            attrs = dict(key or {})
        else:
            attrs = {key: value}
        return attrs, dict(options)

    async def save(self, key=None, value=None, **options):
        """
        Persist the record.

        Args:
            key: Attribute name, or a mapping of attributes to save
            value: Attribute value when ``key`` is a name
            **options: ``method`` ("insert" or "update") and ``patch``

        Returns:
            The record itself once the backend confirmed the write
        """
        attrs, options = self._save_arguments(key, value, options)
        opts = SaveOptions.model_validate(options)
        method = self.save_method(opts.method)
        patch = method == "update" and opts.patch
        backend = self.persistence_backend

        if patch:
            payload = attrs
        else:
            self.set(attrs)
            payload = dict(self.attributes)

        logger.debug(f"Saving {self.table} via {method}{' (patch)' if patch else ''}: {sorted(payload)}")

        if method == "insert":
            record_id = await backend.insert(self.table, payload, self.id_attribute)
            self.set(self.id_attribute, record_id)
        else:
            if self.id is None:
                raise PersistenceError(f"Cannot update a {self.table} record without '{self.id_attribute}'")
            rows = await backend.update(self.table, self.id, payload, patch=patch)
            if not rows:
                raise NoRowsUpdatedError(f"No rows updated for {self.table}:{self.id}")
            if patch:
                self.set(payload)

        self._sync_previous()
        return self

    async def fetch(self):
        """Reload attributes from the backend."""
        if self.id is None:
            raise RecordNotFoundError(f"Cannot fetch a {self.table} record without '{self.id_attribute}'")
        stored = await self.persistence_backend.load(self.table, self.id)
        if stored is None:
            raise RecordNotFoundError(f"{self.table}:{self.id} not found")
        self.set(stored)
        self._sync_previous()
        return self

    async def destroy(self):
        """Delete the record from the backend and clear its attributes."""
        if self.id is None:
            raise RecordNotFoundError(f"Cannot destroy a {self.table} record without '{self.id_attribute}'")
        if not await self.persistence_backend.delete(self.table, self.id):
            raise RecordNotFoundError(f"{self.table}:{self.id} not found")
        self.clear()
        self._sync_previous()
        return self

    def _sync_previous(self) -> None:
        """Hook for records that track changes since the last sync."""
        pass
