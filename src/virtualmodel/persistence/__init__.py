"""
virtualmodel Persistence Module

Storage adapters that records delegate their save, fetch and destroy calls to.
"""

from typing import Dict, Optional, Type

from ..config import get_config
from .base import (
    RecordPersistenceBackend, PersistenceError, RecordNotFoundError, NoRowsUpdatedError
)
from .memory import MemoryRepo, get_memory_persistence

# Backend classes addressable by name from PersistenceConfig.default_backend
_backend_classes: Dict[str, Type[RecordPersistenceBackend]] = {"memory": MemoryRepo}


def register_backend(name: str, backend_class: Type[RecordPersistenceBackend]) -> None:
    """Register a persistence backend class under a configuration name."""
    _backend_classes[name] = backend_class


def get_backend(name: Optional[str] = None) -> RecordPersistenceBackend:
    """Instantiate the named backend, or the configured default one."""
    name = name or get_config().persistence.default_backend
    try:
        backend_class = _backend_classes[name]
    except KeyError:
        raise PersistenceError(f"Unknown persistence backend: {name}") from None
    return backend_class()


__all__ = [
    "RecordPersistenceBackend",
    "PersistenceError",
    "RecordNotFoundError",
    "NoRowsUpdatedError",
    "MemoryRepo",
    "get_memory_persistence",
    "register_backend",
    "get_backend",
]
