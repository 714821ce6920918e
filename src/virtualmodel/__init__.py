"""
virtualmodel - Virtual Properties for Persisted Records

Records keep their real attributes in a plain mapping; models add virtual
properties computed from that state, optionally writable, and merged into
serialized output on request.
"""

from .core import (
    Model, Record, Virtual, VirtualRegistry, virtual, PatchCapture,
    SaveOptions, SerializeOptions,
    VirtualModelError, VirtualDeclarationError, PatchCaptureClosedError,
)
from .persistence import (
    RecordPersistenceBackend,
    MemoryRepo, get_memory_persistence,
    register_backend, get_backend,
    PersistenceError, RecordNotFoundError, NoRowsUpdatedError,
)
from .config import (
    ApplicationConfig, Environment, configure_logging, get_config, set_config
)

__all__ = [
    # Core model components
    'Model',
    'Record',
    'Virtual',
    'VirtualRegistry',
    'virtual',
    'PatchCapture',
    'SaveOptions',
    'SerializeOptions',

    # Persistence
    'RecordPersistenceBackend',
    'MemoryRepo',
    'get_memory_persistence',
    'register_backend',
    'get_backend',

    # Errors
    'VirtualModelError',
    'VirtualDeclarationError',
    'PatchCaptureClosedError',
    'PersistenceError',
    'RecordNotFoundError',
    'NoRowsUpdatedError',

    # Configuration
    'ApplicationConfig',
    'Environment',
    'configure_logging',
    'get_config',
    'set_config',
]
