"""fsmstore: state machines persisted through pluggable record adapters

Machine definitions are independent of storage. A record type mixes in a
persistence adapter and the engine reads, writes and persists each machine's
state through it.

Responsibilities:
    - Machine definition, validation and registration per owner type
    - Event firing with guards
    - Initial state enforcement before validation
    - Attribute indirection, including dynamic attribute bags
    - Persisted state writes with in-memory rollback on failure

Cross-cutting Concerns:
    Thread Safety:
        - One record is used by one thread at a time; no internal locking
        - StateMachineStore is safe for concurrent readers after startup

    Error Handling:
        - Structured error hierarchy rooted at FSMError
        - Storage errors are never swallowed

    Logging:
        - Standard library logging under the ``fsmstore`` namespace
        - No handlers are installed by the library
"""

from fsmstore.core.builder import MachineBuilder
from fsmstore.core.config import MachineConfig
from fsmstore.core.errors import (
    ConfigurationError,
    FSMError,
    InvalidTransition,
    PersistenceError,
    RecordInvalid,
    RecordNotSaved,
    UndefinedEventError,
    UndefinedStateError,
    UnresolvedAttributeError,
)
from fsmstore.core.machine import MachineInstance, StateMachineDefinition
from fsmstore.core.store import MachineSet, StateMachineStore
from fsmstore.model import MemoryBackend, Record, StorageBackend
from fsmstore.persistence import BasePersistence, ModelPersistence, ORMPersistence

__version__ = "0.1.0"

__all__ = [
    "BasePersistence",
    "ConfigurationError",
    "FSMError",
    "InvalidTransition",
    "MachineBuilder",
    "MachineConfig",
    "MachineInstance",
    "MachineSet",
    "MemoryBackend",
    "ModelPersistence",
    "ORMPersistence",
    "PersistenceError",
    "Record",
    "RecordInvalid",
    "RecordNotSaved",
    "StateMachineDefinition",
    "StateMachineStore",
    "StorageBackend",
    "UndefinedEventError",
    "UndefinedStateError",
    "UnresolvedAttributeError",
]
