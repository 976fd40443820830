# fsmstore/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, List, Optional


class FSMError(Exception):
    """
    Base exception class for errors raised by the state machine engine and its
    persistence adapters.

    :param message: Human readable description.
    :param details: Optional dictionary of additional context.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(FSMError):
    """
    Raised when a machine definition is malformed or a record type has no
    registered machine for a requested name.
    """


class UnresolvedAttributeError(FSMError, AttributeError):
    """
    Raised when a write targets a name that is neither a declared attribute of
    the record type nor a registered machine attribute.
    """

    def __init__(self, owner: type, name: str) -> None:
        super().__init__(
            f"'{owner.__name__}' object has no attribute setter for '{name}'",
            {"owner": owner.__name__, "attribute": name},
        )
        self.owner = owner
        self.name = name


class UndefinedEventError(FSMError):
    """
    Raised when an event name is fired that the machine does not define.
    """


class UndefinedStateError(FSMError):
    """
    Raised when a state name is not part of the machine definition.
    """


class InvalidTransition(FSMError):
    """
    Raised when an event cannot transition from the current state, either
    because no transition starts there or because its guards rejected it.
    """

    def __init__(
        self,
        event_name: str,
        from_state: Optional[str],
        machine_name: str,
        failures: Optional[List[str]] = None,
    ) -> None:
        message = f"Event '{event_name}' cannot transition from '{from_state}'"
        if failures:
            message += f". Failed guards: {', '.join(failures)}"
        super().__init__(
            message,
            {"event": event_name, "from_state": from_state, "machine": machine_name, "failures": failures or []},
        )
        self.event_name = event_name
        self.from_state = from_state
        self.machine_name = machine_name
        self.failures = failures or []


class PersistenceError(FSMError):
    """
    Raised when the storage backend rejects a save or a single-field update.
    """


class RecordNotSaved(PersistenceError):
    """
    Raised when a single-field update is attempted on a record that has never
    been persisted.
    """


class RecordInvalid(PersistenceError):
    """
    Raised when a persisted state write was rejected and the machine treats that
    as fatal. Carries the offending record for inspection.
    """

    def __init__(self, record: Any) -> None:
        errors = list(getattr(record, "errors", []) or [])
        message = "Validation failed"
        if errors:
            message += f": {'; '.join(errors)}"
        super().__init__(message, {"record": type(record).__name__, "errors": errors})
        self.record = record
        self.errors = errors
