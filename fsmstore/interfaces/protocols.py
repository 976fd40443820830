# fsmstore/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Dict, List, Mapping, Protocol, runtime_checkable

from fsmstore.interfaces.types import AttributeName


@runtime_checkable
class HostRecord(Protocol):
    """
    What a record type must offer for ModelPersistence to be mixed into it.

    Runtime Invariants:
    - ``attributes`` is the record's own generic attribute bag; values put there
      are persisted by ``save``.
    - Assigning an undeclared attribute raises AttributeError.
    - Hooks registered with ``before_validation`` run, in order, before the
      record's validations.

    Error Handling:
    - ``save`` returns False for an invalid record and raises PersistenceError
      when storage rejects it.
    """

    attributes: Dict[str, Any]
    errors: List[str]

    @property
    def new_record(self) -> bool: ...

    @classmethod
    def before_validation(cls, hook: Any, prepend: bool = False) -> None: ...

    def save(self) -> bool: ...

    def update_attributes(self, values: Mapping[str, Any]) -> bool: ...


@runtime_checkable
class PersistenceAdapter(Protocol):
    """
    The capability set an adapter gives the engine.

    Runtime Invariants:
    - Reads reflect the latest in-memory value; the adapter keeps no copy.
    - Writes to a registered machine attribute never raise.
    - ``fsm_supports_transactions`` is constant for an adapter type.

    Error Handling:
    - Storage errors propagate unchanged; the only translation is
      ``fsm_raise_invalid_record``.
    """

    def fsm_read_attribute(self, name: AttributeName) -> Any:
        """Return the current value of the attribute."""
        ...

    def fsm_write_attribute(self, name: AttributeName, value: Any) -> None:
        """Set the attribute in memory."""
        ...

    def fsm_save(self) -> bool:
        """Persist the whole record through the host's save path."""
        ...

    def fsm_update_column(self, name: AttributeName, value: Any) -> None:
        """Write and persist one attribute, bypassing validation."""
        ...

    def fsm_supports_transactions(self) -> bool: ...

    def fsm_raise_invalid_record(self) -> None:
        """Raise RecordInvalid carrying this record."""
        ...

    def fsm_ensure_initial_state(self) -> None: ...
