# fsmstore/persistence/base.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from collections.abc import Collection
from typing import Any, ClassVar, Optional

from fsmstore.core.errors import ConfigurationError
from fsmstore.core.machine import MachineInstance, StateMachineDefinition
from fsmstore.core.store import MachineSet, StateMachineStore
from fsmstore.interfaces.types import DEFAULT_MACHINE, AttributeName, EventName, MachineName, StateName, TransitionBody


def is_blank(value: Any) -> bool:
    """
    True for values a record treats as "not set": None, False, strings made
    only of whitespace and empty collections.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Collection):
        return len(value) == 0
    return False


class BasePersistence:
    """
    Storage neutral half of the persistence contract. Reads and writes the
    state of each machine through the adapter's attribute hooks; subclasses
    supply those hooks for a concrete storage framework.

    The store is handed over as a class keyword:

        class Ticket(ModelPersistence, Record, store=registry):
            ...
    """

    fsm_store: ClassVar[Optional[StateMachineStore]] = None

    def __init_subclass__(cls, store: Optional[StateMachineStore] = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if store is not None:
            cls.fsm_store = store

    @classmethod
    def fsm_machines(cls) -> MachineSet:
        """Machines registered for this type or its nearest registered ancestor."""
        if cls.fsm_store is None:
            return MachineSet()
        machines = cls.fsm_store.fetch(cls, True)
        return machines if machines is not None else MachineSet()

    @classmethod
    def fsm_definition(cls, name: MachineName = DEFAULT_MACHINE) -> StateMachineDefinition:
        definition = cls.fsm_machines().machine(name)
        if definition is None:
            raise ConfigurationError(
                f"There is no state machine with the name '{name}' defined in {cls.__name__}!",
                {"owner": cls.__name__, "machine": name},
            )
        return definition

    def machine(self, name: MachineName = DEFAULT_MACHINE) -> MachineInstance:
        """The machine ``name`` bound to this record."""
        return MachineInstance(self, self.fsm_definition(name))

    def read_state(self, name: MachineName = DEFAULT_MACHINE) -> Optional[StateName]:
        """
        The current state of a machine. A blank attribute on a record that was
        never persisted reads as the initial state; on a persisted record it
        reads as None.
        """
        definition = self.fsm_definition(name)
        value = self.fsm_read_attribute(definition.attribute_name)
        if is_blank(value):
            return definition.initial_state if self.fsm_new_record() else None
        return value

    def write_state_without_persistence(self, state: StateName, name: MachineName = DEFAULT_MACHINE) -> None:
        definition = self.fsm_definition(name)
        self.fsm_write_attribute(definition.attribute_name, state)

    def write_state(self, state: StateName, name: MachineName = DEFAULT_MACHINE) -> bool:
        """Write a state. Without a storage layer there is nothing to persist."""
        self.write_state_without_persistence(state, name)
        return True

    def fire_event(self, name: MachineName, event_name: EventName, body: TransitionBody) -> bool:
        """Run the body of an event firing. ORM layers wrap it in a transaction."""
        return body()

    # Adapter hooks

    def fsm_read_attribute(self, name: AttributeName) -> Any:
        raise NotImplementedError()

    def fsm_write_attribute(self, name: AttributeName, value: Any) -> None:
        raise NotImplementedError()

    def fsm_new_record(self) -> bool:
        raise NotImplementedError()
