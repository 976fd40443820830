# fsmstore/core/store.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import threading
from typing import Dict, FrozenSet, Iterator, List, Optional

from fsmstore.core.errors import ConfigurationError
from fsmstore.core.machine import StateMachineDefinition
from fsmstore.interfaces.types import AttributeName, MachineName

logger = logging.getLogger(__name__)


class MachineSet:
    """
    The machines registered for one owner type, keyed by machine name.
    """

    def __init__(self, machines: Optional[Dict[MachineName, StateMachineDefinition]] = None) -> None:
        self._machines: Dict[MachineName, StateMachineDefinition] = dict(machines or {})

    @property
    def machine_names(self) -> List[MachineName]:
        return list(self._machines)

    def machine(self, name: MachineName) -> Optional[StateMachineDefinition]:
        return self._machines.get(name)

    def attribute_names(self) -> FrozenSet[AttributeName]:
        """Attribute names of every registered machine."""
        return frozenset(d.attribute_name for d in self._machines.values())

    def copy(self) -> "MachineSet":
        return MachineSet(self._machines)

    def _add(self, definition: StateMachineDefinition) -> None:
        if definition.name in self._machines:
            raise ConfigurationError(
                f"Machine '{definition.name}' is already registered.", {"machine": definition.name}
            )
        for other in self._machines.values():
            if other.attribute_name == definition.attribute_name:
                raise ConfigurationError(
                    f"Machines '{other.name}' and '{definition.name}' share attribute "
                    f"'{definition.attribute_name}'.",
                    {"machine": definition.name, "attribute": definition.attribute_name},
                )
        self._machines[definition.name] = definition

    def __iter__(self) -> Iterator[StateMachineDefinition]:
        return iter(list(self._machines.values()))

    def __len__(self) -> int:
        return len(self._machines)

    def __contains__(self, name: object) -> bool:
        return name in self._machines


class StateMachineStore:
    """
    Registry mapping owner types to their machines. Populated while the
    application defines its record types and only read afterwards, so lookups
    take no lock.
    """

    def __init__(self) -> None:
        self._stores: Dict[type, MachineSet] = {}
        self._register_lock = threading.Lock()

    def register(self, owner_type: type, definition: StateMachineDefinition) -> StateMachineDefinition:
        """
        Register a machine for an owner type.

        :param owner_type: The record class owning the machine.
        :param definition: The machine definition.
        :raises ConfigurationError: On a duplicate name or shared attribute.
        """
        with self._register_lock:
            machines = self._stores.get(owner_type)
            if machines is None:
                inherited = self._find_inherited(owner_type)
                machines = inherited.copy() if inherited is not None else MachineSet()
                self._stores[owner_type] = machines
            machines._add(definition)
        logger.debug("Registered machine %r on %s", definition.name, owner_type.__name__)
        return definition

    def fetch(self, owner_type: type, force_reload: bool = False) -> Optional[MachineSet]:
        """
        Look up the machines of an owner type.

        :param owner_type: The record class.
        :param force_reload: When the type has no entry of its own, resolve it
            from the nearest registered ancestor and cache a copy for the type.
            Machines registered on the ancestor after that copy was made are
            not seen by the type.
        :return: The MachineSet, or None if nothing is registered.
        """
        machines = self._stores.get(owner_type)
        if machines is not None or not force_reload:
            return machines

        inherited = self._find_inherited(owner_type)
        if inherited is None:
            return None
        with self._register_lock:
            machines = self._stores.setdefault(owner_type, inherited.copy())
        return machines

    def _find_inherited(self, owner_type: type) -> Optional[MachineSet]:
        for ancestor in owner_type.__mro__[1:]:
            if ancestor in self._stores:
                return self._stores[ancestor]
        return None

    def __contains__(self, owner_type: object) -> bool:
        return owner_type in self._stores
