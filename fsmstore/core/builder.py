# fsmstore/core/builder.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Dict, Iterable, List, Optional, Sequence, Union

from fsmstore.core.config import MachineConfig
from fsmstore.core.errors import ConfigurationError
from fsmstore.core.events import Event
from fsmstore.core.machine import StateMachineDefinition
from fsmstore.core.transitions import Transition
from fsmstore.core.validation import Validator
from fsmstore.interfaces.types import DEFAULT_MACHINE, AttributeName, EventName, Guard, MachineName, StateName

Source = Union[None, StateName, Iterable[StateName]]


class MachineBuilder:
    """Builds state machine definitions.

    States are declared in order; the first declared state is the initial
    state unless another one is declared with ``initial=True``. Calls chain:

        definition = (
            MachineBuilder("status")
            .state("open", initial=True)
            .state("closed")
            .event("close", source="open", target="closed")
            .build()
        )
    """

    def __init__(
        self,
        name: MachineName = DEFAULT_MACHINE,
        attribute_name: Optional[AttributeName] = None,
        config: Optional[MachineConfig] = None,
        validator: Optional[Validator] = None,
    ) -> None:
        """Initialize the builder.

        Args:
            name: Machine name, unique per owner type
            attribute_name: Record attribute holding the state. Defaults to
                ``"state"`` for the default machine and the machine name otherwise
            config: Behaviour switches for the machine
            validator: Validator run by build()
        """
        self._name = name
        if attribute_name is None:
            attribute_name = "state" if name == DEFAULT_MACHINE else name
        self._attribute_name = attribute_name
        self._config = config or MachineConfig()
        self._validator = validator or Validator()
        self._states: List[StateName] = []
        self._initial: Optional[StateName] = None
        self._events: Dict[EventName, Event] = {}

    def state(self, name: StateName, initial: bool = False) -> "MachineBuilder":
        """Declare a state.

        Raises:
            ConfigurationError: If a second state is declared initial
        """
        self._states.append(name)
        if initial:
            if self._initial is not None:
                raise ConfigurationError(
                    f"Machine '{self._name}' already has initial state '{self._initial}'.",
                    {"machine": self._name},
                )
            self._initial = name
        return self

    def states(self, *names: StateName) -> "MachineBuilder":
        for name in names:
            self.state(name)
        return self

    def event(
        self,
        name: EventName,
        target: StateName,
        source: Source = None,
        guards: Optional[Sequence[Guard]] = None,
    ) -> "MachineBuilder":
        """Declare a transition for an event. Repeated calls with the same
        event name add further transitions, tried in declaration order.

        Args:
            name: Event name
            target: Target state
            source: Source state, several source states, or None for any state
            guards: Callables receiving the record and the fire() arguments
        """
        event = self._events.setdefault(name, Event(name))
        if source is None or isinstance(source, str):
            sources = [source]
        else:
            sources = list(source)
        for s in sources:
            event.add_transition(Transition(s, target, guards))
        return self

    def build(self) -> StateMachineDefinition:
        """Build and validate the definition.

        Returns:
            The immutable definition

        Raises:
            ConfigurationError: If the definition is invalid
        """
        initial = self._initial if self._initial is not None else (self._states[0] if self._states else None)
        definition = StateMachineDefinition(
            name=self._name,
            attribute_name=self._attribute_name,
            initial_state=initial,
            states=tuple(self._states),
            events={n: Event(n, e.transitions) for n, e in self._events.items()},
            config=self._config,
        )
        self._validator.validate_definition(definition)
        return definition
