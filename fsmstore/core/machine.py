# fsmstore/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from fsmstore.core.config import MachineConfig
from fsmstore.core.errors import InvalidTransition, UndefinedEventError, UndefinedStateError
from fsmstore.core.events import Event
from fsmstore.interfaces.types import AttributeName, EventName, MachineName, StateName

if TYPE_CHECKING:
    from fsmstore.persistence.base import BasePersistence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateMachineDefinition:
    """
    Storage independent description of one machine. Built once by
    MachineBuilder and shared by every record of the owner type.
    """

    name: MachineName
    attribute_name: AttributeName
    initial_state: StateName
    states: Tuple[StateName, ...]
    events: Dict[EventName, Event] = field(default_factory=dict)
    config: MachineConfig = field(default_factory=MachineConfig)

    def event(self, name: EventName) -> Event:
        try:
            return self.events[name]
        except KeyError:
            raise UndefinedEventError(
                f"Machine '{self.name}' has no event '{name}'", {"machine": self.name, "event": name}
            ) from None

    def has_state(self, name: Optional[StateName]) -> bool:
        return name in self.states

    def state(self, name: StateName) -> StateName:
        if not self.has_state(name):
            raise UndefinedStateError(
                f"Machine '{self.name}' has no state '{name}'", {"machine": self.name, "state": name}
            )
        return name


class MachineInstance:
    """
    Binds a StateMachineDefinition to one record. Holds no state of its own:
    the current state is always read back from the record through the
    persistence layer.
    """

    def __init__(self, record: "BasePersistence", definition: StateMachineDefinition) -> None:
        """
        :param record: The record whose attribute slot holds the state.
        :param definition: The machine to run against that slot.
        """
        self._record = record
        self._definition = definition

    @property
    def name(self) -> MachineName:
        return self._definition.name

    @property
    def definition(self) -> StateMachineDefinition:
        return self._definition

    @property
    def current_state(self) -> Optional[StateName]:
        """The state currently held by the record, see BasePersistence.read_state."""
        return self._record.read_state(self._definition.name)

    def enter_initial_state(self) -> StateName:
        """
        Write the initial state into the record's slot without evaluating guards
        and without persisting.
        """
        state = self._definition.initial_state
        logger.debug(
            "Entering initial state %r of machine %r on %s", state, self.name, type(self._record).__name__
        )
        self._record.write_state_without_persistence(state, self._definition.name)
        return state

    def states(self) -> List[StateName]:
        return list(self._definition.states)

    def events(self, permitted: bool = False) -> List[EventName]:
        """
        Names of the machine's events.

        :param permitted: Only include events that may fire from the current state.
        """
        names = list(self._definition.events)
        if permitted:
            names = [n for n in names if self.may_fire(n)]
        return names

    def may_fire(self, event_name: EventName, *args: Any) -> bool:
        """Whether firing ``event_name`` now would take a transition."""
        event = self._definition.event(event_name)
        current = self.current_state
        return any(t.allowed(self._record, *args) for t in event.transitions_from(current))

    def fire(self, event_name: EventName, *args: Any, persist: bool = True) -> bool:
        """
        Fire an event. The first transition that starts from the current state
        and passes its guards is taken.

        :param event_name: Event to fire.
        :param args: Extra arguments passed to the guards.
        :param persist: Persist the new state through the record's adapter.
        :return: True if the state was written (and persisted, when requested).
        :raises UndefinedEventError: If the event is unknown.
        :raises InvalidTransition: If no transition applies and the machine is whiny.
        """
        event = self._definition.event(event_name)
        return self._record.fire_event(self.name, event_name, lambda: self._take(event, args, persist))

    def _take(self, event: Event, args: Tuple[Any, ...], persist: bool) -> bool:
        current = self.current_state
        failures: List[str] = []
        for transition in event.transitions_from(current):
            failed = transition.failed_guards(self._record, *args)
            if failed:
                failures.extend(failed)
                continue
            logger.debug(
                "Machine %r firing %r: %r -> %r", self.name, event.name, current, transition.target
            )
            if persist:
                return self._record.write_state(transition.target, self.name)
            self._record.write_state_without_persistence(transition.target, self.name)
            return True

        if self._definition.config.whiny_transitions:
            raise InvalidTransition(event.name, current, self.name, failures)
        logger.debug("Machine %r ignored %r from %r", self.name, event.name, current)
        return False

    def __repr__(self) -> str:
        return f"<MachineInstance {self.name!r} of {type(self._record).__name__}>"
