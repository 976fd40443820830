# fsmstore/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import List, Optional, Sequence

from fsmstore.core.transitions import Transition
from fsmstore.interfaces.types import EventName, StateName


class Event:
    """
    A named trigger owning the transitions it may take. Transitions are tried in
    declaration order; the first one that applies and passes its guards wins.
    """

    def __init__(self, name: EventName, transitions: Optional[Sequence[Transition]] = None) -> None:
        self._name = name
        self._transitions: List[Transition] = list(transitions or [])

    @property
    def name(self) -> EventName:
        """The name of the event."""
        return self._name

    @property
    def transitions(self) -> List[Transition]:
        return list(self._transitions)

    def add_transition(self, transition: Transition) -> None:
        self._transitions.append(transition)

    def transitions_from(self, state: Optional[StateName]) -> List[Transition]:
        """Transitions whose source matches ``state``, in declaration order."""
        return [t for t in self._transitions if t.applies_from(state)]

    def __repr__(self) -> str:
        return f"Event({self._name!r}, {self._transitions!r})"
