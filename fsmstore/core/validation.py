# fsmstore/core/validation.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING

from fsmstore.core.errors import ConfigurationError

if TYPE_CHECKING:
    from fsmstore.core.machine import StateMachineDefinition


class Validator:
    """
    Performs construction-time validation of machine definitions, ensuring
    states, transitions and guards conform to the rules the engine relies on.
    """

    def __init__(self) -> None:
        self._rules_engine = _ValidationRulesEngine()

    def validate_definition(self, definition: "StateMachineDefinition") -> None:
        """
        Check the definition's states and transitions for consistency.

        :param definition: The definition to validate.
        :raises ConfigurationError: If validation fails.
        """
        self._rules_engine.validate_definition(definition)


class _ValidationRulesEngine:
    """
    Internal engine applying the default rule set. Kept separate so rule sets
    can be swapped without touching Validator's interface.
    """

    def __init__(self) -> None:
        self._default_rules = _DefaultValidationRules

    def validate_definition(self, definition: "StateMachineDefinition") -> None:
        self._default_rules.validate_names(definition)
        self._default_rules.validate_states(definition)
        self._default_rules.validate_transitions(definition)


class _DefaultValidationRules:
    """
    Built-in rules ensuring basic correctness of a definition.
    """

    @staticmethod
    def validate_names(definition: "StateMachineDefinition") -> None:
        if not definition.name:
            raise ConfigurationError("Machine must have a name.")
        attribute_name = definition.attribute_name
        # records keep underscore names out of their persisted attributes
        if not attribute_name or not attribute_name.isidentifier() or attribute_name.startswith("_"):
            raise ConfigurationError(
                f"Machine '{definition.name}' has an invalid attribute name {definition.attribute_name!r}.",
                {"machine": definition.name},
            )

    @staticmethod
    def validate_states(definition: "StateMachineDefinition") -> None:
        """
        Check that there is at least one state, no duplicates, and that the
        initial state is one of them.
        """
        if not definition.states:
            raise ConfigurationError(f"Machine '{definition.name}' must define at least one state.")
        if len(set(definition.states)) != len(definition.states):
            raise ConfigurationError(f"Machine '{definition.name}' defines duplicate states.")
        for state in definition.states:
            if not state:
                raise ConfigurationError(f"Machine '{definition.name}' has a blank state name.")
        if definition.initial_state not in definition.states:
            raise ConfigurationError(
                f"Initial state '{definition.initial_state}' is not a state of machine '{definition.name}'.",
                {"machine": definition.name, "state": definition.initial_state},
            )

    @staticmethod
    def validate_transitions(definition: "StateMachineDefinition") -> None:
        """
        Check that transition endpoints are known states and guards are callable.
        """
        for event_name, event in definition.events.items():
            if not event_name:
                raise ConfigurationError(f"Machine '{definition.name}' has an event without a name.")
            for t in event.transitions:
                if t.source is not None and t.source not in definition.states:
                    raise ConfigurationError(
                        f"Event '{event_name}' starts from unknown state '{t.source}'.",
                        {"machine": definition.name, "event": event_name},
                    )
                if t.target not in definition.states:
                    raise ConfigurationError(
                        f"Event '{event_name}' targets unknown state '{t.target}'.",
                        {"machine": definition.name, "event": event_name},
                    )
                for g in t.guards:
                    if not callable(g):
                        raise ConfigurationError(
                            f"Guards of event '{event_name}' must be callable.",
                            {"machine": definition.name, "event": event_name},
                        )
