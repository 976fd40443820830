# tests/unit/test_definition_validation.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Unit tests for fsmstore.core.validation module."""

import pytest

from fsmstore.core.errors import ConfigurationError
from fsmstore.core.events import Event
from fsmstore.core.machine import StateMachineDefinition
from fsmstore.core.transitions import Transition
from fsmstore.core.validation import Validator


def make_definition(**overrides):
    values = dict(
        name="status",
        attribute_name="status",
        initial_state="open",
        states=("open", "closed"),
        events={"close": Event("close", [Transition("open", "closed")])},
    )
    values.update(overrides)
    return StateMachineDefinition(**values)


class TestValidator:
    """Tests for Validator.validate_definition."""

    def test_valid_definition_passes(self):
        Validator().validate_definition(make_definition())

    def test_missing_name(self):
        with pytest.raises(ConfigurationError, match="must have a name"):
            Validator().validate_definition(make_definition(name=""))

    @pytest.mark.parametrize("attribute_name", ["", "has space", "1st", "_wf", "__state"])
    def test_invalid_attribute_name(self, attribute_name):
        with pytest.raises(ConfigurationError, match="invalid attribute name"):
            Validator().validate_definition(make_definition(attribute_name=attribute_name))

    def test_duplicate_states(self):
        with pytest.raises(ConfigurationError, match="duplicate states"):
            Validator().validate_definition(make_definition(states=("open", "open", "closed")))

    def test_blank_state(self):
        with pytest.raises(ConfigurationError, match="blank state name"):
            Validator().validate_definition(make_definition(states=("open", "", "closed")))

    def test_initial_state_must_exist(self):
        with pytest.raises(ConfigurationError, match="Initial state 'pending'") as exc_info:
            Validator().validate_definition(make_definition(initial_state="pending"))
        assert exc_info.value.details == {"machine": "status", "state": "pending"}

    def test_unknown_source(self):
        events = {"close": Event("close", [Transition("pending", "closed")])}
        with pytest.raises(ConfigurationError, match="unknown state 'pending'"):
            Validator().validate_definition(make_definition(events=events))

    def test_unknown_target(self):
        events = {"close": Event("close", [Transition("open", "gone")])}
        with pytest.raises(ConfigurationError, match="targets unknown state 'gone'"):
            Validator().validate_definition(make_definition(events=events))

    def test_any_source_allowed(self):
        events = {"reset": Event("reset", [Transition(None, "open")])}
        Validator().validate_definition(make_definition(events=events))

    def test_guards_must_be_callable(self):
        events = {"close": Event("close", [Transition("open", "closed", ["not callable"])])}
        with pytest.raises(ConfigurationError, match="must be callable"):
            Validator().validate_definition(make_definition(events=events))


def test_builder_rejects_underscore_attribute():
    from fsmstore.core.builder import MachineBuilder

    with pytest.raises(ConfigurationError, match="invalid attribute name '_wf'"):
        MachineBuilder("workflow", attribute_name="_wf").states("a", "b").build()
