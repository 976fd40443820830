# fsmstore/persistence/model.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any

from fsmstore.core.errors import RecordInvalid, UnresolvedAttributeError
from fsmstore.interfaces.types import AttributeName
from fsmstore.persistence.base import is_blank
from fsmstore.persistence.orm import ORMPersistence

logger = logging.getLogger(__name__)

ENSURE_INITIAL_STATE = "fsm_ensure_initial_state"


class ModelPersistence(ORMPersistence):
    """
    Persistence adapter for Record hosts. Mix it in ahead of the record class:

        class Ticket(ModelPersistence, Record, store=registry, backend=MemoryBackend()):
            fields = ("title",)

    Defining the class installs fsm_ensure_initial_state as the first
    before-validation hook, so every machine has a state before validations
    and saves run.

    Record types only generate accessors for their declared fields. A machine
    attribute that is not declared is kept in the record's ``attributes`` bag
    instead; any other undeclared name still fails with
    UnresolvedAttributeError.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        register = getattr(cls, "before_validation", None)
        hooks = getattr(cls, "_before_validation", None)
        if callable(register) and hooks is not None and ENSURE_INITIAL_STATE not in hooks:
            register(ENSURE_INITIAL_STATE, prepend=True)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        getter = getattr(super(), "__getattr__", None)
        if getter is not None:
            try:
                return getter(name)
            except AttributeError:
                if name not in type(self).fsm_machines().attribute_names():
                    raise
        elif name not in type(self).fsm_machines().attribute_names():
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        return self.__dict__.get("attributes", {}).get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except AttributeError as exc:
            if name not in type(self).fsm_machines().attribute_names():
                raise UnresolvedAttributeError(type(self), name) from exc
            logger.debug("%s declares no setter for %r, using the attribute bag", type(self).__name__, name)
            self.attributes[name] = value

    def fsm_ensure_initial_state(self) -> None:
        """
        Fill every blank machine attribute with that machine's initial state.
        Attributes that already hold a value, known state or not, are left as
        they are. Nothing is persisted.

            ticket = Ticket()
            ticket.status      # => None
            ticket.valid()
            ticket.status      # => "open"
        """
        for definition in type(self).fsm_machines():
            if is_blank(self.fsm_read_attribute(definition.attribute_name)):
                self.machine(definition.name).enter_initial_state()

    def fsm_read_attribute(self, name: AttributeName) -> Any:
        return getattr(self, name)

    def fsm_write_attribute(self, name: AttributeName, value: Any) -> None:
        setattr(self, name, value)

    def fsm_new_record(self) -> bool:
        return self.new_record

    def fsm_save(self) -> bool:
        return self.save()

    def fsm_update_column(self, name: AttributeName, value: Any) -> None:
        self.fsm_write_attribute(name, value)
        self.update_attributes({name: value})

    def fsm_supports_transactions(self) -> bool:
        return False

    def fsm_raise_invalid_record(self) -> None:
        raise RecordInvalid(self)
