# fsmstore/persistence/orm.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import Any

from fsmstore.interfaces.types import DEFAULT_MACHINE, AttributeName, EventName, MachineName, StateName, TransitionBody
from fsmstore.persistence.base import BasePersistence

logger = logging.getLogger(__name__)


class ORMPersistence(BasePersistence):
    """
    Persistence shared by record/model frameworks. A state write is followed by
    a save (or a single-field update when the machine skips validation); if
    that is rejected the in-memory value is rolled back.

    Adapters implement the ``fsm_*`` hooks below.
    """

    def write_state(self, state: StateName, name: MachineName = DEFAULT_MACHINE) -> bool:
        """
        Write and persist a state.

        :return: True if the record accepted the write.
        :raises RecordInvalid: If the write was rejected and the machine has
            whiny persistence.
        """
        definition = self.fsm_definition(name)
        attribute = definition.attribute_name
        old_value = self.fsm_read_attribute(attribute)
        self.fsm_write_attribute(attribute, state)

        if definition.config.skip_validation_on_save:
            self.fsm_update_column(attribute, state)
            return True

        try:
            saved = self.fsm_save()
        except Exception:
            self.fsm_write_attribute(attribute, old_value)
            raise
        if saved:
            return True

        logger.warning(
            "%s rejected state %r for machine %r, restoring %r", type(self).__name__, state, name, old_value
        )
        self.fsm_write_attribute(attribute, old_value)
        if definition.config.whiny_persistence:
            self.fsm_raise_invalid_record()
        return False

    def fire_event(self, name: MachineName, event_name: EventName, body: TransitionBody) -> bool:
        if not self.fsm_supports_transactions():
            return body()
        with self.fsm_transaction():
            return body()

    # Adapter hooks

    def fsm_save(self) -> bool:
        raise NotImplementedError()

    def fsm_update_column(self, name: AttributeName, value: Any) -> None:
        raise NotImplementedError()

    def fsm_supports_transactions(self) -> bool:
        raise NotImplementedError()

    def fsm_transaction(self) -> AbstractContextManager:
        raise NotImplementedError()

    def fsm_raise_invalid_record(self) -> None:
        raise NotImplementedError()
