# fsmstore/core/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass


@dataclass(frozen=True)
class MachineConfig:
    """
    Per-machine behaviour switches consulted by the engine and the persistence
    layer.

    :param whiny_transitions: Raise InvalidTransition when an event cannot fire
        instead of returning False.
    :param whiny_persistence: Raise RecordInvalid when a persisted state write
        is rejected instead of returning False.
    :param skip_validation_on_save: Persist state writes through the
        single-field update path, bypassing record validation.
    """

    whiny_transitions: bool = True
    whiny_persistence: bool = False
    skip_validation_on_save: bool = False
