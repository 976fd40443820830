# fsmstore/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from fsmstore.interfaces.types import Guard, StateName


class Transition:
    """
    A path from a source state to a target state, allowed only when every guard
    returns a truthy value. A transition without a source applies from any
    state.
    """

    def __init__(
        self,
        source: Optional[StateName],
        target: StateName,
        guards: Optional[Sequence[Guard]] = None,
    ) -> None:
        """
        :param source: State the record must be in, or None for any state.
        :param target: State written when the transition is taken.
        :param guards: Callables receiving the record and the fire() arguments.
        """
        self._source = source
        self._target = target
        self._guards = list(guards) if guards else []

    @property
    def source(self) -> Optional[StateName]:
        return self._source

    @property
    def target(self) -> StateName:
        return self._target

    @property
    def guards(self) -> List[Guard]:
        return list(self._guards)

    def applies_from(self, state: Optional[StateName]) -> bool:
        """Whether this transition may start from ``state``."""
        return self._source is None or self._source == state

    def failed_guards(self, record: Any, *args: Any) -> List[str]:
        """
        Evaluate the guards against the record.

        :return: Names of the guards that rejected the transition, empty if allowed.
        """
        return _GuardEvaluator().evaluate(self._guards, record, *args)

    def allowed(self, record: Any, *args: Any) -> bool:
        return not self.failed_guards(record, *args)

    def __repr__(self) -> str:
        return f"Transition({self._source!r} -> {self._target!r})"


class _GuardEvaluator:
    """
    Internal helper to evaluate a list of guard conditions against a record.
    """

    def evaluate(self, guards: List[Guard], record: Any, *args: Any) -> List[str]:
        failures = []
        for g in guards:
            if not g(record, *args):
                failures.append(getattr(g, "__name__", repr(g)))
                # stop at the first rejection
                break
        return failures
