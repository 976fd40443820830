# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from fsmstore.core.builder import MachineBuilder
from fsmstore.core.config import MachineConfig
from fsmstore.core.store import StateMachineStore
from fsmstore.model.backend import MemoryBackend
from fsmstore.model.record import Record
from fsmstore.persistence.model import ModelPersistence


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "scenario: mark test as an end-to-end persistence scenario")


@pytest.fixture
def store():
    """An empty registry, one per test so registrations never leak."""
    return StateMachineStore()


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def status_builder():
    """Builder for a ticket workflow: open -> closed -> archived."""

    def _factory(**config):
        return (
            MachineBuilder("status", config=MachineConfig(**config))
            .state("open", initial=True)
            .state("closed")
            .state("archived")
            .event("close", "closed", source="open")
            .event("reopen", "open", source="closed")
            .event("archive", "archived", source=["open", "closed"])
        )

    return _factory


@pytest.fixture
def status_machine(status_builder):
    return status_builder().build()


@pytest.fixture
def ticket_class(store, backend, status_machine):
    """A record type declaring ``status`` as a field."""

    class Ticket(ModelPersistence, Record, store=store, backend=backend):
        fields = ("title", "status")

    store.register(Ticket, status_machine)
    return Ticket


@pytest.fixture
def dynamic_ticket_class(store, backend, status_machine):
    """A record type that never declares ``status``; it lives in the attribute bag."""

    class DynamicTicket(ModelPersistence, Record, store=store, backend=backend):
        fields = ("title",)

    store.register(DynamicTicket, status_machine)
    return DynamicTicket


@pytest.fixture
def require_title():
    def _check(record):
        if not record.title:
            return "title can't be blank"
        return None

    return _check
